"""Shared fixtures for the resume pipeline tests."""

import pytest

from app.models import PersonalInfo, ResumeData
from app.services.resume_storage import InMemoryKeyValueStore, ResumeStorage


@pytest.fixture(autouse=True)
def _isolate_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer .env values from leaking into tests."""
    for key in ("SUPABASE_URL", "SUPABASE_ANON_KEY", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def storage(store):
    return ResumeStorage(store)


@pytest.fixture
def complete_resume():
    return ResumeData(
        personal_info=PersonalInfo(
            name="Jane Smith",
            email="jane@example.com",
            phone="555-123-4567",
            location="Austin, TX",
        ),
        work_experience=[
            {
                "jobTitle": "Electrician",
                "companyName": "Bright Co",
                "startDate": "2019-04",
                "isCurrent": True,
            }
        ],
        skills=["Wiring", "Blueprint reading"],
        education=[
            {"institutionName": "Austin Community College", "degreeOrProgram": "AAS"}
        ],
        certifications=["OSHA 30"],
    )
