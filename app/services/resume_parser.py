"""
Normalizes resume payloads sent by the Botpress webchat.

The bot collects answers over a conversation and posts whatever it gathered,
so any field may be missing, nested differently or have the wrong type.
``parse_botpress_data`` never raises: it always returns a fully-defaulted
``ResumeData``.
"""
from typing import Any, List, Mapping

from app.models import PersonalInfo, ResumeData

PERSONAL_INFO_FIELDS = ("name", "email", "phone", "location")


def _as_mapping(value: Any) -> Mapping:
    return value if isinstance(value, Mapping) else {}


def _text(value: Any) -> str:
    """Truthy strings as-is, truthy numbers stringified, anything else empty."""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value:
        return str(value)
    return ""


def parse_personal_info(raw: Mapping) -> PersonalInfo:
    nested = _as_mapping(raw.get("personalInfo"))
    fields = {}
    for field in PERSONAL_INFO_FIELDS:
        # Nested value wins, top-level is the fallback
        fields[field] = _text(nested.get(field)) or _text(raw.get(field))
    return PersonalInfo(**fields)


def parse_string_list(value: Any) -> List[str]:
    """
    Skills and certifications arrive either as a list or as one
    comma-separated string.
    """
    if isinstance(value, (list, tuple)):
        return [item for item in value if isinstance(item, str) and item.strip()]
    if isinstance(value, str):
        return [piece.strip() for piece in value.split(",") if piece.strip()]
    return []


def _pass_through_list(value: Any) -> List[Any]:
    # Entries are deliberately left untouched
    return list(value) if isinstance(value, (list, tuple)) else []


def parse_botpress_data(raw_data: Any) -> ResumeData:
    raw = _as_mapping(raw_data)
    return ResumeData(
        personal_info=parse_personal_info(raw),
        work_experience=_pass_through_list(raw.get("workExperience")),
        skills=parse_string_list(raw.get("skills")),
        education=_pass_through_list(raw.get("education")),
        certifications=parse_string_list(raw.get("certifications")),
    )
