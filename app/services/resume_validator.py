from typing import List

from app.models import ResumeData, ValidationResult


def _is_blank(value: str) -> bool:
    return not value or value.strip() == ""


def validate_resume_data(data: ResumeData) -> ValidationResult:
    """Checks the minimum a resume needs before it can be submitted."""
    errors: List[str] = []

    if _is_blank(data.personal_info.name):
        errors.append("Name is required")

    if _is_blank(data.personal_info.email):
        errors.append("Email is required")

    if len(data.work_experience) == 0:
        errors.append("At least one work experience is required")

    if len(data.skills) == 0:
        errors.append("At least one skill is required")

    return ValidationResult(valid=len(errors) == 0, errors=errors)
