from typing import Any, List, Literal, Optional
from pydantic import BaseModel, Field


class PersonalInfo(BaseModel):
    name: str = ""
    email: str = ""
    phone: Optional[str] = ""
    location: Optional[str] = ""


class WorkExperience(BaseModel):
    job_title: str = Field(alias="jobTitle", default="")
    company_name: str = Field(alias="companyName", default="")
    location: Optional[str] = None
    start_date: str = Field(alias="startDate", default="")
    end_date: Optional[str] = Field(alias="endDate", default=None)
    is_current: Optional[bool] = Field(alias="isCurrent", default=None)
    description: Optional[str] = None

    class Config:
        populate_by_name = True
        extra = "allow"  # Chatbot payloads may carry extra keys


class Education(BaseModel):
    institution_name: str = Field(alias="institutionName", default="")
    degree_or_program: str = Field(alias="degreeOrProgram", default="")
    field_of_study: Optional[str] = Field(alias="fieldOfStudy", default=None)
    start_date: Optional[str] = Field(alias="startDate", default=None)
    end_date: Optional[str] = Field(alias="endDate", default=None)
    is_current: Optional[bool] = Field(alias="isCurrent", default=None)

    class Config:
        populate_by_name = True
        extra = "allow"


class ResumeData(BaseModel):
    """
    Canonical resume record.

    Work experience and education entries are kept exactly as the chatbot sent
    them, so they are typed loosely here. ``WorkExperience`` and ``Education``
    describe the expected shape and are enforced only on reviewed edits.
    """

    personal_info: PersonalInfo = Field(alias="personalInfo", default_factory=PersonalInfo)
    work_experience: List[Any] = Field(alias="workExperience", default_factory=list)
    skills: List[str] = Field(default_factory=list)
    education: List[Any] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class ResumeReview(BaseModel):
    """Pending record as edited by the user before saving."""

    personal_info: PersonalInfo = Field(alias="personalInfo", default_factory=PersonalInfo)
    work_experience: List[WorkExperience] = Field(alias="workExperience", default_factory=list)
    skills: List[str] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True

    def to_resume_data(self) -> ResumeData:
        return ResumeData(
            personal_info=self.personal_info,
            work_experience=[
                entry.model_dump(by_alias=True, exclude_none=True)
                for entry in self.work_experience
            ],
            skills=self.skills,
            education=[
                entry.model_dump(by_alias=True, exclude_none=True)
                for entry in self.education
            ],
            certifications=self.certifications,
        )


class ValidationResult(BaseModel):
    valid: bool
    errors: List[str] = []


class SaveResult(BaseModel):
    success: bool
    resume_id: Optional[str] = Field(alias="resumeId", default=None)
    error: Optional[str] = None

    class Config:
        populate_by_name = True


class Notification(BaseModel):
    message: str
    type: Literal["success", "error", "info"]
    resume_id: Optional[str] = Field(alias="resumeId", default=None)

    class Config:
        populate_by_name = True


# Request/response bodies for the chatbot routes
class SaveResumeRequest(BaseModel):
    user_id: Optional[str] = Field(alias="userId", default=None)

    class Config:
        populate_by_name = True


class WidgetEventResponse(BaseModel):
    handled: bool
    notification: Optional[Notification] = None


class PendingResumeResponse(BaseModel):
    ready: bool
    resume_data: ResumeData = Field(alias="resumeData")
    validation: ValidationResult

    class Config:
        populate_by_name = True


class ResumeCard(BaseModel):
    id: str
    title: str
    created_at: str = Field(alias="createdAt")
    file_size: str = Field(alias="fileSize", default="-")
    status: str = "draft"

    class Config:
        populate_by_name = True
