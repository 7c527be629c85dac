"""
Application data models for HR Desk.

Defines the stored application document, the two validated update
payloads, and the read views handed back to HR staff and applicants.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from hrdesk.utils.constants import (
    MAX_INTERVIEW_ROUNDS,
    MAX_PAGE_LIMIT,
    MAX_PAGE_NUMBER,
    MIN_INTERVIEW_ROUNDS,
    ApplicationStatus,
)

from .base import BaseDocument, EmbeddedModel, PyObjectId, utcnow
from .job import JobSummary


class Application(BaseDocument):
    """
    Application document.

    job_id, user_id, candidate details and applied_date are fixed at
    submission; only status and interview_rounds change afterwards.
    """

    job_id: PyObjectId
    user_id: PyObjectId
    candidate_name: str = Field(..., min_length=1)
    candidate_email: str = Field(..., min_length=1)
    resume: Optional[str] = None
    status: ApplicationStatus = ApplicationStatus.APPLIED
    interview_rounds: int = Field(
        default=MIN_INTERVIEW_ROUNDS, ge=MIN_INTERVIEW_ROUNDS, le=MAX_INTERVIEW_ROUNDS
    )
    applied_date: datetime = Field(default_factory=utcnow)


class ApplicationCreate(BaseModel):
    """Schema for submitting a new application."""

    job_id: PyObjectId
    user_id: PyObjectId
    candidate_name: str = Field(..., min_length=1)
    candidate_email: str = Field(..., min_length=1)
    resume: Optional[str] = None
    status: ApplicationStatus = ApplicationStatus.APPLIED
    interview_rounds: int = Field(
        default=MIN_INTERVIEW_ROUNDS, ge=MIN_INTERVIEW_ROUNDS, le=MAX_INTERVIEW_ROUNDS
    )


class StatusUpdate(BaseModel):
    """Payload for changing an application's status."""

    model_config = ConfigDict(use_enum_values=True)

    status: ApplicationStatus


class InterviewProgressUpdate(BaseModel):
    """Payload for changing an application's completed interview rounds."""

    interview_rounds: StrictInt = Field(ge=MIN_INTERVIEW_ROUNDS, le=MAX_INTERVIEW_ROUNDS)


class PageRequest(EmbeddedModel):
    """Requested page of a paginated listing. Both values are 1-based integers."""

    page: StrictInt = Field(ge=1, le=MAX_PAGE_NUMBER)
    limit: StrictInt = Field(ge=1, le=MAX_PAGE_LIMIT)


# =============================================================================
# Read Views
# =============================================================================


class ApplicationView(EmbeddedModel):
    """An application as shown to callers, with its job's display fields."""

    id: PyObjectId = Field(alias="_id")
    job: Optional[JobSummary] = None
    candidate_name: str
    candidate_email: str
    status: ApplicationStatus
    applied_date: datetime
    resume: Optional[str] = None
    interview_rounds: int


class ApplicationProgressView(ApplicationView):
    """Application view returned by an interview progress update."""

    progress: float


class ApplicationPage(EmbeddedModel):
    """One page of applications plus the size of the full result set."""

    items: list[ApplicationView] = Field(default_factory=list)
    total: int = 0
    page: int
    limit: int


class ProgressEntry(EmbeddedModel):
    """Interview progress of one application, as a percentage."""

    job_id: Optional[PyObjectId] = None
    title: Optional[str] = None
    progress: float


class MyApplicationsPage(ApplicationPage):
    """An applicant's page of applications with aligned progress entries."""

    progress: list[ProgressEntry] = Field(default_factory=list)
