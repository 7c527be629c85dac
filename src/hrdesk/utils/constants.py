"""
Application-wide constants for HR Desk.

This module contains all constant values used throughout the application.
Modify these values to customize behavior without changing code logic.
"""

from enum import Enum
from typing import Final


# =============================================================================
# Collections
# =============================================================================

JOBS_COLLECTION: Final[str] = "jobs"
APPLICATIONS_COLLECTION: Final[str] = "applications"


# =============================================================================
# Interview Progress
# =============================================================================

MIN_INTERVIEW_ROUNDS: Final[int] = 0
MAX_INTERVIEW_ROUNDS: Final[int] = 4


# =============================================================================
# Pagination
# =============================================================================

MAX_PAGE_LIMIT: Final[int] = 100

# Keeps skip = (page - 1) * limit well inside a signed 64-bit integer
MAX_PAGE_NUMBER: Final[int] = 1_000_000


# =============================================================================
# Job Listing Sort
# =============================================================================

# Accepted sort keys mapped to stored field names
JOB_SORT_FIELDS: Final[dict[str, str]] = {
    "title": "title",
    "department": "department",
    "location": "location",
    "posted_date": "posted_date",
    "postedDate": "posted_date",
    "total_applications": "total_applications",
    "totalApplications": "total_applications",
}

DEFAULT_JOB_SORT_FIELD: Final[str] = "posted_date"


# =============================================================================
# Enums
# =============================================================================


class ApplicationStatus(str, Enum):
    """Status of an application. Any status may follow any other."""

    APPLIED = "Applied"
    UNDER_REVIEW = "Under Review"
    INTERVIEW = "Interview"
    REJECTED = "Rejected"
    HIRED = "Hired"


class Role(str, Enum):
    """Caller role supplied by the auth collaborator."""

    HR = "hr"
    USER = "user"


class SortOrder(str, Enum):
    """Sort direction for job listings."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def from_value(cls, value: "str | SortOrder | None") -> "SortOrder":
        """Absent means ascending; any other value than ``asc`` sorts descending."""
        if value is None or value == cls.ASC or value == cls.ASC.value:
            return cls.ASC
        return cls.DESC

    @property
    def direction(self) -> int:
        """MongoDB sort direction."""
        return 1 if self is SortOrder.ASC else -1


class AuditAction(str, Enum):
    """Types of actions that can be audited."""

    APPLICATION_STATUS_CHANGED = "application_status_changed"
    APPLICATION_PROGRESS_CHANGED = "application_progress_changed"
    ACCESS_DENIED = "access_denied"
