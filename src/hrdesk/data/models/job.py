"""
Job posting data models for HR Desk.

Defines the stored job posting document and the listing shape
returned with its derived application count.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .base import BaseDocument, EmbeddedModel, PyObjectId, utcnow


class Job(BaseDocument):
    """
    Job posting document.

    Created by HR outside the core; the core only reads and aggregates it.
    """

    title: str = Field(..., min_length=1, max_length=200)
    department: str = Field(..., min_length=1, max_length=200)
    location: Optional[str] = None
    posted_date: datetime = Field(default_factory=utcnow)

    @field_validator("title", "department")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Title and department must contain more than whitespace."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v


class JobCreate(BaseModel):
    """Schema for creating a new job posting."""

    title: str = Field(..., min_length=1, max_length=200)
    department: str = Field(..., min_length=1, max_length=200)
    location: Optional[str] = None
    posted_date: Optional[datetime] = None


class JobSummary(EmbeddedModel):
    """Job fields joined into application views for display."""

    id: PyObjectId = Field(alias="_id")
    title: str
    department: str


class JobListing(EmbeddedModel):
    """A job posting with the number of applications referencing it."""

    id: PyObjectId = Field(alias="_id")
    title: str
    department: str
    location: Optional[str] = None
    posted_date: datetime
    total_applications: int = Field(default=0, ge=0)
