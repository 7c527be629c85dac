"""
Pydantic data models and schemas for HR Desk.

This module provides all data models used throughout the application,
including database documents, update payloads and read views.
"""

# Base models
from .base import BaseDocument, EmbeddedModel, PyObjectId, utcnow

# Job models
from .job import Job, JobCreate, JobListing, JobSummary

# Application models
from .application import (
    Application,
    ApplicationCreate,
    ApplicationPage,
    ApplicationProgressView,
    ApplicationView,
    InterviewProgressUpdate,
    MyApplicationsPage,
    PageRequest,
    ProgressEntry,
    StatusUpdate,
)

__all__ = [
    # Base
    "BaseDocument",
    "EmbeddedModel",
    "PyObjectId",
    "utcnow",
    # Job
    "Job",
    "JobCreate",
    "JobListing",
    "JobSummary",
    # Application
    "Application",
    "ApplicationCreate",
    "ApplicationPage",
    "ApplicationProgressView",
    "ApplicationView",
    "InterviewProgressUpdate",
    "MyApplicationsPage",
    "PageRequest",
    "ProgressEntry",
    "StatusUpdate",
]
