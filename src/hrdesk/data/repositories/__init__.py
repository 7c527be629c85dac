"""
Database repositories for HR Desk data access.

This module provides repository classes for all database collections,
implementing the repository pattern for clean data access.
"""

# Base repository
from .base import BaseRepository, store_errors

# Entity repositories
from .job_repository import JobRepository
from .application_repository import (
    ApplicationRepository,
    ApplicationScope,
    validate_pagination,
)

__all__ = [
    # Base
    "BaseRepository",
    "store_errors",
    # Job
    "JobRepository",
    # Application
    "ApplicationRepository",
    "ApplicationScope",
    "validate_pagination",
]
