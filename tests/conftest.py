"""
Shared test fixtures for the HR Desk test suite.

Sets environment variables before any hrdesk imports to prevent config failures,
then installs in-memory MongoDB clients and provides repository, controller
and factory fixtures.
"""

import os

# === Set environment BEFORE any hrdesk imports ===
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("DB_NAME", "hr_desk_test")
os.environ.setdefault("LOG_FILE_OUTPUT", "false")

from datetime import datetime, timedelta
from typing import Any, Optional

import mongomock
import pytest
from bson import ObjectId
from loguru import logger
from mongomock_motor import AsyncMongoMockClient

from hrdesk.core.access import CallerContext
from hrdesk.core.lifecycle import LifecycleController
from hrdesk.core.views import ViewAssembler
from hrdesk.data.database import get_database_manager
from hrdesk.data.models import Application, Job
from hrdesk.data.repositories import ApplicationRepository, JobRepository
from hrdesk.utils.config import PaginationSettings
from hrdesk.utils.constants import ApplicationStatus, Role
from hrdesk.utils.logger import is_audit_record


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest.fixture
def db_manager():
    """Database manager backed by fresh in-memory sync and async clients."""
    manager = get_database_manager()
    manager.use_clients(
        sync_client=mongomock.MongoClient(),
        async_client=AsyncMongoMockClient(),
    )
    yield manager
    manager.use_clients(None, None)


@pytest.fixture
def job_repo(db_manager):
    return JobRepository(db_manager)


@pytest.fixture
def application_repo(db_manager, job_repo):
    return ApplicationRepository(db_manager, job_repository=job_repo)


@pytest.fixture
def controller(application_repo):
    return LifecycleController(application_repo)


@pytest.fixture
def assembler(job_repo, application_repo):
    return ViewAssembler(
        jobs=job_repo,
        applications=application_repo,
        pagination=PaginationSettings(default_page=1, default_limit=10),
    )


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture
def audit_records():
    """Loguru records written through audit_log during the test."""
    records = []
    sink_id = logger.add(
        lambda message: records.append(message.record),
        filter=is_audit_record,
        level="INFO",
    )
    yield records
    logger.remove(sink_id)


# ---------------------------------------------------------------------------
# Callers
# ---------------------------------------------------------------------------


@pytest.fixture
def hr_caller():
    return CallerContext(user_id=str(ObjectId()), role=Role.HR)


@pytest.fixture
def applicant_id():
    return ObjectId()


@pytest.fixture
def user_caller(applicant_id):
    return CallerContext(user_id=str(applicant_id), role=Role.USER)


# ---------------------------------------------------------------------------
# Factory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_job(job_repo):
    """Factory that stores a job and returns it."""

    def _factory(
        title: str = "Backend Engineer",
        department: str = "Engineering",
        location: Optional[str] = "Remote",
        posted_date: Optional[datetime] = None,
    ) -> Job:
        job = Job(
            title=title,
            department=department,
            location=location,
            posted_date=posted_date or datetime(2024, 1, 1),
        )
        return job_repo.create(job)

    return _factory


@pytest.fixture
def make_application(application_repo):
    """Factory that stores an application and returns it."""

    def _factory(
        job_id: ObjectId,
        user_id: Optional[ObjectId] = None,
        candidate_name: str = "Jane Smith",
        candidate_email: str = "jane.smith@example.com",
        status: ApplicationStatus = ApplicationStatus.APPLIED,
        interview_rounds: int = 0,
        **kwargs: Any,
    ) -> Application:
        application = Application(
            job_id=job_id,
            user_id=user_id or ObjectId(),
            candidate_name=candidate_name,
            candidate_email=candidate_email,
            status=status,
            interview_rounds=interview_rounds,
            **kwargs,
        )
        return application_repo.create(application)

    return _factory


@pytest.fixture
def product_manager_job(make_job, make_application, applicant_id):
    """The sample "Product Manager" job with two applications from one applicant."""
    job = make_job(title="Product Manager", department="Product", location="On-site")
    first = make_application(
        job.id,
        user_id=applicant_id,
        candidate_name="Chris Lee",
        candidate_email="chris@example.com",
        resume="http://example.com/resume_chris.pdf",
    )
    second = make_application(
        job.id,
        user_id=applicant_id,
        candidate_name="Diana Chen",
        candidate_email="diana@example.com",
        resume="http://example.com/resume_diana.pdf",
        status=ApplicationStatus.UNDER_REVIEW,
        interview_rounds=1,
    )
    return job, first, second


@pytest.fixture
def dated_jobs(make_job):
    """Three jobs posted on consecutive days, oldest first."""
    base = datetime(2024, 3, 1)
    return [
        make_job(title="Data Analyst", department="Finance", location="Boston", posted_date=base),
        make_job(title="Account Executive", department="Sales", location="Austin", posted_date=base + timedelta(days=1)),
        make_job(title="Cloud Engineer", department="Engineering", location=None, posted_date=base + timedelta(days=2)),
    ]
