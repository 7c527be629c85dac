"""
Sample data for local development.

Resets the job and application collections and loads one job with two
applications owned by the same applicant.
"""

from dataclasses import dataclass, field

from bson import ObjectId

from hrdesk.data.models.application import Application, ApplicationCreate
from hrdesk.data.models.job import Job, JobCreate
from hrdesk.data.repositories.application_repository import ApplicationRepository
from hrdesk.data.repositories.job_repository import JobRepository
from hrdesk.utils.constants import ApplicationStatus
from hrdesk.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class SeedResult:
    """IDs created by a seed run."""

    hr_user_id: ObjectId
    applicant_user_id: ObjectId
    job: Job
    applications: list[Application] = field(default_factory=list)


def seed_sample_data(
    jobs: JobRepository,
    applications: ApplicationRepository,
) -> SeedResult:
    """Replace all jobs and applications with the sample data set."""
    applications.delete_all()
    jobs.delete_all()

    hr_user_id = ObjectId()
    applicant_user_id = ObjectId()

    job = jobs.create_from_schema(
        JobCreate(title="Product Manager", department="Product", location="On-site")
    )

    created = [
        applications.create_from_schema(
            ApplicationCreate(
                job_id=job.id,
                user_id=applicant_user_id,
                candidate_name="Chris Lee",
                candidate_email="chris@example.com",
                resume="http://example.com/resume_chris.pdf",
                status=ApplicationStatus.APPLIED,
                interview_rounds=0,
            )
        ),
        applications.create_from_schema(
            ApplicationCreate(
                job_id=job.id,
                user_id=applicant_user_id,
                candidate_name="Diana Chen",
                candidate_email="diana@example.com",
                resume="http://example.com/resume_diana.pdf",
                status=ApplicationStatus.UNDER_REVIEW,
                interview_rounds=1,
            )
        ),
    ]

    logger.info(f"Seeded job {job.id} with {len(created)} applications")
    return SeedResult(
        hr_user_id=hr_user_id,
        applicant_user_id=applicant_user_id,
        job=job,
        applications=created,
    )
