"""
Application repository for HR Desk.

Provides data access operations for application documents, including
paginated retrieval scoped by job or by applicant and the two
single-field mutations the lifecycle controller performs.
"""

from dataclasses import dataclass
from typing import Any, Optional

from bson import ObjectId
from pydantic import ValidationError as PydanticValidationError

from hrdesk.core.errors import ValidationError, validation_error_from_pydantic
from hrdesk.data.database import DatabaseManager
from hrdesk.data.models.application import (
    Application,
    ApplicationCreate,
    ApplicationPage,
    ApplicationView,
    PageRequest,
)
from hrdesk.data.models.job import JobSummary
from hrdesk.utils.constants import APPLICATIONS_COLLECTION, ApplicationStatus
from hrdesk.utils.logger import get_logger

from .base import BaseRepository
from .job_repository import JobRepository

logger = get_logger(__name__)

# Fields returned to callers; job_id is kept for the join
VIEW_PROJECTION = {
    "job_id": 1,
    "candidate_name": 1,
    "candidate_email": 1,
    "status": 1,
    "applied_date": 1,
    "resume": 1,
    "interview_rounds": 1,
}


@dataclass(frozen=True)
class ApplicationScope:
    """Selects the applications a paginated query targets: one job or one applicant."""

    job_id: Optional[str | ObjectId] = None
    user_id: Optional[str | ObjectId] = None

    def __post_init__(self) -> None:
        if (self.job_id is None) == (self.user_id is None):
            raise ValidationError("Exactly one of job_id or user_id must be given")

    @classmethod
    def by_job(cls, job_id: str | ObjectId) -> "ApplicationScope":
        return cls(job_id=job_id)

    @classmethod
    def by_user(cls, user_id: str | ObjectId) -> "ApplicationScope":
        return cls(user_id=user_id)

    @property
    def field(self) -> str:
        return "job_id" if self.job_id is not None else "user_id"

    @property
    def value(self) -> str | ObjectId:
        return self.job_id if self.job_id is not None else self.user_id


def validate_pagination(page: Any, limit: Any) -> tuple[int, int]:
    """Check page and limit against the bounds of ``PageRequest``."""
    try:
        request = PageRequest(page=page, limit=limit)
    except PydanticValidationError as e:
        raise validation_error_from_pydantic(e, "Invalid pagination parameters") from None
    return request.page, request.limit


class ApplicationRepository(BaseRepository[Application]):
    """Repository for application document operations."""

    def __init__(
        self,
        db_manager: Optional[DatabaseManager] = None,
        job_repository: Optional[JobRepository] = None,
    ) -> None:
        super().__init__(db_manager)
        self._jobs = job_repository or JobRepository(self._db_manager)

    @property
    def collection_name(self) -> str:
        return APPLICATIONS_COLLECTION

    @property
    def model_class(self) -> type[Application]:
        return Application

    # -------------------------------------------------------------------------
    # Create Operations
    # -------------------------------------------------------------------------

    def create_from_schema(self, data: ApplicationCreate) -> Application:
        """Create an application from a create schema."""
        application = Application(**data.model_dump())
        return self.create(application)

    async def create_from_schema_async(self, data: ApplicationCreate) -> Application:
        """Create an application from a create schema asynchronously."""
        application = Application(**data.model_dump())
        return await self.create_async(application)

    # -------------------------------------------------------------------------
    # Update Operations
    # -------------------------------------------------------------------------

    def set_status(
        self, id_value: str | ObjectId, status: ApplicationStatus | str
    ) -> Optional[ApplicationView]:
        """Overwrite an application's status. None when the ID does not resolve."""
        updated = self.update(id_value, {"status": ApplicationStatus(status).value})
        return self._view_of(updated)

    async def set_status_async(
        self, id_value: str | ObjectId, status: ApplicationStatus | str
    ) -> Optional[ApplicationView]:
        """Overwrite an application's status asynchronously."""
        updated = await self.update_async(id_value, {"status": ApplicationStatus(status).value})
        return await self._view_of_async(updated)

    def set_interview_rounds(
        self, id_value: str | ObjectId, rounds: int
    ) -> Optional[ApplicationView]:
        """Overwrite an application's interview rounds. None when the ID does not resolve."""
        updated = self.update(id_value, {"interview_rounds": rounds})
        return self._view_of(updated)

    async def set_interview_rounds_async(
        self, id_value: str | ObjectId, rounds: int
    ) -> Optional[ApplicationView]:
        """Overwrite an application's interview rounds asynchronously."""
        updated = await self.update_async(id_value, {"interview_rounds": rounds})
        return await self._view_of_async(updated)

    # -------------------------------------------------------------------------
    # Paginated Queries
    # -------------------------------------------------------------------------

    def list_page(self, scope: ApplicationScope, page: int, limit: int) -> ApplicationPage:
        """
        Get one page of applications for a job or an applicant.

        Args:
            scope: Which job or applicant the applications belong to
            page: 1-based page number
            limit: Page size

        Returns:
            The page's application views and the total matching count.
            An unknown or malformed ID yields an empty page.
        """
        page, limit = validate_pagination(page, limit)
        object_id = self._parse_object_id(scope.value)
        if object_id is None:
            return ApplicationPage(items=[], total=0, page=page, limit=limit)

        query = {scope.field: object_id}
        collection = self._get_sync_collection()
        with self._store_errors("find"):
            documents = list(
                collection.find(query, VIEW_PROJECTION)
                .sort("_id", 1)
                .skip((page - 1) * limit)
                .limit(limit)
            )
            total = collection.count_documents(query)

        jobs = self._jobs.get_summaries([doc["job_id"] for doc in documents])
        items = [self._build_view(doc, jobs) for doc in documents]
        return ApplicationPage(items=items, total=total, page=page, limit=limit)

    async def list_page_async(
        self, scope: ApplicationScope, page: int, limit: int
    ) -> ApplicationPage:
        """Get one page of applications for a job or an applicant asynchronously."""
        page, limit = validate_pagination(page, limit)
        object_id = self._parse_object_id(scope.value)
        if object_id is None:
            return ApplicationPage(items=[], total=0, page=page, limit=limit)

        query = {scope.field: object_id}
        collection = self._get_async_collection()
        with self._store_errors("find"):
            cursor = collection.find(
                query,
                VIEW_PROJECTION,
                sort=[("_id", 1)],
                skip=(page - 1) * limit,
                limit=limit,
            )
            documents = await cursor.to_list(length=limit)
            total = await collection.count_documents(query)

        jobs = await self._jobs.get_summaries_async([doc["job_id"] for doc in documents])
        items = [self._build_view(doc, jobs) for doc in documents]
        return ApplicationPage(items=items, total=total, page=page, limit=limit)

    # -------------------------------------------------------------------------
    # View Assembly
    # -------------------------------------------------------------------------

    @staticmethod
    def _build_view(
        document: dict[str, Any], jobs: dict[Any, dict[str, Any]]
    ) -> ApplicationView:
        """Join an application document with its job's display fields."""
        data = {key: value for key, value in document.items() if key != "job_id"}
        job = jobs.get(document.get("job_id"))
        data["job"] = JobSummary.model_validate(job) if job else None
        return ApplicationView.model_validate(data)

    def _view_of(self, application: Optional[Application]) -> Optional[ApplicationView]:
        if application is None:
            return None
        jobs = self._jobs.get_summaries([application.job_id])
        return self._build_view(application.model_dump(by_alias=True), jobs)

    async def _view_of_async(
        self, application: Optional[Application]
    ) -> Optional[ApplicationView]:
        if application is None:
            return None
        jobs = await self._jobs.get_summaries_async([application.job_id])
        return self._build_view(application.model_dump(by_alias=True), jobs)
