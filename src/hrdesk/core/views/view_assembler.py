"""
Read views for HR staff and applicants.

Composes job catalog and application store results into the shapes
callers receive. Holds no state and performs no writes.
"""

from typing import Optional

from bson import ObjectId

from hrdesk.core.access import CallerContext, require_authenticated, require_role
from hrdesk.core.lifecycle.lifecycle_controller import compute_progress
from hrdesk.data.models.application import (
    ApplicationPage,
    ApplicationView,
    MyApplicationsPage,
    ProgressEntry,
)
from hrdesk.data.models.job import JobListing
from hrdesk.data.repositories.application_repository import (
    ApplicationRepository,
    ApplicationScope,
)
from hrdesk.data.repositories.job_repository import JobRepository
from hrdesk.utils.config import PaginationSettings, get_settings
from hrdesk.utils.constants import Role, SortOrder


def build_progress_entries(items: list[ApplicationView]) -> list[ProgressEntry]:
    """One progress entry per application, in the same order."""
    return [
        ProgressEntry(
            job_id=item.job.id if item.job else None,
            title=item.job.title if item.job else None,
            progress=compute_progress(item.interview_rounds),
        )
        for item in items
    ]


class ViewAssembler:
    """Builds the job listing, HR and applicant application views."""

    def __init__(
        self,
        jobs: Optional[JobRepository] = None,
        applications: Optional[ApplicationRepository] = None,
        pagination: Optional[PaginationSettings] = None,
    ) -> None:
        self._jobs = jobs or JobRepository()
        self._applications = applications or ApplicationRepository(job_repository=self._jobs)
        self._pagination = pagination or get_settings().pagination

    def _page_args(self, page: Optional[int], limit: Optional[int]) -> tuple[int, int]:
        return (
            self._pagination.default_page if page is None else page,
            self._pagination.default_limit if limit is None else limit,
        )

    # -------------------------------------------------------------------------
    # Job Listing
    # -------------------------------------------------------------------------

    def list_jobs(
        self,
        caller: CallerContext,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: str | SortOrder | None = SortOrder.ASC,
    ) -> list[JobListing]:
        """All jobs matching the search, each with its application count."""
        require_authenticated(caller, "list_jobs")
        return self._jobs.list_with_counts(search, sort_by, sort_order)

    async def list_jobs_async(
        self,
        caller: CallerContext,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: str | SortOrder | None = SortOrder.ASC,
    ) -> list[JobListing]:
        require_authenticated(caller, "list_jobs")
        return await self._jobs.list_with_counts_async(search, sort_by, sort_order)

    # -------------------------------------------------------------------------
    # HR View
    # -------------------------------------------------------------------------

    def list_job_applications(
        self,
        caller: CallerContext,
        job_id: str | ObjectId,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> ApplicationPage:
        """One page of a job's applications. HR only."""
        require_role(caller, Role.HR, "list_job_applications")
        page, limit = self._page_args(page, limit)
        return self._applications.list_page(ApplicationScope.by_job(job_id), page, limit)

    async def list_job_applications_async(
        self,
        caller: CallerContext,
        job_id: str | ObjectId,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> ApplicationPage:
        require_role(caller, Role.HR, "list_job_applications")
        page, limit = self._page_args(page, limit)
        return await self._applications.list_page_async(
            ApplicationScope.by_job(job_id), page, limit
        )

    # -------------------------------------------------------------------------
    # Applicant View
    # -------------------------------------------------------------------------

    def list_my_applications(
        self,
        caller: CallerContext,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> MyApplicationsPage:
        """
        One page of the caller's own applications. Applicants only.

        ``progress`` holds one entry per returned application, aligned
        with ``items`` by position.
        """
        require_role(caller, Role.USER, "list_my_applications")
        page, limit = self._page_args(page, limit)
        result = self._applications.list_page(
            ApplicationScope.by_user(caller.user_id), page, limit
        )
        return self._with_progress(result)

    async def list_my_applications_async(
        self,
        caller: CallerContext,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> MyApplicationsPage:
        require_role(caller, Role.USER, "list_my_applications")
        page, limit = self._page_args(page, limit)
        result = await self._applications.list_page_async(
            ApplicationScope.by_user(caller.user_id), page, limit
        )
        return self._with_progress(result)

    @staticmethod
    def _with_progress(result: ApplicationPage) -> MyApplicationsPage:
        return MyApplicationsPage(
            items=result.items,
            total=result.total,
            page=result.page,
            limit=result.limit,
            progress=build_progress_entries(result.items),
        )


# Singleton instance
_view_assembler: Optional[ViewAssembler] = None


def get_view_assembler() -> ViewAssembler:
    """Get the view assembler singleton instance."""
    global _view_assembler
    if _view_assembler is None:
        _view_assembler = ViewAssembler()
    return _view_assembler
