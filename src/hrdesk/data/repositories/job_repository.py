"""
Job repository for HR Desk.

Provides data access operations for job posting documents,
including keyword search, sorting, and per-job application counts.
"""

import re
from typing import Any, Optional

from hrdesk.data.models.job import Job, JobCreate, JobListing
from hrdesk.data.models.base import utcnow
from hrdesk.utils.constants import (
    APPLICATIONS_COLLECTION,
    DEFAULT_JOB_SORT_FIELD,
    JOB_SORT_FIELDS,
    JOBS_COLLECTION,
    SortOrder,
)
from hrdesk.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)

SEARCH_FIELDS = ("title", "department", "location")


def build_search_query(search: Optional[str]) -> dict[str, Any]:
    """
    Build the match stage for a keyword search.

    A job matches when any searchable field contains the text,
    case-insensitively. The text is matched literally.
    """
    if not search:
        return {}
    pattern = re.escape(search)
    return {
        "$or": [
            {field: {"$regex": pattern, "$options": "i"}} for field in SEARCH_FIELDS
        ]
    }


def build_sort_spec(
    sort_by: Optional[str], sort_order: str | SortOrder | None = SortOrder.ASC
) -> dict[str, int]:
    """
    Build the sort stage for a job listing.

    Unsupported or absent fields fall back to newest first. ``_id`` is
    appended as a tie-breaker so equal keys keep a stable order.
    """
    field = JOB_SORT_FIELDS.get(sort_by) if sort_by else None
    if field is None:
        if sort_by:
            logger.debug(f"Unsupported job sort field '{sort_by}', using default sort")
        return {DEFAULT_JOB_SORT_FIELD: -1, "_id": -1}
    direction = SortOrder.from_value(sort_order).direction
    return {field: direction, "_id": direction}


def build_listing_pipeline(
    search: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: str | SortOrder | None = SortOrder.ASC,
) -> list[dict[str, Any]]:
    """Aggregation pipeline producing jobs with their application counts."""
    return [
        {"$match": build_search_query(search)},
        {
            "$lookup": {
                "from": APPLICATIONS_COLLECTION,
                "localField": "_id",
                "foreignField": "job_id",
                "as": "applications",
            }
        },
        {
            "$project": {
                "title": 1,
                "department": 1,
                "location": 1,
                "posted_date": 1,
                "total_applications": {"$size": "$applications"},
            }
        },
        {"$sort": build_sort_spec(sort_by, sort_order)},
    ]


class JobRepository(BaseRepository[Job]):
    """Repository for job posting document operations."""

    @property
    def collection_name(self) -> str:
        return JOBS_COLLECTION

    @property
    def model_class(self) -> type[Job]:
        return Job

    # -------------------------------------------------------------------------
    # Create Operations
    # -------------------------------------------------------------------------

    def create_from_schema(self, data: JobCreate) -> Job:
        """Create a job from a create schema."""
        job = Job(
            title=data.title,
            department=data.department,
            location=data.location,
            posted_date=data.posted_date or utcnow(),
        )
        return self.create(job)

    async def create_from_schema_async(self, data: JobCreate) -> Job:
        """Create a job from a create schema asynchronously."""
        job = Job(
            title=data.title,
            department=data.department,
            location=data.location,
            posted_date=data.posted_date or utcnow(),
        )
        return await self.create_async(job)

    # -------------------------------------------------------------------------
    # Listing
    # -------------------------------------------------------------------------

    def list_with_counts(
        self,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: str | SortOrder | None = SortOrder.ASC,
    ) -> list[JobListing]:
        """
        List jobs matching a keyword search with their application counts.

        Counts are computed at query time. The listing is not paginated.
        """
        collection = self._get_sync_collection()
        pipeline = build_listing_pipeline(search, sort_by, sort_order)
        with self._store_errors("aggregate"):
            results = list(collection.aggregate(pipeline))
        return [JobListing.model_validate(doc) for doc in results]

    async def list_with_counts_async(
        self,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        sort_order: str | SortOrder | None = SortOrder.ASC,
    ) -> list[JobListing]:
        """List jobs with their application counts asynchronously."""
        collection = self._get_async_collection()
        pipeline = build_listing_pipeline(search, sort_by, sort_order)
        with self._store_errors("aggregate"):
            results = await collection.aggregate(pipeline).to_list(length=None)
        return [JobListing.model_validate(doc) for doc in results]

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_summaries(self, job_ids: list[Any]) -> dict[Any, dict[str, Any]]:
        """Fetch title and department for the given job IDs, keyed by ID."""
        if not job_ids:
            return {}
        collection = self._get_sync_collection()
        with self._store_errors("find"):
            documents = list(
                collection.find(
                    {"_id": {"$in": list(set(job_ids))}},
                    {"title": 1, "department": 1},
                )
            )
        return {doc["_id"]: doc for doc in documents}

    async def get_summaries_async(self, job_ids: list[Any]) -> dict[Any, dict[str, Any]]:
        """Fetch title and department for the given job IDs asynchronously."""
        if not job_ids:
            return {}
        collection = self._get_async_collection()
        unique_ids = list(set(job_ids))
        with self._store_errors("find"):
            documents = await collection.find(
                {"_id": {"$in": unique_ids}},
                {"title": 1, "department": 1},
            ).to_list(length=len(unique_ids))
        return {doc["_id"]: doc for doc in documents}
