"""
Application lifecycle controller.

Mediates every write to an application's status and interview rounds.
Status may move from any value to any other value, including out of
Rejected and Hired; only membership in the status enumeration is
checked. Interview rounds are bounded to [0, 4] and progress is always
derived from them, never stored.
"""

from typing import Any, Optional

from bson import ObjectId
from pydantic import ValidationError as PydanticValidationError

from hrdesk.core.access import CallerContext, require_role
from hrdesk.core.errors import NotFoundError, validation_error_from_pydantic
from hrdesk.data.models.application import (
    ApplicationProgressView,
    ApplicationView,
    InterviewProgressUpdate,
    StatusUpdate,
)
from hrdesk.data.repositories.application_repository import ApplicationRepository
from hrdesk.utils.constants import MAX_INTERVIEW_ROUNDS, AuditAction, Role
from hrdesk.utils.logger import LoggerMixin, audit_log


def compute_progress(interview_rounds: int) -> float:
    """Percentage of the maximum interview rounds completed."""
    return (interview_rounds / MAX_INTERVIEW_ROUNDS) * 100


class LifecycleController(LoggerMixin):
    """Validates and applies status and interview progress changes."""

    def __init__(self, applications: Optional[ApplicationRepository] = None) -> None:
        self._applications = applications or ApplicationRepository()

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    @staticmethod
    def validate_status(new_status: Any) -> str:
        """Return the status value, or raise ValidationError if it is not a known status."""
        try:
            return StatusUpdate(status=new_status).status
        except PydanticValidationError as e:
            raise validation_error_from_pydantic(e, "Invalid status") from None

    @staticmethod
    def validate_interview_rounds(rounds: Any) -> int:
        """Return the rounds, or raise ValidationError unless an integer in [0, 4]."""
        try:
            return InterviewProgressUpdate(interview_rounds=rounds).interview_rounds
        except PydanticValidationError as e:
            raise validation_error_from_pydantic(
                e, f"Invalid interview_rounds (0-{MAX_INTERVIEW_ROUNDS})"
            ) from None

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    def update_status(
        self,
        caller: CallerContext,
        application_id: str | ObjectId,
        new_status: Any,
    ) -> ApplicationView:
        """
        Overwrite an application's status.

        Args:
            caller: Verified caller; must be HR
            application_id: Application to update
            new_status: One of the five application statuses

        Returns:
            The updated application view

        Raises:
            ForbiddenError: Caller is not HR
            ValidationError: Status is not a known value
            NotFoundError: No application has this ID
        """
        require_role(caller, Role.HR, "update_status")
        status = self.validate_status(new_status)

        view = self._applications.set_status(application_id, status)
        if view is None:
            raise NotFoundError("Application not found")

        self._record_status_change(caller, view)
        return view

    async def update_status_async(
        self,
        caller: CallerContext,
        application_id: str | ObjectId,
        new_status: Any,
    ) -> ApplicationView:
        """Overwrite an application's status asynchronously."""
        require_role(caller, Role.HR, "update_status")
        status = self.validate_status(new_status)

        view = await self._applications.set_status_async(application_id, status)
        if view is None:
            raise NotFoundError("Application not found")

        self._record_status_change(caller, view)
        return view

    # -------------------------------------------------------------------------
    # Interview Progress
    # -------------------------------------------------------------------------

    def update_interview_rounds(
        self,
        caller: CallerContext,
        application_id: str | ObjectId,
        rounds: Any,
    ) -> ApplicationProgressView:
        """
        Overwrite an application's completed interview rounds.

        Raises:
            ForbiddenError: Caller is not HR
            ValidationError: Rounds is not an integer in [0, 4]
            NotFoundError: No application has this ID
        """
        require_role(caller, Role.HR, "update_interview_rounds")
        rounds = self.validate_interview_rounds(rounds)

        view = self._applications.set_interview_rounds(application_id, rounds)
        if view is None:
            raise NotFoundError("Application not found")

        self._record_progress_change(caller, view)
        return self._with_progress(view)

    async def update_interview_rounds_async(
        self,
        caller: CallerContext,
        application_id: str | ObjectId,
        rounds: Any,
    ) -> ApplicationProgressView:
        """Overwrite an application's completed interview rounds asynchronously."""
        require_role(caller, Role.HR, "update_interview_rounds")
        rounds = self.validate_interview_rounds(rounds)

        view = await self._applications.set_interview_rounds_async(application_id, rounds)
        if view is None:
            raise NotFoundError("Application not found")

        self._record_progress_change(caller, view)
        return self._with_progress(view)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _with_progress(view: ApplicationView) -> ApplicationProgressView:
        return ApplicationProgressView(
            **view.model_dump(by_alias=True),
            progress=compute_progress(view.interview_rounds),
        )

    def _record_status_change(self, caller: CallerContext, view: ApplicationView) -> None:
        self.logger.info(f"Application {view.id} status set to '{view.status}'")
        audit_log(
            AuditAction.APPLICATION_STATUS_CHANGED.value,
            {
                "application_id": str(view.id),
                "candidate_email": view.candidate_email,
                "status": view.status,
                "by": caller.user_id,
            },
        )

    def _record_progress_change(self, caller: CallerContext, view: ApplicationView) -> None:
        self.logger.info(f"Application {view.id} interview rounds set to {view.interview_rounds}")
        audit_log(
            AuditAction.APPLICATION_PROGRESS_CHANGED.value,
            {
                "application_id": str(view.id),
                "candidate_email": view.candidate_email,
                "interview_rounds": view.interview_rounds,
                "by": caller.user_id,
            },
        )

# Singleton instance
_lifecycle_controller: Optional[LifecycleController] = None


def get_lifecycle_controller() -> LifecycleController:
    """Get the lifecycle controller singleton instance."""
    global _lifecycle_controller
    if _lifecycle_controller is None:
        _lifecycle_controller = LifecycleController()
    return _lifecycle_controller
