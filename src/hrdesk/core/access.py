"""
Caller context and role checks.

The auth collaborator has already verified who is calling; these checks
only decide whether that caller's role may run a given operation.
"""

from dataclasses import dataclass

from hrdesk.core.errors import ForbiddenError
from hrdesk.utils.constants import AuditAction, Role
from hrdesk.utils.logger import audit_log


@dataclass(frozen=True)
class CallerContext:
    """A verified caller identity as supplied by the auth collaborator."""

    user_id: str
    role: Role | str

    @property
    def role_name(self) -> str:
        """Plain role value for logs, including roles outside the enumeration."""
        return self.role.value if isinstance(self.role, Role) else str(self.role)

    @property
    def is_hr(self) -> bool:
        return self.role == Role.HR

    @property
    def is_user(self) -> bool:
        return self.role == Role.USER


def _deny(caller: CallerContext, operation: str) -> ForbiddenError:
    audit_log(
        AuditAction.ACCESS_DENIED.value,
        {"user_id": caller.user_id, "role": caller.role_name, "operation": operation},
        audit_type="ACCESS",
    )
    return ForbiddenError("Access denied")


def require_role(caller: CallerContext, required: Role, operation: str) -> None:
    """Raise ForbiddenError unless the caller holds the required role."""
    if required is Role.HR and caller.is_hr:
        return
    if required is Role.USER and caller.is_user:
        return
    raise _deny(caller, operation)


def require_authenticated(caller: CallerContext, operation: str) -> None:
    """Raise ForbiddenError unless the caller holds one of the known roles."""
    if caller.is_hr or caller.is_user:
        return
    raise _deny(caller, operation)
