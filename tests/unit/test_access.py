"""
Tests for hrdesk.core.access — caller context and role checks.
"""

import pytest

from hrdesk.core.access import CallerContext, require_authenticated, require_role
from hrdesk.core.errors import ForbiddenError
from hrdesk.utils.constants import Role


class TestCallerContext:
    def test_hr_from_enum(self):
        caller = CallerContext(user_id="u1", role=Role.HR)
        assert caller.is_hr and not caller.is_user

    def test_user_from_string(self):
        caller = CallerContext(user_id="u1", role="user")
        assert caller.is_user and not caller.is_hr


class TestRequireRole:
    def test_hr_allowed_for_hr(self):
        require_role(CallerContext("u1", Role.HR), Role.HR, "update_status")

    def test_user_allowed_for_user(self):
        require_role(CallerContext("u1", "user"), Role.USER, "list_my_applications")

    def test_user_denied_for_hr(self):
        with pytest.raises(ForbiddenError):
            require_role(CallerContext("u1", Role.USER), Role.HR, "update_status")

    def test_hr_denied_for_user(self):
        with pytest.raises(ForbiddenError):
            require_role(CallerContext("u1", Role.HR), Role.USER, "list_my_applications")

    def test_unknown_role_denied(self):
        with pytest.raises(ForbiddenError):
            require_role(CallerContext("u1", "admin"), Role.HR, "update_status")


class TestRequireAuthenticated:
    @pytest.mark.parametrize("role", [Role.HR, Role.USER, "hr", "user"])
    def test_known_roles_allowed(self, role):
        require_authenticated(CallerContext("u1", role), "list_jobs")

    def test_unknown_role_denied(self):
        with pytest.raises(ForbiddenError):
            require_authenticated(CallerContext("u1", "guest"), "list_jobs")


class TestRoleName:
    @pytest.mark.parametrize("role, name", [(Role.HR, "hr"), (Role.USER, "user"), ("user", "user"), ("guest", "guest")])
    def test_plain_value(self, role, name):
        assert CallerContext("u1", role).role_name == name


# ── audit trail ─────────────────────────────────────────────────────────────


class TestDenialAudit:
    def test_denied_role_audited(self, audit_records):
        with pytest.raises(ForbiddenError):
            require_role(CallerContext("u1", Role.USER), Role.HR, "update_status")

        assert len(audit_records) == 1
        record = audit_records[0]
        assert record["extra"]["audit_type"] == "ACCESS"
        assert record["message"].startswith("access_denied | ")
        assert "'user_id': 'u1'" in record["message"]
        assert "'role': 'user'" in record["message"]
        assert "'operation': 'update_status'" in record["message"]

    def test_unknown_role_audited(self, audit_records):
        with pytest.raises(ForbiddenError):
            require_authenticated(CallerContext("u2", "guest"), "list_jobs")
        assert "'role': 'guest'" in audit_records[0]["message"]

    def test_allowed_caller_not_audited(self, audit_records):
        require_role(CallerContext("u1", Role.HR), Role.HR, "update_status")
        require_authenticated(CallerContext("u1", "user"), "list_jobs")
        assert audit_records == []
