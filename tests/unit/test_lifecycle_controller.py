"""
Tests for hrdesk.core.lifecycle — status and interview progress changes.
"""

from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from pymongo.errors import AutoReconnect

from hrdesk.core.errors import (
    ErrorCode,
    ForbiddenError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from hrdesk.core.lifecycle import LifecycleController, compute_progress
from hrdesk.utils.constants import ApplicationStatus


class TestComputeProgress:
    @pytest.mark.parametrize("rounds, expected", [(0, 0.0), (1, 25.0), (2, 50.0), (3, 75.0), (4, 100.0)])
    def test_percentage_of_four_rounds(self, rounds, expected):
        assert compute_progress(rounds) == expected


class TestValidation:
    def test_status_returns_value(self):
        assert LifecycleController.validate_status(ApplicationStatus.HIRED) == "Hired"

    def test_unknown_status(self):
        with pytest.raises(ValidationError) as exc_info:
            LifecycleController.validate_status("Withdrawn")
        assert exc_info.value.details[0]["field"] == "status"

    @pytest.mark.parametrize("rounds", [-1, 5, 2.0, "2", None])
    def test_bad_rounds(self, rounds):
        with pytest.raises(ValidationError):
            LifecycleController.validate_interview_rounds(rounds)


# ── update_status ───────────────────────────────────────────────────────────


class TestUpdateStatus:
    @pytest.mark.parametrize("status", [s.value for s in ApplicationStatus])
    def test_any_status_accepted(self, controller, application_repo, hr_caller, product_manager_job, status):
        _, first, _ = product_manager_job
        view = controller.update_status(hr_caller, first.id, status)
        assert view.status == status
        assert application_repo.get_by_id(first.id).status == status

    def test_moves_out_of_terminal_status(self, controller, hr_caller, product_manager_job):
        _, first, _ = product_manager_job
        controller.update_status(hr_caller, first.id, "Hired")
        assert controller.update_status(hr_caller, first.id, "Applied").status == "Applied"

    def test_string_id_accepted(self, controller, hr_caller, product_manager_job):
        _, first, _ = product_manager_job
        view = controller.update_status(hr_caller, str(first.id), "Interview")
        assert view.id == first.id

    def test_returns_joined_view(self, controller, hr_caller, product_manager_job):
        job, _, second = product_manager_job
        view = controller.update_status(hr_caller, second.id, "Rejected")
        assert view.candidate_name == "Diana Chen"
        assert view.interview_rounds == 1
        assert view.job.title == job.title

    def test_other_fields_untouched(self, controller, application_repo, hr_caller, product_manager_job):
        _, _, second = product_manager_job
        controller.update_status(hr_caller, second.id, "Interview")
        stored = application_repo.get_by_id(second.id)
        assert stored.interview_rounds == 1
        assert stored.candidate_email == "diana@example.com"
        assert stored.job_id == second.job_id

    def test_invalid_status_leaves_record(self, controller, application_repo, hr_caller, product_manager_job):
        _, first, _ = product_manager_job
        with pytest.raises(ValidationError):
            controller.update_status(hr_caller, first.id, "Withdrawn")
        assert application_repo.get_by_id(first.id).status == "Applied"

    def test_unknown_id_not_found(self, controller, application_repo, hr_caller, product_manager_job):
        with pytest.raises(NotFoundError) as exc_info:
            controller.update_status(hr_caller, ObjectId(), "Hired")
        assert exc_info.value.code is ErrorCode.NOT_FOUND
        assert application_repo.count() == 2

    def test_malformed_id_not_found(self, controller, hr_caller):
        with pytest.raises(NotFoundError):
            controller.update_status(hr_caller, "not-an-id", "Hired")

    def test_applicant_forbidden(self, controller, application_repo, user_caller, product_manager_job):
        _, first, _ = product_manager_job
        with pytest.raises(ForbiddenError):
            controller.update_status(user_caller, first.id, "Hired")
        assert application_repo.get_by_id(first.id).status == "Applied"

    def test_role_checked_before_input(self, controller, user_caller):
        with pytest.raises(ForbiddenError):
            controller.update_status(user_caller, "not-an-id", "Withdrawn")

    def test_store_failure(self, controller, application_repo, hr_caller, monkeypatch):
        collection = MagicMock()
        collection.find_one_and_update.side_effect = AutoReconnect("connection reset")
        monkeypatch.setattr(application_repo, "_get_sync_collection", lambda: collection)

        with pytest.raises(StoreError) as exc_info:
            controller.update_status(hr_caller, ObjectId(), "Hired")
        assert exc_info.value.message == "Internal storage error"
        assert "connection reset" not in exc_info.value.message


# ── update_interview_rounds ─────────────────────────────────────────────────


class TestUpdateInterviewRounds:
    def test_sets_rounds_and_progress(self, controller, application_repo, hr_caller, product_manager_job):
        _, first, _ = product_manager_job
        view = controller.update_interview_rounds(hr_caller, first.id, 2)
        assert view.interview_rounds == 2
        assert view.progress == 50.0
        assert application_repo.get_by_id(first.id).interview_rounds == 2

    @pytest.mark.parametrize("rounds, progress", [(0, 0.0), (4, 100.0)])
    def test_bounds_inclusive(self, controller, hr_caller, product_manager_job, rounds, progress):
        _, _, second = product_manager_job
        assert controller.update_interview_rounds(hr_caller, second.id, rounds).progress == progress

    def test_progress_not_stored(self, controller, application_repo, hr_caller, product_manager_job):
        _, first, _ = product_manager_job
        controller.update_interview_rounds(hr_caller, first.id, 3)
        collection = application_repo._get_sync_collection()
        assert "progress" not in collection.find_one({"_id": first.id})

    def test_status_untouched(self, controller, application_repo, hr_caller, product_manager_job):
        _, _, second = product_manager_job
        controller.update_interview_rounds(hr_caller, second.id, 4)
        assert application_repo.get_by_id(second.id).status == "Under Review"

    @pytest.mark.parametrize("rounds", [5, -1, 2.5])
    def test_out_of_range_leaves_record(self, controller, application_repo, hr_caller, product_manager_job, rounds):
        _, _, second = product_manager_job
        with pytest.raises(ValidationError):
            controller.update_interview_rounds(hr_caller, second.id, rounds)
        assert application_repo.get_by_id(second.id).interview_rounds == 1

    def test_unknown_id_not_found(self, controller, application_repo, hr_caller, product_manager_job):
        with pytest.raises(NotFoundError):
            controller.update_interview_rounds(hr_caller, ObjectId(), 2)
        assert application_repo.count() == 2

    def test_applicant_forbidden(self, controller, application_repo, user_caller, product_manager_job):
        _, first, _ = product_manager_job
        with pytest.raises(ForbiddenError):
            controller.update_interview_rounds(user_caller, first.id, 2)
        assert application_repo.get_by_id(first.id).interview_rounds == 0


# ── audit trail ─────────────────────────────────────────────────────────────


class TestLifecycleAudit:
    def test_status_change_audited(self, controller, hr_caller, product_manager_job, audit_records):
        _, first, _ = product_manager_job
        controller.update_status(hr_caller, first.id, "Hired")

        assert len(audit_records) == 1
        record = audit_records[0]
        assert record["extra"]["audit_type"] == "LIFECYCLE"
        assert record["message"].startswith("application_status_changed | ")
        assert f"'application_id': '{first.id}'" in record["message"]
        assert "'status': 'Hired'" in record["message"]
        assert f"'by': '{hr_caller.user_id}'" in record["message"]

    def test_round_change_audited(self, controller, hr_caller, product_manager_job, audit_records):
        _, _, second = product_manager_job
        controller.update_interview_rounds(hr_caller, second.id, 3)

        assert len(audit_records) == 1
        record = audit_records[0]
        assert record["extra"]["audit_type"] == "LIFECYCLE"
        assert record["message"].startswith("application_progress_changed | ")
        assert "'interview_rounds': 3" in record["message"]

    def test_candidate_email_masked(self, controller, hr_caller, product_manager_job, audit_records):
        _, first, _ = product_manager_job
        controller.update_status(hr_caller, first.id, "Interview")
        message = audit_records[0]["message"]
        assert "'candidate_email': 'c***@example.com'" in message
        assert "chris@example.com" not in message

    def test_rejected_input_not_audited(self, controller, hr_caller, product_manager_job, audit_records):
        _, first, _ = product_manager_job
        with pytest.raises(ValidationError):
            controller.update_interview_rounds(hr_caller, first.id, 5)
        with pytest.raises(NotFoundError):
            controller.update_status(hr_caller, ObjectId(), "Hired")
        assert audit_records == []

    def test_applicant_denial_audited_as_access(self, controller, user_caller, product_manager_job, audit_records):
        _, first, _ = product_manager_job
        with pytest.raises(ForbiddenError):
            controller.update_status(user_caller, first.id, "Hired")

        assert [r["extra"]["audit_type"] for r in audit_records] == ["ACCESS"]
        assert "'operation': 'update_status'" in audit_records[0]["message"]
        assert "'role': 'user'" in audit_records[0]["message"]
