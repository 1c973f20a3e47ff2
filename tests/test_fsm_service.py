"""Tests for FSM service functionality."""

import pytest
from unittest.mock import MagicMock
from uuid import uuid4
from sqlalchemy.exc import IntegrityError

from recruitment_backend.core.error_handling import ConflictError
from recruitment_backend.models.application import Application, ApplicationStatus
from recruitment_backend.models.interview import Interview, InterviewStatus
from recruitment_backend.services.fsm_service import FSMService


def mock_application(status):
    application = MagicMock(spec=Application)
    application.id = uuid4()
    application.status = status
    application.notes = ""
    return application


class TestFSMService:
    """Test FSM service functionality."""

    def test_every_status_has_a_label(self):
        for status in ApplicationStatus:
            assert FSMService.label_for(status.value)
        assert FSMService.label_for("REVIEWING") == "Under Review"

    def test_transition_application_success(self):
        mock_db = MagicMock()
        application = mock_application("PENDING")

        previous = FSMService(mock_db).transition_application(application, "REVIEWING", notes="Looks promising")

        assert previous == "PENDING"
        assert application.status == "REVIEWING"
        assert application.notes == "Looks promising"
        mock_db.commit.assert_called_once()

    def test_transition_same_status_reports_no_change(self):
        mock_db = MagicMock()
        application = mock_application("OFFERED")

        previous = FSMService(mock_db).transition_application(application, "OFFERED")

        assert previous is None
        assert application.status == "OFFERED"

    def test_backward_transitions_are_allowed(self):
        application = mock_application("ACCEPTED")

        previous = FSMService(MagicMock()).transition_application(application, "PENDING")

        assert previous == "ACCEPTED"
        assert application.status == "PENDING"

    def test_transition_invalid_status(self):
        with pytest.raises(ValueError):
            FSMService(MagicMock()).transition_application(mock_application("PENDING"), "ARCHIVED")

    def test_transition_rollback_on_error(self):
        mock_db = MagicMock()
        mock_db.commit.side_effect = IntegrityError("Constraint violation", None, None)

        with pytest.raises(ConflictError):
            FSMService(mock_db).transition_application(mock_application("PENDING"), "REJECTED")

        mock_db.rollback.assert_called_once()

    @pytest.mark.parametrize("prior", ["PENDING", "REJECTED", "ACCEPTED"])
    def test_force_interview_stage(self, prior):
        application = mock_application(prior)

        assert FSMService(MagicMock()).force_interview_stage(application) == prior
        assert application.status == "INTERVIEW"

    def test_force_interview_stage_when_already_there(self):
        mock_db = MagicMock()
        application = mock_application("INTERVIEW")

        FSMService(mock_db).force_interview_stage(application)

        mock_db.commit.assert_not_called()

    @pytest.mark.parametrize("status", ["COMPLETED", "CANCELLED"])
    def test_terminal_interviews_reject_changes(self, status):
        interview = Interview(status=status)

        with pytest.raises(ConflictError, match=f"already {status}"):
            FSMService(MagicMock()).ensure_interview_open(interview)

    def test_scheduled_interview_is_open(self):
        interview = Interview(status=InterviewStatus.SCHEDULED.value)

        FSMService(MagicMock()).ensure_interview_open(interview)
