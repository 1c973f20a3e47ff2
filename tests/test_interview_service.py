"""Tests for interview scheduling and lifecycle."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from recruitment_backend.auth.access import principal_for
from recruitment_backend.core.error_handling import ConflictError, ForbiddenError, NotFoundError
from recruitment_backend.core.event_bus import Topic
from recruitment_backend.models import ApplicationStatus, InterviewStatus, InterviewType, Role
from recruitment_backend.repositories import ApplicationRepository
from recruitment_backend.schemas.application import ApplicationCreate, ApplicationUpdate
from recruitment_backend.schemas.interview import InterviewCreate, InterviewUpdate
from recruitment_backend.services.application_service import ApplicationService
from recruitment_backend.services.interview_service import InterviewService
from tests.helpers import collect


@pytest.fixture
async def application(db, publisher, hr, candidate, posting_factory):
    posting = posting_factory(hr.account)
    return await ApplicationService(publisher).apply(
        db, candidate, ApplicationCreate(job_posting_id=posting.id, resume="r.pdf")
    )


@pytest.fixture
def service(publisher):
    return InterviewService(publisher)


def interview_request(application, interviewers, when=None):
    return InterviewCreate(
        application_id=application.id,
        scheduled_at=when or datetime(2031, 11, 3, 14, 30),
        duration=45,
        type=InterviewType.VIDEO,
        location="https://meet.example.com/abc",
        interviewer_ids=interviewers
    )


class TestSchedule:

    @pytest.mark.parametrize("prior", [ApplicationStatus.OFFERED, ApplicationStatus.REJECTED, ApplicationStatus.PENDING])
    async def test_scheduling_forces_interview_stage(self, db, publisher, service, hr, application, prior):
        await ApplicationService(publisher).update(db, hr, application.id, ApplicationUpdate(status=prior))

        await service.schedule(db, hr, interview_request(application, [hr.account_id]))

        db.expire_all()
        assert ApplicationRepository().get_by_id(db, application.id).status == ApplicationStatus.INTERVIEW.value

    async def test_scheduling_publishes_interview_event_but_no_status_change(self, db, bus, service, hr, candidate, application):
        scheduled = bus.subscribe(Topic.INTERVIEW_SCHEDULED)
        changed = bus.subscribe(Topic.APPLICATION_STATUS_CHANGED)
        notified = bus.subscribe(Topic.NOTIFICATION_RECEIVED)

        interview = await service.schedule(db, hr, interview_request(application, [hr.account_id]))

        assert interview.status == InterviewStatus.SCHEDULED.value
        assert interview.interviewer_ids == [hr.account_id]

        events = await collect(scheduled)
        assert [e["id"] for e in events] == [str(interview.id)]
        assert events[0]["application_id"] == str(application.id)
        assert await collect(changed) == []

        notifications = await collect(notified)
        assert len(notifications) == 1
        assert notifications[0]["recipient_id"] == str(candidate.account_id)
        assert notifications[0]["related_interview_id"] == str(interview.id)
        assert notifications[0]["related_job_posting_id"] == str(application.job_posting_id)
        assert notifications[0]["message"] == (
            "Interview for Backend Engineer scheduled for Mon, Nov 3, 02:30 PM"
        )

    async def test_unknown_interviewer_is_rejected(self, db, service, hr, application):
        with pytest.raises(NotFoundError, match="Interviewer not found"):
            await service.schedule(db, hr, interview_request(application, [hr.account_id, uuid4()]))

    async def test_unknown_application_is_rejected(self, db, service, hr, application):
        request = interview_request(application, [hr.account_id])
        request.application_id = uuid4()
        with pytest.raises(NotFoundError, match="Application not found"):
            await service.schedule(db, hr, request)

    async def test_candidate_cannot_schedule(self, db, service, candidate, application):
        with pytest.raises(ForbiddenError):
            await service.schedule(db, candidate, interview_request(application, [candidate.account_id]))


class TestLifecycle:

    async def test_cancelled_interview_is_terminal(self, db, service, hr, application):
        interview = await service.schedule(db, hr, interview_request(application, [hr.account_id]))

        cancelled = service.cancel(db, hr, interview.id)
        assert cancelled.status == InterviewStatus.CANCELLED.value

        with pytest.raises(ConflictError):
            service.update(db, hr, interview.id, InterviewUpdate(duration=30))
        with pytest.raises(ConflictError):
            service.cancel(db, hr, interview.id)

    async def test_update_changes_only_given_fields(self, db, service, hr, account_factory, application):
        interview = await service.schedule(db, hr, interview_request(application, [hr.account_id]))
        panelist = account_factory(Role.HR, "Pat", "Lee")

        updated = service.update(
            db, hr, interview.id,
            InterviewUpdate(duration=90, interviewer_ids=[hr.account_id, panelist.id])
        )

        assert updated.duration == 90
        assert updated.type == InterviewType.VIDEO.value
        assert set(updated.interviewer_ids) == {hr.account_id, panelist.id}

    async def test_completed_interview_is_terminal(self, db, service, hr, application):
        interview = await service.schedule(db, hr, interview_request(application, [hr.account_id]))
        service.update(db, hr, interview.id, InterviewUpdate(status=InterviewStatus.COMPLETED))

        with pytest.raises(ConflictError):
            service.update(db, hr, interview.id, InterviewUpdate(notes="late note"))


class TestVisibility:

    async def test_candidate_sees_only_own_interviews(self, db, service, hr, candidate, account_factory, application):
        interview = await service.schedule(db, hr, interview_request(application, [hr.account_id]))
        other = principal_for(account_factory(Role.CANDIDATE, "Olga", "Park"))

        assert service.get(db, candidate, interview.id).id == interview.id
        assert [i.id for i in service.list_mine(db, candidate)] == [interview.id]
        assert service.list_all(db, other) == []
        with pytest.raises(ForbiddenError):
            service.get(db, other, interview.id)
        with pytest.raises(ForbiddenError):
            service.list_all(db, other, application_id=application.id)

    async def test_hr_sees_scheduled_interviews_on_own_panel(self, db, service, hr, account_factory, application):
        interview = await service.schedule(db, hr, interview_request(application, [hr.account_id]))
        colleague = principal_for(account_factory(Role.HR, "Pat", "Lee"))

        assert [i.id for i in service.list_mine(db, hr)] == [interview.id]
        assert service.list_mine(db, colleague) == []

    async def test_upcoming_count_ignores_past_interviews(self, db, service, hr, application):
        await service.schedule(db, hr, interview_request(application, [hr.account_id]))
        await service.schedule(
            db, hr, interview_request(application, [hr.account_id], when=datetime.utcnow() - timedelta(days=1))
        )

        assert service.upcoming_count(db, hr) == 1
