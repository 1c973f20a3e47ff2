"""Interview scheduling service."""

from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session
import structlog

from recruitment_backend.auth.access import Principal, ensure_owner, require_role
from recruitment_backend.core.base import utcnow
from recruitment_backend.core.error_handling import NotFoundError
from recruitment_backend.core.event_publisher import EventPublisher
from recruitment_backend.models.account import Account, Role
from recruitment_backend.models.application import Application
from recruitment_backend.models.interview import Interview, InterviewStatus
from recruitment_backend.models.notification import NotificationType
from recruitment_backend.repositories.account import AccountRepository
from recruitment_backend.repositories.application import ApplicationRepository
from recruitment_backend.repositories.interview import InterviewRepository
from recruitment_backend.repositories.job_posting import JobPostingRepository
from recruitment_backend.schemas.common import to_payload
from recruitment_backend.schemas.interview import InterviewCreate, InterviewResponse, InterviewUpdate
from .fsm_service import FSMService
from .notification_service import NotificationService, interview_scheduled_message

logger = structlog.get_logger(__name__)


class InterviewService:
    """Schedules interviews and manages their lifecycle."""

    def __init__(self, publisher: Optional[EventPublisher] = None):
        self.repository = InterviewRepository()
        self.applications = ApplicationRepository()
        self.accounts = AccountRepository()
        self.postings = JobPostingRepository()
        self.publisher = publisher
        self.notifications = NotificationService(publisher)

    async def schedule(self, db: Session, principal: Principal, data: InterviewCreate) -> Interview:
        """Schedule an interview for an application.

        The owning application is moved to INTERVIEW whatever its prior
        status; no application-status-changed event is emitted for that
        move. Then interview-scheduled is published and the candidate is
        notified with the formatted interview time.

        Raises:
            NotFoundError: If the application or any interviewer is missing
        """
        require_role(principal, Role.HR)

        application = self._get_application(db, data.application_id)
        interviewers = self._resolve_interviewers(db, data.interviewer_ids)

        interview = self.repository.create(
            db,
            application_id=application.id,
            scheduled_at=data.scheduled_at,
            duration=data.duration,
            type=data.type.value,
            location=data.location,
            notes=data.notes,
            status=InterviewStatus.SCHEDULED.value,
            interviewers=interviewers
        )

        FSMService(db).force_interview_stage(application)

        logger.info(
            "Interview scheduled",
            interview_id=str(interview.id),
            application_id=str(application.id),
            scheduled_at=interview.scheduled_at.isoformat()
        )

        if self.publisher is not None:
            await self.publisher.publish_interview_scheduled(to_payload(InterviewResponse, interview))

        posting = self.postings.get_by_id(db, application.job_posting_id)
        await self.notifications.notify(
            db,
            recipient_id=application.candidate_id,
            type=NotificationType.INTERVIEW_SCHEDULED,
            title="Interview Scheduled",
            message=interview_scheduled_message(posting.title if posting else None, interview.scheduled_at),
            related_application_id=application.id,
            related_job_posting_id=application.job_posting_id,
            related_interview_id=interview.id
        )
        return interview

    def get(self, db: Session, principal: Principal, interview_id: UUID) -> Interview:
        interview = self._get(db, interview_id)
        self._check_candidate_access(db, principal, interview.application_id)
        return interview

    def list_all(
        self,
        db: Session,
        principal: Principal,
        application_id: Optional[UUID] = None
    ) -> List[Interview]:
        """Interviews, optionally for one application.

        Candidates only ever see interviews of their own applications.
        """
        if principal.role == Role.CANDIDATE:
            if application_id is None:
                return self.repository.list_for_candidate(db, principal.account_id)
            self._check_candidate_access(db, principal, application_id)
        return self.repository.list_filtered(db, application_id=application_id)

    def list_mine(self, db: Session, principal: Principal) -> List[Interview]:
        """HR: scheduled interviews on the caller's panel. Candidate: own interviews."""
        if principal.role == Role.HR:
            return self.repository.list_for_interviewer(db, principal.account_id)
        return self.repository.list_for_candidate(db, principal.account_id)

    def update(self, db: Session, principal: Principal, interview_id: UUID, data: InterviewUpdate) -> Interview:
        """Edit any provided field of a non-terminal interview."""
        require_role(principal, Role.HR)
        interview = self._get(db, interview_id)
        FSMService(db).ensure_interview_open(interview)

        fields = data.model_dump(exclude_unset=True, exclude={"interviewer_ids"})
        if data.interviewer_ids is not None:
            fields["interviewers"] = self._resolve_interviewers(db, data.interviewer_ids)
        for key in ("type", "status"):
            if fields.get(key) is not None:
                fields[key] = fields[key].value

        return self.repository.update(db, interview, **fields)

    def cancel(self, db: Session, principal: Principal, interview_id: UUID) -> Interview:
        require_role(principal, Role.HR)
        interview = self._get(db, interview_id)
        FSMService(db).ensure_interview_open(interview)

        self.repository.update(db, interview, status=InterviewStatus.CANCELLED.value)
        logger.info("Interview cancelled", interview_id=str(interview_id))
        return interview

    def upcoming_count(self, db: Session, principal: Principal) -> int:
        """Scheduled interviews from now on, seen from the caller's role."""
        now = utcnow()
        if principal.role == Role.HR:
            return len(self.repository.list_for_interviewer(db, principal.account_id, after=now))
        return len(self.repository.list_for_candidate(
            db, principal.account_id, status=InterviewStatus.SCHEDULED.value, after=now
        ))

    def _get(self, db: Session, interview_id: UUID) -> Interview:
        interview = self.repository.get_by_id(db, interview_id)
        if interview is None:
            raise NotFoundError("Interview")
        return interview

    def _get_application(self, db: Session, application_id: UUID) -> Application:
        application = self.applications.get_by_id(db, application_id)
        if application is None:
            raise NotFoundError("Application")
        return application

    def _check_candidate_access(self, db: Session, principal: Principal, application_id: UUID) -> None:
        if principal.role != Role.CANDIDATE:
            return
        application = self._get_application(db, application_id)
        ensure_owner(principal, [application.candidate_id], "You can only view interviews for your own applications")

    def _resolve_interviewers(self, db: Session, interviewer_ids: List[UUID]) -> List[Account]:
        unique_ids = list(dict.fromkeys(interviewer_ids))
        interviewers = self.accounts.get_many(db, unique_ids)
        if len(interviewers) != len(unique_ids):
            raise NotFoundError("Interviewer")
        return interviewers
