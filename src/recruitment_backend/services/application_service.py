"""Application management service."""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session
import structlog

from recruitment_backend.auth.access import Principal, ensure_owner, require_role
from recruitment_backend.core.config import settings
from recruitment_backend.core.error_handling import ConflictError, NotFoundError
from recruitment_backend.core.event_publisher import EventPublisher
from recruitment_backend.models.account import Role
from recruitment_backend.models.application import Application
from recruitment_backend.models.interview import Interview
from recruitment_backend.models.job_posting import PostingStatus
from recruitment_backend.models.notification import NotificationType
from recruitment_backend.repositories.application import ApplicationRepository
from recruitment_backend.repositories.interview import InterviewRepository
from recruitment_backend.repositories.job_posting import JobPostingRepository
from recruitment_backend.schemas.application import ApplicationCreate, ApplicationResponse, ApplicationUpdate
from recruitment_backend.schemas.common import clamp_limit, to_payload
from .fsm_service import FSMService
from .notification_service import (
    NotificationService,
    application_received_message,
    status_updated_message,
)

logger = structlog.get_logger(__name__)


class ApplicationService:
    """Service for managing application operations."""

    def __init__(self, publisher: Optional[EventPublisher] = None):
        self.repository = ApplicationRepository()
        self.postings = JobPostingRepository()
        self.interviews = InterviewRepository()
        self.publisher = publisher
        self.notifications = NotificationService(publisher)

    async def apply(self, db: Session, principal: Principal, data: ApplicationCreate) -> Application:
        """Submit the caller's application to an open posting.

        Side effects, in order: the application is stored, an
        application-created event is published, then the posting owner is
        notified.

        Args:
            db: Database session
            principal: Calling candidate
            data: Application payload

        Returns:
            Created application

        Raises:
            NotFoundError: If the posting is missing, deleted or not OPEN
            ConflictError: If the caller already has a live application for it
        """
        principal = require_role(principal, Role.CANDIDATE)

        posting = self.postings.get_by_id(db, data.job_posting_id)
        if posting is None or posting.status != PostingStatus.OPEN.value:
            raise NotFoundError("Job posting")

        if self.repository.get_for_pair(db, posting.id, principal.account_id) is not None:
            raise ConflictError(ApplicationRepository.conflict_message)

        application = self.repository.create(
            db,
            job_posting_id=posting.id,
            candidate_id=principal.account_id,
            cover_letter=data.cover_letter,
            resume=data.resume
        )

        logger.info(
            "Application created",
            application_id=str(application.id),
            job_posting_id=str(posting.id),
            candidate_id=str(principal.account_id)
        )

        if self.publisher is not None:
            await self.publisher.publish_application_created(to_payload(ApplicationResponse, application))

        await self.notifications.notify(
            db,
            recipient_id=posting.created_by_id,
            type=NotificationType.APPLICATION_RECEIVED,
            title="New Application",
            message=application_received_message(principal.account.full_name, posting.title),
            related_application_id=application.id,
            related_job_posting_id=posting.id
        )
        return application

    async def update(
        self,
        db: Session,
        principal: Principal,
        application_id: UUID,
        data: ApplicationUpdate
    ) -> Application:
        """HR update of status and/or notes.

        A status that differs from the current one publishes exactly one
        application-status-changed event and notifies the candidate once.
        Setting the same status again has no side effects.
        """
        require_role(principal, Role.HR)
        application = self._get(db, application_id)

        previous_status = None
        if data.status is not None:
            previous_status = FSMService(db).transition_application(application, data.status, notes=data.notes)
        elif data.notes is not None:
            self.repository.update(db, application, notes=data.notes)

        if previous_status is None:
            return application

        if self.publisher is not None:
            await self.publisher.publish_application_status_changed(
                to_payload(ApplicationResponse, application),
                previous_status
            )

        posting = self.postings.get_by_id(db, application.job_posting_id)
        await self.notifications.notify(
            db,
            recipient_id=application.candidate_id,
            type=NotificationType.APPLICATION_STATUS_UPDATED,
            title="Application Status Updated",
            message=status_updated_message(posting.title if posting else None, application.status),
            related_application_id=application.id,
            related_job_posting_id=application.job_posting_id
        )
        return application

    def withdraw(self, db: Session, principal: Principal, application_id: UUID) -> Application:
        """Soft-delete the caller's own application."""
        principal = require_role(principal, Role.CANDIDATE)
        application = self._get(db, application_id)
        ensure_owner(principal, [application.candidate_id], "You can only withdraw your own applications")

        self.repository.soft_delete(db, application)
        logger.info("Application withdrawn", application_id=str(application_id))
        return application

    def get(self, db: Session, principal: Principal, application_id: UUID) -> Tuple[Application, List[Interview]]:
        """Application and its live interviews, earliest first.

        Candidates may only read their own applications.
        """
        application = self._get(db, application_id)
        if principal.role == Role.CANDIDATE:
            ensure_owner(principal, [application.candidate_id], "You can only view your own applications")
        return application, self.interviews.list_for_application(db, application.id)

    def list_all(
        self,
        db: Session,
        principal: Principal,
        page: int = 1,
        limit: int = 10,
        job_posting_id: Optional[UUID] = None,
        candidate_id: Optional[UUID] = None,
        status: Optional[str] = None
    ) -> Tuple[List[Application], int, int]:
        """HR listing across all applications.

        Returns:
            Tuple of (applications, total, clamped limit)
        """
        require_role(principal, Role.HR)
        limit = clamp_limit(limit, settings.max_page_size)
        items, total = self.repository.search(
            db, page, limit,
            job_posting_id=job_posting_id,
            candidate_id=candidate_id,
            status=status
        )
        return items, total, limit

    def list_mine(
        self,
        db: Session,
        principal: Principal,
        page: int = 1,
        limit: int = 10,
        status: Optional[str] = None
    ) -> Tuple[List[Application], int, int]:
        """Candidate's own applications."""
        principal = require_role(principal, Role.CANDIDATE)
        limit = clamp_limit(limit, settings.max_page_size)
        items, total = self.repository.search(db, page, limit, candidate_id=principal.account_id, status=status)
        return items, total, limit

    def _get(self, db: Session, application_id: UUID) -> Application:
        application = self.repository.get_by_id(db, application_id)
        if application is None:
            raise NotFoundError("Application")
        return application
