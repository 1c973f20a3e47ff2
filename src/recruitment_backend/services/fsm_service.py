"""Status machines for applications and interviews."""

from typing import Optional

from sqlalchemy.orm import Session
import structlog

from recruitment_backend.core.error_handling import ConflictError
from recruitment_backend.models.application import Application, ApplicationStatus
from recruitment_backend.models.interview import Interview
from recruitment_backend.repositories.application import ApplicationRepository

logger = structlog.get_logger(__name__)


class FSMService:
    """Applies status changes and reports whether anything changed.

    Application statuses may move freely between any two values; an HR
    caller can correct a mistaken status. Interviews start SCHEDULED and
    stop accepting changes once COMPLETED or CANCELLED.
    """

    STATUS_LABELS = {
        ApplicationStatus.PENDING.value: "Pending",
        ApplicationStatus.REVIEWING.value: "Under Review",
        ApplicationStatus.INTERVIEW.value: "Interview Stage",
        ApplicationStatus.OFFERED.value: "Offer Extended",
        ApplicationStatus.REJECTED.value: "Not Selected",
        ApplicationStatus.ACCEPTED.value: "Accepted",
    }

    def __init__(self, db: Session):
        self.db = db
        self.applications = ApplicationRepository()

    @classmethod
    def label_for(cls, status: str) -> str:
        """Human-readable label for an application status."""
        return cls.STATUS_LABELS.get(ApplicationStatus(status).value, status)

    def transition_application(
        self,
        application: Application,
        new_status: str,
        notes: Optional[str] = None
    ) -> Optional[str]:
        """Persist a new application status.

        Args:
            application: Application to update
            new_status: Target status
            notes: Optional notes saved in the same write

        Returns:
            The previous status if the status changed, None otherwise
        """
        new_status = ApplicationStatus(new_status).value
        old_status = application.status
        changed = old_status != new_status

        self.applications.update(
            self.db,
            application,
            status=new_status if changed else None,
            notes=notes
        )

        if not changed:
            logger.info(
                "Application already in target status",
                application_id=str(application.id),
                status=new_status
            )
            return None

        logger.info(
            "Application status transition completed",
            application_id=str(application.id),
            old_status=old_status,
            new_status=new_status
        )
        return old_status

    def force_interview_stage(self, application: Application) -> str:
        """Move the application to INTERVIEW whatever its current status.

        Returns:
            The status the application had before
        """
        old_status = application.status
        if old_status != ApplicationStatus.INTERVIEW.value:
            self.applications.update(self.db, application, status=ApplicationStatus.INTERVIEW.value)

        logger.info(
            "Application moved to interview stage",
            application_id=str(application.id),
            old_status=old_status
        )
        return old_status

    def ensure_interview_open(self, interview: Interview) -> None:
        """Raise Conflict when the interview is in a terminal status."""
        if interview.is_terminal:
            raise ConflictError(f"Interview is already {interview.status} and cannot be changed")
