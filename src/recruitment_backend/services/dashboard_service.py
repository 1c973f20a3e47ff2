"""Role-specific dashboard statistics."""

from sqlalchemy.orm import Session

from recruitment_backend.auth.access import HRPrincipal, Principal, require_authenticated
from recruitment_backend.models.application import ApplicationStatus
from recruitment_backend.models.job_posting import PostingStatus
from recruitment_backend.repositories.application import ApplicationRepository
from recruitment_backend.repositories.job_posting import JobPostingRepository
from recruitment_backend.schemas.dashboard import DashboardStats
from .interview_service import InterviewService


class DashboardService:
    """Computes the counters shown on each role's dashboard."""

    def __init__(self):
        self.postings = JobPostingRepository()
        self.applications = ApplicationRepository()
        self.interviews = InterviewService()

    def stats(self, db: Session, principal: Principal) -> DashboardStats:
        principal = require_authenticated(principal)
        if isinstance(principal, HRPrincipal):
            return self._hr_stats(db, principal)
        return self._candidate_stats(db, principal)

    def _hr_stats(self, db: Session, principal: Principal) -> DashboardStats:
        own = {"created_by_id": principal.account_id}
        return DashboardStats(
            role=principal.role,
            total_job_postings=self.postings.count(db, own),
            open_job_postings=self.postings.count(db, {**own, "status": PostingStatus.OPEN.value}),
            total_applications=self.applications.count(db),
            pending_applications=self.applications.count(db, {"status": ApplicationStatus.PENDING.value}),
            upcoming_interviews=self.interviews.upcoming_count(db, principal)
        )

    def _candidate_stats(self, db: Session, principal: Principal) -> DashboardStats:
        own = {"candidate_id": principal.account_id}
        open_postings = self.postings.count(db, {"status": PostingStatus.OPEN.value})
        return DashboardStats(
            role=principal.role,
            total_job_postings=open_postings,
            open_job_postings=open_postings,
            total_applications=self.applications.count(db, own),
            pending_applications=self.applications.count(db, {**own, "status": ApplicationStatus.PENDING.value}),
            upcoming_interviews=self.interviews.upcoming_count(db, principal)
        )
