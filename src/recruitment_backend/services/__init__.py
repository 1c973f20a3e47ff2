"""Service layer for business logic."""

from .fsm_service import FSMService
from .notification_service import NotificationService
from .account_service import AccountService
from .job_posting_service import JobPostingService
from .application_service import ApplicationService
from .interview_service import InterviewService
from .feedback_service import FeedbackService
from .dashboard_service import DashboardService

__all__ = [
    "FSMService",
    "NotificationService",
    "AccountService",
    "JobPostingService",
    "ApplicationService",
    "InterviewService",
    "FeedbackService",
    "DashboardService",
]
