"""Repository pattern implementations for data access."""

from .base import BaseRepository
from .account import AccountRepository
from .job_posting import JobPostingRepository
from .application import ApplicationRepository
from .interview import InterviewRepository
from .feedback import FeedbackRepository
from .notification import NotificationRepository

__all__ = [
    "BaseRepository",
    "AccountRepository",
    "JobPostingRepository",
    "ApplicationRepository",
    "InterviewRepository",
    "FeedbackRepository",
    "NotificationRepository",
]
