"""Database models for the recruitment backend."""

from .account import Account, Role
from .job_posting import JobPosting, PostingStatus, PostingType
from .application import Application, ApplicationStatus
from .interview import Interview, InterviewStatus, InterviewType, interview_interviewers
from .feedback import Feedback, Recommendation
from .notification import Notification, NotificationType

__all__ = [
    "Account",
    "Role",
    "JobPosting",
    "PostingStatus",
    "PostingType",
    "Application",
    "ApplicationStatus",
    "Interview",
    "InterviewStatus",
    "InterviewType",
    "interview_interviewers",
    "Feedback",
    "Recommendation",
    "Notification",
    "NotificationType",
]
