"""Pydantic schemas for data validation and serialization."""

from .common import Page, MessageResponse, build_page, clamp_limit, page_count, to_payload
from .account import AccountCreate, AccountUpdate, AccountResponse, LoginRequest, AuthResponse
from .job_posting import Salary, JobPostingCreate, JobPostingUpdate, JobPostingResponse
from .interview import InterviewCreate, InterviewUpdate, InterviewResponse
from .application import ApplicationCreate, ApplicationUpdate, ApplicationResponse, ApplicationDetail
from .feedback import FeedbackCreate, FeedbackUpdate, FeedbackResponse, FeedbackSummary
from .notification import NotificationResponse, NotificationCount, MarkAllReadResponse
from .dashboard import DashboardStats

__all__ = [
    "Page", "MessageResponse", "build_page", "clamp_limit", "page_count", "to_payload",
    "AccountCreate", "AccountUpdate", "AccountResponse", "LoginRequest", "AuthResponse",
    "Salary", "JobPostingCreate", "JobPostingUpdate", "JobPostingResponse",
    "InterviewCreate", "InterviewUpdate", "InterviewResponse",
    "ApplicationCreate", "ApplicationUpdate", "ApplicationResponse", "ApplicationDetail",
    "FeedbackCreate", "FeedbackUpdate", "FeedbackResponse", "FeedbackSummary",
    "NotificationResponse", "NotificationCount", "MarkAllReadResponse",
    "DashboardStats",
]
