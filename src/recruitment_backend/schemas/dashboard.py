"""Pydantic schemas for dashboard statistics."""

from pydantic import BaseModel

from recruitment_backend.models.account import Role


class DashboardStats(BaseModel):
    """Role-specific counters.

    For HR the posting counters cover the caller's own postings; for a
    candidate both posting counters are the number of open postings.
    """

    role: Role
    total_job_postings: int
    open_job_postings: int
    total_applications: int
    pending_applications: int
    upcoming_interviews: int
