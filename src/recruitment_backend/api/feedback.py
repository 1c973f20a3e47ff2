"""Interview feedback API endpoints."""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from recruitment_backend.auth.access import Principal
from recruitment_backend.auth.dependencies import get_current_principal
from recruitment_backend.core.database import get_db
from recruitment_backend.core.logging import performance_logger
from recruitment_backend.schemas.common import MessageResponse
from recruitment_backend.schemas.feedback import FeedbackCreate, FeedbackResponse, FeedbackSummary, FeedbackUpdate
from recruitment_backend.services.feedback_service import FeedbackService

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.get("", response_model=List[FeedbackResponse])
async def list_feedback(
    interview_id: UUID = Query(...),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    return FeedbackService().list_for_interview(db, principal, interview_id)


@router.get("/summary", response_model=FeedbackSummary)
async def feedback_summary(
    interview_id: UUID = Query(...),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Average overall rating for an interview."""
    return FeedbackService().summary(db, principal, interview_id)


@router.get("/{feedback_id}", response_model=FeedbackResponse)
async def get_feedback(
    feedback_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    return FeedbackService().get(db, principal, feedback_id)


@router.post("", response_model=FeedbackResponse, status_code=status.HTTP_201_CREATED)
async def submit_feedback(
    data: FeedbackCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    with performance_logger.log_operation_time("submit_feedback", interview_id=str(data.interview_id)):
        return FeedbackService().submit(db, principal, data)


@router.patch("/{feedback_id}", response_model=FeedbackResponse)
async def update_feedback(
    feedback_id: UUID,
    data: FeedbackUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    return FeedbackService().update(db, principal, feedback_id, data)


@router.delete("/{feedback_id}", response_model=MessageResponse)
async def delete_feedback(
    feedback_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    FeedbackService().delete(db, principal, feedback_id)
    return MessageResponse(message="Feedback deleted")
