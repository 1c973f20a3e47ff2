"""Interview API endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from recruitment_backend.auth.access import Principal
from recruitment_backend.auth.dependencies import get_current_principal, get_publisher
from recruitment_backend.core.database import get_db
from recruitment_backend.core.event_publisher import EventPublisher
from recruitment_backend.core.logging import performance_logger
from recruitment_backend.schemas.interview import InterviewCreate, InterviewResponse, InterviewUpdate
from recruitment_backend.services.interview_service import InterviewService

router = APIRouter(prefix="/interviews", tags=["interviews"])


@router.get("", response_model=List[InterviewResponse])
async def list_interviews(
    application_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    return InterviewService().list_all(db, principal, application_id=application_id)


@router.get("/mine", response_model=List[InterviewResponse])
async def my_interviews(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """HR: scheduled interviews the caller sits on. Candidate: own interviews."""
    return InterviewService().list_mine(db, principal)


@router.get("/{interview_id}", response_model=InterviewResponse)
async def get_interview(
    interview_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    return InterviewService().get(db, principal, interview_id)


@router.post("", response_model=InterviewResponse, status_code=status.HTTP_201_CREATED)
async def schedule_interview(
    data: InterviewCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    publisher: EventPublisher = Depends(get_publisher)
):
    """Schedule an interview; moves the application to INTERVIEW."""
    with performance_logger.log_operation_time(
        "schedule_interview",
        account_id=str(principal.account_id),
        application_id=str(data.application_id)
    ):
        return await InterviewService(publisher).schedule(db, principal, data)


@router.patch("/{interview_id}", response_model=InterviewResponse)
async def update_interview(
    interview_id: UUID,
    data: InterviewUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    with performance_logger.log_operation_time("update_interview", interview_id=str(interview_id)):
        return InterviewService().update(db, principal, interview_id, data)


@router.post("/{interview_id}/cancel", response_model=InterviewResponse)
async def cancel_interview(
    interview_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    return InterviewService().cancel(db, principal, interview_id)
