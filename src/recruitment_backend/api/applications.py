"""Application management API endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import structlog

from recruitment_backend.auth.access import Principal
from recruitment_backend.auth.dependencies import get_current_principal, get_publisher
from recruitment_backend.core.database import get_db
from recruitment_backend.core.event_publisher import EventPublisher
from recruitment_backend.core.logging import performance_logger
from recruitment_backend.models.application import ApplicationStatus
from recruitment_backend.schemas.application import (
    ApplicationCreate,
    ApplicationDetail,
    ApplicationResponse,
    ApplicationUpdate,
)
from recruitment_backend.schemas.common import MessageResponse, Page, build_page
from recruitment_backend.schemas.interview import InterviewResponse
from recruitment_backend.services.application_service import ApplicationService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/applications", tags=["applications"])


@router.get("", response_model=Page[ApplicationResponse])
async def list_applications(
    job_posting_id: Optional[UUID] = Query(None),
    candidate_id: Optional[UUID] = Query(None),
    status_filter: Optional[ApplicationStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """List all applications (HR only)."""
    with performance_logger.log_operation_time("list_applications", account_id=str(principal.account_id)):
        items, total, limit = ApplicationService().list_all(
            db, principal,
            page=page,
            limit=limit,
            job_posting_id=job_posting_id,
            candidate_id=candidate_id,
            status=status_filter.value if status_filter else None
        )
    return build_page([ApplicationResponse.model_validate(a) for a in items], total, page, limit)


@router.get("/mine", response_model=Page[ApplicationResponse])
async def my_applications(
    status_filter: Optional[ApplicationStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """The calling candidate's applications."""
    items, total, limit = ApplicationService().list_mine(
        db, principal,
        page=page,
        limit=limit,
        status=status_filter.value if status_filter else None
    )
    return build_page([ApplicationResponse.model_validate(a) for a in items], total, page, limit)


@router.get("/{application_id}", response_model=ApplicationDetail)
async def get_application(
    application_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    application, interviews = ApplicationService().get(db, principal, application_id)
    return ApplicationDetail(
        **ApplicationResponse.model_validate(application).model_dump(),
        interviews=[InterviewResponse.model_validate(i) for i in interviews]
    )


@router.post("", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def apply_to_job_posting(
    data: ApplicationCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    publisher: EventPublisher = Depends(get_publisher)
):
    """Apply to an OPEN job posting (candidates only)."""
    with performance_logger.log_operation_time(
        "apply_to_job_posting",
        account_id=str(principal.account_id),
        job_posting_id=str(data.job_posting_id)
    ):
        application = await ApplicationService(publisher).apply(db, principal, data)

    logger.info(
        "Application created via API",
        application_id=str(application.id),
        candidate_id=str(application.candidate_id)
    )
    return application


@router.patch("/{application_id}", response_model=ApplicationResponse)
async def update_application(
    application_id: UUID,
    data: ApplicationUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
    publisher: EventPublisher = Depends(get_publisher)
):
    """Update status and/or notes (HR only)."""
    with performance_logger.log_operation_time("update_application", application_id=str(application_id)):
        return await ApplicationService(publisher).update(db, principal, application_id, data)


@router.delete("/{application_id}", response_model=MessageResponse)
async def withdraw_application(
    application_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """Withdraw the caller's own application."""
    ApplicationService().withdraw(db, principal, application_id)
    return MessageResponse(message="Application withdrawn")
