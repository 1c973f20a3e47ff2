"""Job posting API endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import structlog

from recruitment_backend.auth.access import Principal
from recruitment_backend.auth.dependencies import get_current_principal
from recruitment_backend.core.database import get_db
from recruitment_backend.core.logging import performance_logger
from recruitment_backend.models.job_posting import PostingStatus, PostingType
from recruitment_backend.schemas.common import MessageResponse, Page, build_page
from recruitment_backend.schemas.job_posting import JobPostingCreate, JobPostingResponse, JobPostingUpdate
from recruitment_backend.services.job_posting_service import JobPostingService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/job-postings", tags=["job-postings"])


@router.get("", response_model=Page[JobPostingResponse])
async def list_job_postings(
    status_filter: Optional[PostingStatus] = Query(None, alias="status"),
    type: Optional[PostingType] = Query(None),
    department: Optional[str] = Query(None),
    search: Optional[str] = Query(None, max_length=200),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """List postings, newest first.

    Without a status filter only OPEN postings are returned. Candidates
    always get OPEN postings whatever filter they send.
    """
    service = JobPostingService()
    with performance_logger.log_operation_time("list_job_postings", account_id=str(principal.account_id)):
        postings, total, limit = service.list_all(
            db, principal,
            page=page,
            limit=limit,
            status=status_filter,
            type=type,
            department=department,
            search=search
        )
        return build_page(service.to_responses(db, postings), total, page, limit)


@router.get("/mine", response_model=Page[JobPostingResponse])
async def my_job_postings(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    service = JobPostingService()
    postings, total, limit = service.list_mine(db, principal, page=page, limit=limit)
    return build_page(service.to_responses(db, postings), total, page, limit)


@router.get("/{posting_id}", response_model=JobPostingResponse)
async def get_job_posting(
    posting_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    service = JobPostingService()
    return service.to_response(db, service.get(db, principal, posting_id))


@router.post("", response_model=JobPostingResponse, status_code=status.HTTP_201_CREATED)
async def create_job_posting(
    data: JobPostingCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    service = JobPostingService()
    with performance_logger.log_operation_time("create_job_posting", account_id=str(principal.account_id)):
        posting = service.create(db, principal, data)

    logger.info("Job posting created via API", job_posting_id=str(posting.id))
    return service.to_response(db, posting)


@router.patch("/{posting_id}", response_model=JobPostingResponse)
async def update_job_posting(
    posting_id: UUID,
    data: JobPostingUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    service = JobPostingService()
    with performance_logger.log_operation_time("update_job_posting", job_posting_id=str(posting_id)):
        posting = service.update(db, principal, posting_id, data)
    return service.to_response(db, posting)


@router.delete("/{posting_id}", response_model=MessageResponse)
async def delete_job_posting(
    posting_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    JobPostingService().delete(db, principal, posting_id)
    return MessageResponse(message="Job posting deleted")
