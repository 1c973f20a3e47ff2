"""Account directory and profile endpoints."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from recruitment_backend.auth.access import Principal
from recruitment_backend.auth.dependencies import get_current_principal
from recruitment_backend.core.database import get_db
from recruitment_backend.core.logging import performance_logger
from recruitment_backend.models.account import Role
from recruitment_backend.schemas.account import AccountResponse, AccountUpdate
from recruitment_backend.schemas.common import MessageResponse, Page, build_page
from recruitment_backend.services.account_service import AccountService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=Page[AccountResponse])
async def list_users(
    role: Optional[Role] = Query(None),
    search: Optional[str] = Query(None, max_length=100),
    limit: int = Query(20, ge=1),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    """List accounts; ``limit`` is capped at the account page size."""
    with performance_logger.log_operation_time("list_users", account_id=str(principal.account_id)):
        accounts, total, limit = AccountService().list_all(
            db, principal,
            role=role.value if role else None,
            search=search,
            limit=limit,
            offset=offset
        )
    items = [AccountResponse.model_validate(account) for account in accounts]
    return build_page(items, total, offset // limit + 1, limit)


@router.patch("/me", response_model=AccountResponse)
async def update_profile(
    data: AccountUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    with performance_logger.log_operation_time("update_profile", account_id=str(principal.account_id)):
        return AccountService().update_profile(db, principal, data)


@router.delete("/me", response_model=MessageResponse)
async def delete_account(
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    AccountService().delete(db, principal)
    return MessageResponse(message="Account deleted")


@router.get("/{account_id}", response_model=AccountResponse)
async def get_user(
    account_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal)
):
    return AccountService().get(db, principal, account_id)
