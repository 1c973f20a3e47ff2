"""Registration and login endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
import structlog

from recruitment_backend.auth.access import Principal
from recruitment_backend.auth.dependencies import get_current_principal
from recruitment_backend.core.database import get_db
from recruitment_backend.core.logging import performance_logger
from recruitment_backend.schemas.account import AccountCreate, AccountResponse, AuthResponse, LoginRequest
from recruitment_backend.services.account_service import AccountService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(data: AccountCreate, db: Session = Depends(get_db)):
    """Create an HR or candidate account and return a token for it."""
    with performance_logger.log_operation_time("register", role=data.role.value):
        response = AccountService().register(db, data)

    logger.info("Account registered via API", account_id=str(response.account.id))
    return response


@router.post("/login", response_model=AuthResponse)
async def login(data: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for a bearer token."""
    with performance_logger.log_operation_time("login"):
        return AccountService().login(db, data)


@router.get("/me", response_model=AccountResponse)
async def me(principal: Principal = Depends(get_current_principal)):
    """The authenticated caller's account."""
    return principal.account
