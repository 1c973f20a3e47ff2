"""FastAPI dependencies for authentication and authorization."""

from typing import Optional

from fastapi import Depends, Query, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
import structlog

from recruitment_backend.core.database import get_db
from recruitment_backend.core.error_handling import AuthenticationError
from recruitment_backend.core.event_bus import EventBus
from recruitment_backend.core.event_publisher import EventPublisher
from .access import Principal, principal_for, require_authenticated
from .utils import decode_access_token, get_account_by_id

logger = structlog.get_logger(__name__)

# Security scheme; missing credentials are reported by the access gate
security = HTTPBearer(auto_error=False)


def resolve_principal(db: Session, token: Optional[str]) -> Optional[Principal]:
    """Resolve a raw bearer token to a principal, or None."""
    if not token:
        return None

    token_data = decode_access_token(token)
    if token_data is None or token_data.account_id is None:
        return None

    account = get_account_by_id(db, token_data.account_id)
    if account is None:
        logger.warning("Token for missing account", account_id=str(token_data.account_id))
        return None

    return principal_for(account)


async def get_optional_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> Optional[Principal]:
    """Current principal if a valid bearer token was sent."""
    return resolve_principal(db, credentials.credentials if credentials else None)


async def get_current_principal(
    principal: Optional[Principal] = Depends(get_optional_principal)
) -> Principal:
    """Current principal; Unauthenticated otherwise."""
    return require_authenticated(principal)


async def get_subscription_principal(
    token: Optional[str] = Query(None, description="Bearer token presented at connection time"),
    db: Session = Depends(get_db)
) -> Principal:
    """Identity for a subscription, taken once from the connection URL."""
    principal = resolve_principal(db, token)
    if principal is None:
        raise AuthenticationError("A valid token is required to subscribe")
    return principal


def get_event_bus(request: Request) -> EventBus:
    """The process-wide bus created in the application lifespan."""
    return request.app.state.event_bus


def get_publisher(bus: EventBus = Depends(get_event_bus)) -> EventPublisher:
    return EventPublisher(bus)
