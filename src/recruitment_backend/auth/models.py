"""Token schemas for the authentication boundary."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class Token(BaseModel):
    """Token response schema."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class TokenData(BaseModel):
    """Token data schema for JWT payload."""
    account_id: Optional[UUID] = None
    email: Optional[str] = None
    role: Optional[str] = None
    jti: Optional[str] = None
