"""Pydantic schemas for accounts and authentication."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from recruitment_backend.models.account import Role


class AccountBase(BaseModel):
    """Profile fields shared by registration and responses."""

    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    phone: str = Field(default="", max_length=50)
    skills: List[str] = Field(default_factory=list)
    company: str = Field(default="", max_length=255)
    position: str = Field(default="", max_length=255)

    @field_validator("first_name", "last_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name cannot be blank")
        return v


class AccountCreate(AccountBase):
    """Registration payload."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    role: Role

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class AccountUpdate(BaseModel):
    """Profile update; only provided fields change."""

    first_name: Optional[str] = Field(None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(None, min_length=1, max_length=50)
    phone: Optional[str] = Field(None, max_length=50)
    avatar: Optional[str] = Field(None, max_length=500)
    skills: Optional[List[str]] = None
    company: Optional[str] = Field(None, max_length=255)
    position: Optional[str] = Field(None, max_length=255)


class AccountResponse(AccountBase):
    """Account as returned by the API. Never carries the password hash."""

    id: UUID
    email: str
    role: Role
    avatar: str = ""
    full_name: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.strip().lower()


class AuthResponse(BaseModel):
    """Token plus the identity it was issued for."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    account: AccountResponse
