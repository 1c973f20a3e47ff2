"""Authentication and authorization module."""

from .access import (
    Principal,
    HRPrincipal,
    CandidatePrincipal,
    principal_for,
    require_authenticated,
    require_role,
    ensure_owner,
)
from .dependencies import (
    get_current_principal,
    get_optional_principal,
    get_subscription_principal,
    get_event_bus,
    get_publisher,
)
from .models import Token, TokenData
from .utils import (
    create_access_token,
    decode_access_token,
    issue_token,
    get_password_hash,
    verify_password,
    authenticate_account,
)

__all__ = [
    "Principal",
    "HRPrincipal",
    "CandidatePrincipal",
    "principal_for",
    "require_authenticated",
    "require_role",
    "ensure_owner",
    "get_current_principal",
    "get_optional_principal",
    "get_subscription_principal",
    "get_event_bus",
    "get_publisher",
    "Token",
    "TokenData",
    "create_access_token",
    "decode_access_token",
    "issue_token",
    "get_password_hash",
    "verify_password",
    "authenticate_account",
]
