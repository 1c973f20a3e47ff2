"""Authentication utilities."""

import hashlib
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session
import structlog

from recruitment_backend.core.config import settings
from recruitment_backend.models.account import Account
from .models import Token, TokenData

logger = structlog.get_logger(__name__)


def get_pwd_context() -> CryptContext:
    """Get password context based on environment."""
    if settings.testing:
        return CryptContext(schemes=["plaintext"], deprecated="auto")
    return CryptContext(schemes=["bcrypt"], deprecated="auto")


def _prepare(password: str) -> str:
    # bcrypt only looks at the first 72 bytes
    if not settings.testing and len(password.encode("utf-8")) > 72:
        return hashlib.sha256(password.encode("utf-8")).hexdigest()
    return password


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password from database

    Returns:
        True if password matches, False otherwise
    """
    try:
        return get_pwd_context().verify(_prepare(plain_password), hashed_password)
    except ValueError:
        logger.warning("Stored password hash is not recognised")
        return False


def get_password_hash(password: str) -> str:
    """Hash a password, pre-hashing with SHA-256 beyond bcrypt's limit."""
    return get_pwd_context().hash(_prepare(password))


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token carrying a unique ``jti``.

    Args:
        data: Claims to encode in the token
        expires_delta: Token lifetime, defaults to the configured expiry

    Returns:
        Encoded JWT token
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))

    jti = str(uuid.uuid4())
    to_encode.update({
        "exp": expire,
        "jti": jti,
        "iat": now
    })

    encoded_jwt = jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)

    logger.debug("Access token created", expires_at=expire.isoformat(), jti=jti)
    return encoded_jwt


def issue_token(account: Account) -> Token:
    """Issue a bearer token for ``account``."""
    access_token = create_access_token({
        "sub": str(account.id),
        "email": account.email,
        "role": account.role,
    })
    return Token(
        access_token=access_token,
        expires_in=settings.access_token_expire_minutes * 60
    )


def decode_access_token(token: str) -> Optional[TokenData]:
    """Verify and decode a JWT token.

    Expiry is enforced by the JWT library.

    Returns:
        TokenData if valid, None otherwise
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        logger.warning("Token verification failed", error=str(e))
        return None

    account_id = payload.get("sub")
    if account_id is None:
        logger.warning("Token missing account ID")
        return None

    try:
        return TokenData(
            account_id=UUID(account_id),
            email=payload.get("email"),
            role=payload.get("role"),
            jti=payload.get("jti")
        )
    except ValueError as e:
        logger.warning("Invalid UUID in token", error=str(e))
        return None


def get_account_by_id(db: Session, account_id: UUID) -> Optional[Account]:
    """Live account by ID; soft-deleted accounts resolve to None."""
    return db.query(Account).filter(
        Account.id == account_id,
        Account.is_deleted.is_(False)
    ).first()


def authenticate_account(db: Session, email: str, password: str) -> Optional[Account]:
    """Check an email/password pair.

    Returns:
        The account if the credentials match, None otherwise
    """
    account = db.query(Account).filter(
        Account.email == email.strip().lower(),
        Account.is_deleted.is_(False)
    ).first()

    if not account:
        logger.warning("Login for unknown email", email=email)
        return None

    if not verify_password(password, account.hashed_password):
        logger.warning("Invalid password", email=email)
        return None

    logger.info("Account authenticated", email=email, account_id=str(account.id))
    return account
