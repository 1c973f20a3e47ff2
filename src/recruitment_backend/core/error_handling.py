"""Error taxonomy and centralized error handling."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .logging import get_logger, error_logger

logger = get_logger(__name__)


class ErrorKind(str, Enum):
    """Machine-readable error kinds surfaced to API callers."""
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    CONFLICT = "CONFLICT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class RecruitmentError(Exception):
    """Base exception class for recruitment system errors."""

    kind: ErrorKind = ErrorKind.INTERNAL_ERROR
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging and API responses."""
        return {
            "code": self.kind.value,
            "message": self.message,
        }


class AuthenticationError(RecruitmentError):
    """No credential, or a credential that does not resolve to an account."""
    kind = ErrorKind.UNAUTHENTICATED
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class ForbiddenError(RecruitmentError):
    """Authenticated caller lacks the role or does not own the resource."""
    kind = ErrorKind.FORBIDDEN
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not authorized"


class NotFoundError(RecruitmentError):
    """Identifier does not resolve to a non-deleted record."""
    kind = ErrorKind.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, resource: str = "Resource"):
        super().__init__(f"{resource} not found")
        self.resource = resource


class ValidationError(RecruitmentError):
    """Input failed field-level checks; the message lists every violated rule."""
    kind = ErrorKind.VALIDATION_ERROR
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid input"


class ConflictError(RecruitmentError):
    """A uniqueness or state precondition was violated."""
    kind = ErrorKind.CONFLICT
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> str:
    """Join pydantic error entries into one human-readable message."""
    messages = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        message = str(error.get("msg", "Invalid value"))
        # Custom validator messages arrive prefixed by pydantic
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        messages.append(f"{'.'.join(location)}: {message}" if location else message)
    return ", ".join(messages)


class ErrorHandler:
    """Centralized error handling with logging."""

    def __init__(self):
        self.logger = get_logger("error_handler")

    def handle_error(self, error: Exception, operation: str) -> RecruitmentError:
        """Classify an exception and log it at a level matching its kind."""
        if isinstance(error, RecruitmentError):
            self.logger.info(
                "Request rejected",
                operation=operation,
                **error.to_dict()
            )
            return error

        error_logger.log_error_with_context(error, operation=operation)
        return RecruitmentError()


error_handler = ErrorHandler()


def _error_response(error: RecruitmentError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"error": error.to_dict()},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"error": {"code", "message"}}``."""

    @app.exception_handler(RecruitmentError)
    async def handle_recruitment_error(request: Request, exc: RecruitmentError):
        return _error_response(error_handler.handle_error(exc, request.url.path))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        error = ValidationError(format_validation_errors(exc.errors()))
        return _error_response(error_handler.handle_error(error, request.url.path))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        return _error_response(error_handler.handle_error(exc, request.url.path))
