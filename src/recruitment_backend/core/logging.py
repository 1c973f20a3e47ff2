"""Structured logging configuration."""

import logging
import sys
import time
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import structlog
from structlog.stdlib import LoggerFactory

from .config import settings

# Third-party loggers and the level they are held at
LIBRARY_LOG_LEVELS = {
    "uvicorn": logging.INFO,
    "uvicorn.access": logging.WARNING,
    "passlib": logging.ERROR,
}


def _renderer():
    if settings.environment == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging() -> None:
    """Configure structlog and route stdlib logging to stdout.

    Safe to call more than once; the last call wins.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            _renderer(),
        ],
        context_class=dict,
        logger_factory=LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    for name, library_level in LIBRARY_LOG_LEVELS.items():
        logging.getLogger(name).setLevel(library_level)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if level == logging.DEBUG else logging.WARNING
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Structured logger for ``name`` (usually ``__name__``)."""
    return structlog.get_logger(name)


class PerformanceLogger:
    """Times named operations and logs how long they took."""

    def __init__(self, logger_name: str = "performance"):
        self.logger = get_logger(logger_name)

    @contextmanager
    def log_operation_time(self, operation: str, **context: Any) -> Iterator[None]:
        """Log the duration of the wrapped block.

        A block that raises is logged at warning with the error type, and
        the exception propagates unchanged.

        Args:
            operation: Name of the operation being timed
            **context: Extra key/value pairs for the log entry
        """
        started = time.perf_counter()
        try:
            yield
        except Exception as e:
            self.logger.warning(
                "Operation failed",
                operation=operation,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
                error=str(e),
                error_type=type(e).__name__,
                **context
            )
            raise

        self.logger.debug(
            "Operation completed",
            operation=operation,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
            **context
        )


class ErrorLogger:
    """Logs unexpected failures and denied access decisions."""

    def __init__(self, logger_name: str = "error"):
        self.logger = get_logger(logger_name)

    def log_error_with_context(
        self,
        error: Exception,
        operation: str,
        account_id: Optional[str] = None,
        **context: Any
    ) -> None:
        """Log an unexpected error with its traceback."""
        self.logger.error(
            "Unhandled error",
            operation=operation,
            error=str(error),
            error_type=type(error).__name__,
            account_id=account_id,
            exc_info=error,
            **context
        )

    def log_access_denied(
        self,
        reason: str,
        account_id: Optional[str] = None,
        role: Optional[str] = None,
        **context: Any
    ) -> None:
        self.logger.warning(
            "Access denied",
            reason=reason,
            account_id=account_id,
            role=role,
            **context
        )


# Global logger instances
performance_logger = PerformanceLogger()
error_logger = ErrorLogger()
