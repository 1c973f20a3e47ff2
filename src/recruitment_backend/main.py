"""FastAPI application for the recruitment backend."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
import structlog

from recruitment_backend.api.accounts import router as accounts_router
from recruitment_backend.api.applications import router as applications_router
from recruitment_backend.api.auth import router as auth_router
from recruitment_backend.api.dashboard import router as dashboard_router
from recruitment_backend.api.feedback import router as feedback_router
from recruitment_backend.api.interviews import router as interviews_router
from recruitment_backend.api.job_postings import router as job_postings_router
from recruitment_backend.api.notifications import router as notifications_router
from recruitment_backend.api.subscriptions import router as subscriptions_router
from recruitment_backend.core.config import settings
from recruitment_backend.core.database import close_db, init_db
from recruitment_backend.core.error_handling import register_exception_handlers
from recruitment_backend.core.event_bus import EventBus
from recruitment_backend.core.logging import configure_logging

logger = structlog.get_logger(__name__)


def build_lifespan(bus: Optional[EventBus] = None, manage_database: bool = True):
    """Lifespan that owns the process-wide event bus.

    Args:
        bus: Bus to install; a new one is created when omitted
        manage_database: Create tables on startup and dispose the engine on shutdown
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        event_bus = bus or EventBus(queue_size=settings.subscriber_queue_size)
        app.state.event_bus = event_bus

        if manage_database:
            init_db()

        logger.info("Application started", environment=settings.environment)
        try:
            yield
        finally:
            await event_bus.close()
            if manage_database:
                close_db()
            logger.info("Application stopped")

    return lifespan


def create_app(bus: Optional[EventBus] = None, manage_database: bool = True) -> FastAPI:
    """Build the FastAPI application with every router and error handler."""
    configure_logging()

    app = FastAPI(
        title="Recruitment Backend API",
        description="Job postings, applications, interviews and real-time notifications",
        version="0.1.0",
        lifespan=build_lifespan(bus, manage_database)
    )

    register_exception_handlers(app)

    app.include_router(auth_router)
    app.include_router(accounts_router)
    app.include_router(job_postings_router)
    app.include_router(applications_router)
    app.include_router(interviews_router)
    app.include_router(feedback_router)
    app.include_router(notifications_router)
    app.include_router(dashboard_router)
    app.include_router(subscriptions_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "recruitment_backend.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True
    )
