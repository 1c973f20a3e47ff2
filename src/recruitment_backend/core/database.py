"""Engine and session lifecycle for the entity store."""

from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from .config import settings
from .base import Base
import structlog

logger = structlog.get_logger(__name__)

IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


class DatabaseManager:
    """Owns the engine and hands out sessions.

    PostgreSQL gets a bounded connection pool. SQLite is allowed across
    threads, and an in-memory SQLite database is kept on one shared
    connection so every session sees the same tables.
    """

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url
        self.engine: Optional[Engine] = None
        self.SessionLocal: Optional[sessionmaker] = None

    def _engine_options(self) -> Dict[str, Any]:
        if not self.database_url.startswith("sqlite"):
            return {
                "poolclass": QueuePool,
                "pool_size": 10,
                "max_overflow": 20,
                "pool_timeout": 30,
                "pool_recycle": 3600,
                "pool_pre_ping": True,
            }

        options: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if self.database_url in IN_MEMORY_URLS:
            options["poolclass"] = StaticPool
        return options

    def _require_engine(self) -> Engine:
        if self.engine is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return self.engine

    def initialize(self) -> None:
        """Create the engine and session factory once."""
        if self.engine is not None:
            return

        self.engine = create_engine(
            self.database_url,
            echo=settings.log_level.upper() == "DEBUG",
            **self._engine_options()
        )
        # Objects stay readable after commit; services return them to the API
        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False
        )

        logger.info("Database engine initialized", dialect=self.engine.dialect.name)

    def close(self) -> None:
        """Dispose of the engine and its pool."""
        if self.engine is None:
            return
        self.engine.dispose()
        self.engine = None
        self.SessionLocal = None
        logger.info("Database engine closed")

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Session that commits on success and rolls back on error.

        Raises:
            RuntimeError: If the manager has not been initialized
        """
        self._require_engine()
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_tables(self) -> None:
        """Create every table and index declared on the models."""
        engine = self._require_engine()

        # Registers every mapped class on the metadata
        import recruitment_backend.models  # noqa: F401

        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created", tables=len(Base.metadata.tables))

    def drop_tables(self) -> None:
        engine = self._require_engine()
        Base.metadata.drop_all(bind=engine)
        logger.info("Database tables dropped")


# Global database manager instance
db_manager = DatabaseManager(settings.sqlalchemy_url)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding one session per request."""
    with db_manager.get_session() as session:
        yield session


def init_db() -> None:
    """Connect and make sure the schema exists."""
    db_manager.initialize()
    db_manager.create_tables()


def close_db() -> None:
    db_manager.close()
