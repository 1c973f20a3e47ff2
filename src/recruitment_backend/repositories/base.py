"""Base repository class with common CRUD operations.

Every query issued through a repository excludes soft-deleted rows; there
is no path that returns them.
"""

from typing import Any, Dict, Generic, List, Optional, Tuple, Type, TypeVar
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session
import structlog

from recruitment_backend.core.base import Base
from recruitment_backend.core.error_handling import ConflictError

logger = structlog.get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository class with common CRUD operations."""

    # Message used when a uniqueness constraint rejects a write
    conflict_message = "Record already exists"

    def __init__(self, model: Type[ModelType]):
        """Initialize repository with model class.

        Args:
            model: SQLAlchemy model class
        """
        self.model = model

    def query(self, db: Session) -> Query:
        """Base query over live (non-deleted) rows."""
        return db.query(self.model).filter(self.model.is_deleted.is_(False))

    def _apply_filters(self, query: Query, filters: Optional[Dict[str, Any]]) -> Query:
        if filters:
            for field, value in filters.items():
                if value is not None and hasattr(self.model, field):
                    query = query.filter(getattr(self.model, field) == value)
        return query

    def _commit(self, db: Session, action: str, instance: Optional[ModelType] = None) -> None:
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            logger.warning(
                "Record write rejected by constraint",
                model=self.model.__name__,
                action=action,
                error=str(e.orig)
            )
            raise ConflictError(self.conflict_message) from e
        if instance is not None:
            db.refresh(instance)

    def create(self, db: Session, **kwargs) -> ModelType:
        """Create a new record.

        Args:
            db: Database session
            **kwargs: Model field values

        Returns:
            Created model instance

        Raises:
            ConflictError: If a uniqueness constraint rejects the row
        """
        instance = self.model(**kwargs)
        db.add(instance)
        self._commit(db, "create", instance)

        logger.info(
            "Record created",
            model=self.model.__name__,
            id=str(instance.id)
        )
        return instance

    def get_by_id(self, db: Session, id: UUID) -> Optional[ModelType]:
        """Get a live record by ID.

        Args:
            db: Database session
            id: Record UUID

        Returns:
            Model instance if found, None otherwise
        """
        return self.query(db).filter(self.model.id == id).first()

    def paginate(
        self,
        query: Query,
        page: int,
        limit: int,
        order_by: Any = None
    ) -> Tuple[List[ModelType], int]:
        """Run ``query`` for one page.

        Args:
            query: Filtered query
            page: 1-based page number
            limit: Page size, already clamped
            order_by: Ordering clause, newest first when omitted

        Returns:
            Tuple of (items, total matching rows)
        """
        total = query.order_by(None).count()
        if order_by is None:
            order_by = self.model.created_at.desc()
        items = query.order_by(order_by).offset((page - 1) * limit).limit(limit).all()
        return items, total

    def update(self, db: Session, instance: ModelType, **kwargs) -> ModelType:
        """Apply the given field values to ``instance`` and persist them.

        ``None`` values are skipped, so callers can pass optional updates
        straight through.
        """
        for field, value in kwargs.items():
            if hasattr(instance, field) and value is not None:
                setattr(instance, field, value)

        self._commit(db, "update", instance)

        logger.info(
            "Record updated",
            model=self.model.__name__,
            id=str(instance.id),
            fields=sorted(k for k, v in kwargs.items() if v is not None)
        )
        return instance

    def soft_delete(self, db: Session, instance: ModelType) -> ModelType:
        """Flag ``instance`` as deleted; the row stays in the table."""
        instance.soft_delete()
        self._commit(db, "delete", instance)

        logger.info(
            "Record soft deleted",
            model=self.model.__name__,
            id=str(instance.id)
        )
        return instance

    def count(self, db: Session, filters: Optional[Dict[str, Any]] = None) -> int:
        """Count live records with optional equality filters."""
        return self._apply_filters(self.query(db), filters).count()
