"""Account repository for database operations."""

from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from recruitment_backend.models.account import Account
from .base import BaseRepository


class AccountRepository(BaseRepository[Account]):
    """Repository for Account model operations."""

    conflict_message = "Email already registered"

    def __init__(self):
        super().__init__(Account)

    def get_by_email(self, db: Session, email: str) -> Optional[Account]:
        return self.query(db).filter(Account.email == email.strip().lower()).first()

    def get_many(self, db: Session, ids: List[UUID]) -> List[Account]:
        """Live accounts among ``ids``; missing ids are simply absent."""
        if not ids:
            return []
        return self.query(db).filter(Account.id.in_(ids)).all()

    def search(
        self,
        db: Session,
        role: Optional[str] = None,
        search: Optional[str] = None,
        limit: int = 100,
        offset: int = 0
    ) -> Tuple[List[Account], int]:
        """Filter accounts by role and by a name/email substring.

        Returns:
            Tuple of (accounts, total matching)
        """
        query = self._apply_filters(self.query(db), {"role": role})

        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    Account.first_name.ilike(pattern),
                    Account.last_name.ilike(pattern),
                    Account.email.ilike(pattern),
                )
            )

        total = query.count()
        accounts = query.order_by(Account.created_at.desc()).offset(offset).limit(limit).all()
        return accounts, total
