# liftbook/repositories/base.py
from __future__ import annotations
from typing import Generic, Optional, TypeVar

from sqlalchemy.orm import Session

T = TypeVar("T")  # SQLAlchemy model type

class BaseRepository(Generic[T]):
    """Lightweight base for repositories using SQLAlchemy 2.0 style.

    Repositories only flush. The service that owns the unit of work decides
    when to commit, so several repository writes can land atomically.
    """
    model: type[T]

    def __init__(self, db: Session):
        self.db = db

    def get(self, ident: int) -> Optional[T]:
        return self.db.get(self.model, ident)

    def add_and_refresh(self, entity: T) -> T:
        self.db.add(entity)
        self.db.flush()
        self.db.refresh(entity)
        return entity
