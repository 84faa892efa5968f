"""
Base Repository implementation.
Provides common data access patterns shared by every entity.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session


ModelT = TypeVar("ModelT")


class BaseRepository(ABC, Generic[ModelT]):
    """
    Abstract base repository with common operations.

    Subclasses must implement:
    - model: the SQLAlchemy model class
    - _base_query(): select with eager loading and default ordering
    """

    def __init__(self, db: Session):
        self._db = db

    @property
    @abstractmethod
    def model(self) -> type[ModelT]:
        """Return the SQLAlchemy model class."""
        ...

    @abstractmethod
    def _base_query(self) -> Select:
        """Return base query with eager loading and default ordering."""
        ...

    def find_all(self, *conditions: Any) -> Sequence[ModelT]:
        """Find all entities matching ``conditions`` in default order."""
        query = self._base_query()
        if conditions:
            query = query.where(*conditions)
        return self._db.execute(query).scalars().unique().all()

    def find_by_id(self, entity_id: int, *, for_update: bool = False) -> ModelT | None:
        """
        Find entity by ID.

        ``for_update`` takes a row lock (SELECT ... FOR UPDATE) held until the
        transaction ends; ignored by SQLite.
        """
        query = select(self.model).where(self.model.id == entity_id)
        if for_update:
            query = query.with_for_update()
        return self._db.scalar(query)

    def count(self, *conditions: Any) -> int:
        """Count entities matching ``conditions``."""
        query = select(func.count()).select_from(self.model)
        if conditions:
            query = query.where(*conditions)
        return self._db.scalar(query) or 0

    def exists(self, entity_id: int) -> bool:
        """Check if entity exists."""
        return self.count(self.model.id == entity_id) > 0

    def save(self, entity: ModelT) -> ModelT:
        """Add (or re-add) entity and flush so it gets its ID."""
        self._db.add(entity)
        self._db.flush()
        return entity

    def delete(self, entity: ModelT) -> None:
        """Hard delete entity."""
        self._db.delete(entity)
        self._db.flush()
