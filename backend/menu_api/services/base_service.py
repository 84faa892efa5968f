"""
Base Service Classes.

Router (thin) -> Service (business rules) -> Repository (data access) -> Model

Services raise the exceptions from shared.utils.exceptions; routers never
catch them. Every mutation commits through ``_commit`` and writes one INFO
audit line.

Usage:
    class CategoryService(BaseCRUDService[Category, CategoryOutput]):
        def __init__(self, db: Session):
            super().__init__(
                db=db,
                repo=CategoryRepository(db),
                output_schema=CategoryOutput,
                entity_name="Category",
            )
"""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from menu_api.models import Base
from menu_api.repositories import BaseRepository
from shared.infrastructure.db import safe_commit
from shared.config.logging import get_logger, catalog_logger
from shared.utils.exceptions import NotFoundError, ConflictError, DatabaseError

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
OutputT = TypeVar("OutputT", bound=BaseModel)


class BaseCRUDService(Generic[ModelT, OutputT]):
    """
    Base service for entities with CRUD operations.

    Subclasses override the ``_validate_*`` hooks for business rules and
    ``_on_integrity_error`` to translate constraint violations.
    """

    def __init__(
        self,
        db: Session,
        repo: BaseRepository[ModelT],
        output_schema: type[OutputT],
        entity_name: str,
    ):
        self._db = db
        self._repo = repo
        self._output_schema = output_schema
        self._entity_name = entity_name

    @property
    def db(self) -> Session:
        return self._db

    @property
    def entity_name(self) -> str:
        return self._entity_name

    # =========================================================================
    # Read Operations
    # =========================================================================

    def get_entity(self, entity_id: int, *, for_update: bool = False) -> ModelT:
        """
        Get raw entity.

        Raises:
            NotFoundError: If entity not found.
        """
        entity = self._repo.find_by_id(entity_id, for_update=for_update)
        if entity is None:
            raise NotFoundError(self._entity_name, entity_id)
        return entity

    def get_by_id(self, entity_id: int) -> OutputT:
        return self.to_output(self.get_entity(entity_id))

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create(self, data: dict[str, Any], actor: str | None = None) -> OutputT:
        """
        Create new entity.

        Raises:
            ValidationError / ConflictError: From the validation hooks.
            DatabaseError: If the database rejects the insert unexpectedly.
        """
        data = self._validate_create(dict(data))

        entity = self._repo.model(**data)
        self._commit("create", lambda: self._repo.save(entity))
        self._db.refresh(entity)

        catalog_logger.info(
            f"{self._entity_name} created", entity_id=entity.id, actor=actor
        )
        return self.to_output(entity)

    def update(self, entity_id: int, data: dict[str, Any], actor: str | None = None) -> OutputT:
        """
        Apply a partial update.

        Raises:
            NotFoundError: If entity not found.
            ValidationError / ConflictError: From the validation hooks.
        """
        entity = self.get_entity(entity_id)
        data = self._validate_update(entity, dict(data))

        for field_name, value in data.items():
            setattr(entity, field_name, value)

        self._commit("update")
        self._db.refresh(entity)

        catalog_logger.info(
            f"{self._entity_name} updated",
            entity_id=entity_id,
            fields=sorted(data.keys()),
            actor=actor,
        )
        return self.to_output(entity)

    def delete(self, entity_id: int, actor: str | None = None) -> None:
        """
        Hard delete entity.

        Raises:
            NotFoundError: If entity not found.
        """
        entity = self.get_entity(entity_id, for_update=True)
        self._validate_delete(entity)

        self._commit("delete", lambda: self._repo.delete(entity))

        catalog_logger.info(f"{self._entity_name} deleted", entity_id=entity_id, actor=actor)

    def _commit(self, operation: str, write: Callable[[], Any] | None = None) -> None:
        """
        Run ``write`` and commit, translating database errors into API errors.

        ``write`` flushes, so constraint violations can surface there as well
        as at commit time.
        """
        try:
            if write is not None:
                write()
            safe_commit(self._db)
        except IntegrityError as e:
            self._db.rollback()
            self._on_integrity_error(e, operation)
            raise ConflictError(
                f"{self._entity_name} conflicts with existing data", operation=operation
            )
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.error(
                f"Failed to {operation} {self._entity_name}", error=str(e), exc_info=True
            )
            raise DatabaseError(f"{operation} {self._entity_name.lower()}")

    # =========================================================================
    # Transformation
    # =========================================================================

    def to_output(self, entity: ModelT) -> OutputT:
        return self._output_schema.model_validate(entity)

    # =========================================================================
    # Hooks (override in subclasses)
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> dict[str, Any]:
        return data

    def _validate_update(self, entity: ModelT, data: dict[str, Any]) -> dict[str, Any]:
        return data

    def _validate_delete(self, entity: ModelT) -> None:
        pass

    def _on_integrity_error(self, error: IntegrityError, operation: str) -> None:
        """Raise a more specific error for ``error``; the default is a generic 409."""
        pass
