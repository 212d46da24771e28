"""
Base repository: create, lookup, locked lookup and update for one model.

Repositories never commit on their own unless asked to: services own the
unit of work and decide when a read-modify-write is complete.
"""

from typing import Any, Dict, Generic, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from maintenance_portal.core.exceptions import NotFoundError
from maintenance_portal.core.logging import get_logger
from maintenance_portal.models.base.base_model import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository for a single mapped model.
    """

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    def supports_row_locks(self) -> bool:
        """Whether the bound dialect honours SELECT ... FOR UPDATE."""
        bind = self.db.get_bind()
        return bind.dialect.name not in ("sqlite",)

    # ==================== Create Operations ====================

    def create(self, entity: ModelType, commit: bool = False) -> ModelType:
        """
        Add a new entity to the session.

        Args:
            entity: Entity to create
            commit: Whether to commit immediately (otherwise flush only)

        Returns:
            Created entity with its generated fields populated
        """
        self.db.add(entity)
        if commit:
            self.db.commit()
            self.db.refresh(entity)
        else:
            self.db.flush()

        logger.debug(f"Created {self.model.__name__} with id: {entity.id}")
        return entity

    # ==================== Read Operations ====================

    def find_by_id(self, id: str) -> Optional[ModelType]:
        """
        Find entity by ID.

        Returns:
            Entity or None
        """
        if id is None:
            return None
        return self.db.get(self.model, id)

    def get_by_id(self, id: str) -> ModelType:
        """
        Get entity by ID or raise.

        Raises:
            NotFoundError: If entity not found
        """
        entity = self.find_by_id(id)
        if not entity:
            raise NotFoundError(self.model.__name__, id)
        return entity

    def find_by_id_for_update(self, id: str) -> Optional[ModelType]:
        """
        Find entity by ID, locking the row for the rest of the transaction
        where the backend supports row locks.
        """
        if id is None:
            return None
        stmt = select(self.model).where(self.model.id == id)
        if self.supports_row_locks():
            stmt = stmt.with_for_update()
        return self.db.execute(stmt).scalars().first()

    # ==================== Update Operations ====================

    def update(self, entity: ModelType, data: Dict[str, Any], commit: bool = False) -> ModelType:
        """
        Apply field updates to a loaded entity.

        Unknown keys are ignored.

        Args:
            entity: Entity to update
            data: Field values to set
            commit: Whether to commit immediately (otherwise flush only)

        Returns:
            Updated entity
        """
        for key, value in data.items():
            if hasattr(entity, key):
                setattr(entity, key, value)

        if commit:
            self.db.commit()
            self.db.refresh(entity)
        else:
            self.db.flush()
        return entity
