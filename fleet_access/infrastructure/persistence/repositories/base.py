"""Base repository: session handle and ORM lookup by primary key."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fleet_access.domain.exceptions import ResourceNotFoundException
from fleet_access.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository holding the session and model.

    Subclasses map ORM rows to domain entities; the session is owned by the
    caller (request dependency or script), which commits or rolls back.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get_model(self, entity_id: str) -> ModelType | None:
        """Return the ORM row by primary key, refreshed from the database."""
        model: Any = self.model
        result = await self.db.execute(
            select(self.model)
            .where(model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _require_model(self, entity_id: str, resource_type: str) -> ModelType:
        obj = await self._get_model(entity_id)
        if obj is None:
            raise ResourceNotFoundException(resource_type, entity_id)
        return obj
