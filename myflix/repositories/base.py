"""Base repository with the lookups every entity shares."""

from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from myflix.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Generic data access for one mapped class.

    Repositories flush but never commit; the request's session commits
    once the handler returns.

    Attributes:
        model: The SQLAlchemy model class this repository manages.
        session: The async database session.
    """

    def __init__(self, model: type[ModelType], session: AsyncSession) -> None:
        self.model = model
        self.session = session

    async def get_by_id(self, entity_id: UUID) -> ModelType | None:
        """Get an entity by primary key, None if it does not exist."""
        return await self.session.get(self.model, entity_id)

    async def get_all(self, *, order_by: Any | None = None) -> list[ModelType]:
        """Get every entity.

        Args:
            order_by: Column or expression to sort by. Without one, rows
                come newest first when the model has timestamps.

        Returns:
            List of entities.
        """
        query = select(self.model)
        if order_by is not None:
            query = query.order_by(order_by)
        elif hasattr(self.model, "created_at"):
            query = query.order_by(self.model.created_at.desc())  # type: ignore[attr-defined]

        result = await self.session.scalars(query)
        return list(result.all())

    async def update(self, entity: ModelType, **fields: Any) -> ModelType:
        """Set ``fields`` on ``entity`` and write them in one flush.

        Unknown field names are ignored.
        """
        for key, value in fields.items():
            if hasattr(entity, key):
                setattr(entity, key, value)

        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: ModelType) -> None:
        await self.session.delete(entity)
        await self.session.flush()

    async def exists(self, entity_id: UUID) -> bool:
        """Check whether a row with this primary key exists."""
        found = await self.session.scalar(
            select(self.model.id).where(self.model.id == entity_id).limit(1)  # type: ignore[attr-defined]
        )
        return found is not None
