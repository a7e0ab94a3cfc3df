"""Shared persistence helpers for the table repositories."""

from __future__ import annotations

from typing import Any, ClassVar, Generic, TypeVar

import sqlalchemy as sa
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

ModelT = TypeVar("ModelT", bound=SQLModel)


class BaseRepository(Generic[ModelT]):
    """Primary-key lookups and unit-of-work staging for one table.

    Repositories flush but never commit; the calling service owns the
    transaction.
    """

    model: ClassVar[type[SQLModel]]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, entity_id: Any) -> ModelT | None:
        return await self.session.get(self.model, entity_id)

    async def exists(self, entity_id: Any) -> bool:
        primary_key = sa.inspect(self.model).primary_key[0]
        result = await self.session.execute(
            select(sa.literal(True)).where(primary_key == entity_id).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def first(self, *conditions: Any) -> ModelT | None:
        """Return the first row matching every condition, if any."""
        result = await self.session.execute(select(self.model).where(*conditions).limit(1))
        return result.scalars().first()

    async def all(self, *order_by: Any) -> list[ModelT]:
        result = await self.session.execute(select(self.model).order_by(*order_by))
        return list(result.scalars().all())

    async def save(self, instance: ModelT) -> ModelT:
        """Stage ``instance`` and flush so generated keys are populated."""
        self.session.add(instance)
        await self.session.flush()
        return instance

    async def remove(self, instance: ModelT) -> None:
        await self.session.delete(instance)
        await self.session.flush()

    async def reload(self, instance: ModelT) -> ModelT:
        await self.session.refresh(instance)
        return instance


__all__ = ["BaseRepository", "ModelT"]
