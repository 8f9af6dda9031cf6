"""Base repository with common CRUD operations."""

from typing import Any, Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    should be done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: Any) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[ModelType]:
        """List every record, newest first."""
        result = await self.session.execute(
            select(self.model).order_by(self.model.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def delete(self, entity: ModelType) -> None:
        """Mark entity for deletion (no commit)."""
        await self.session.delete(entity)
