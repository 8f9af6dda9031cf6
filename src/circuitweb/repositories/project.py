"""Repository for Project entity."""

from sqlmodel import select

from src.circuitweb.models import Project
from src.circuitweb.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    model = Project

    async def list_by_owner(self, owner_id: str) -> list[Project]:
        """List a user's projects, newest first."""
        result = await self.session.execute(
            select(Project)
            .where(Project.owner_id == owner_id)
            .order_by(Project.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())
