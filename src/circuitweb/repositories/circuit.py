"""Repository for Circuit entity."""

from sqlmodel import select

from src.circuitweb.models import Circuit
from src.circuitweb.repositories.base import BaseRepository


class CircuitRepository(BaseRepository[Circuit]):
    model = Circuit

    async def list_by_project(self, project_id: str) -> list[Circuit]:
        """List the circuits of a project, newest first."""
        result = await self.session.execute(
            select(Circuit)
            .where(Circuit.project_id == project_id)
            .order_by(Circuit.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())
