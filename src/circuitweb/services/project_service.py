"""Project service - CRUD, duplication and ownership checks."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.circuitweb.core.exceptions import Forbidden, NotFound
from src.circuitweb.core.logging import get_logger
from src.circuitweb.models import Project
from src.circuitweb.models.base import utc_now
from src.circuitweb.repositories import ProjectRepository

logger = get_logger(__name__)


class ProjectService:
    """Project management service."""

    def __init__(self, project_repo: ProjectRepository, session: AsyncSession):
        self.project_repo = project_repo
        self.session = session

    async def list_user_projects(self, owner_id: str) -> list[Project]:
        return await self.project_repo.list_by_owner(owner_id)

    async def get_project(self, project_id: str) -> Project | None:
        return await self.project_repo.get_by_id(project_id)

    async def get_owned_project(
        self,
        project_id: str,
        caller_id: str,
        not_found_message: str = "Project not found",
    ) -> Project:
        """Get a project the caller owns.

        Raises:
            NotFound: If the project does not exist.
            Forbidden: If the caller is not the project's owner.
        """
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFound(not_found_message)
        if project.owner_id != caller_id:
            logger.warning("Project ownership check failed", project_id=project_id)
            raise Forbidden("You do not have access to this project")
        return project

    async def create_project(
        self, owner_id: str, name: str, description: str | None = None
    ) -> Project:
        project = Project(
            name=name,
            description=description or "",
            owner_id=owner_id,
            created_at=utc_now(),
            updated_at=None,
        )
        self.project_repo.add(project)
        try:
            await self.session.commit()
            await self.session.refresh(project)
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Project created", project_id=project.id)
        return project

    async def update_project(
        self,
        project_id: str,
        name: str | None = None,
        description: str | None = None,
    ) -> Project:
        """Apply non-empty changes and refresh updated_at.

        Raises:
            NotFound: If the project does not exist.
        """
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFound(f"Project with ID {project_id} not found")

        if name:
            project.name = name
        if description:
            project.description = description

        # SQLModel has no onupdate hook, so the timestamp is set here
        project.updated_at = utc_now()

        try:
            await self.session.commit()
            await self.session.refresh(project)
        except Exception:
            await self.session.rollback()
            raise
        return project

    async def delete_project(self, project_id: str) -> bool:
        """Delete a project. Returns False if it did not exist.

        Circuits belonging to the project are left in place.
        """
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            return False

        await self.project_repo.delete(project)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Project deleted", project_id=project_id)
        return True

    async def duplicate_project(self, project_id: str, new_name: str) -> Project:
        """Copy a project's description and owner under a new id and name.

        Circuits are not copied.

        Raises:
            NotFound: If the source project does not exist.
        """
        original = await self.project_repo.get_by_id(project_id)
        if original is None:
            raise NotFound(f"Project with ID {project_id} not found")

        return await self.create_project(original.owner_id, new_name, original.description)
