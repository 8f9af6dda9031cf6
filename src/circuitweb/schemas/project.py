"""Project schemas for API request/response."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.circuitweb.models import Project
from src.circuitweb.schemas.common import Envelope, RequestModel


class ProjectCreate(RequestModel):
    name: str | None = Field(default=None, max_length=200)
    description: str | None = None


class ProjectUpdate(RequestModel):
    project_id: str | None = None
    name: str | None = Field(default=None, max_length=200)
    description: str | None = None


class ProjectDuplicate(RequestModel):
    project_id: str | None = None
    name: str | None = Field(default=None, max_length=200)


class ProjectSettings(BaseModel):
    grid_size: int = 10
    snap_to_grid: bool = True


class ProjectRead(BaseModel):
    """Project as rendered to clients; owner_id is exposed as user_id."""

    id: str
    name: str
    description: str
    user_id: str
    status: str = "active"
    settings: ProjectSettings | None = None
    created_at: datetime
    updated_at: datetime | None

    @classmethod
    def from_model(cls, project: Project, with_settings: bool = False) -> "ProjectRead":
        return cls(
            id=project.id,
            name=project.name,
            description=project.description,
            user_id=project.owner_id,
            settings=ProjectSettings() if with_settings else None,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


class ProjectResponse(Envelope):
    project: ProjectRead


class ProjectListResponse(Envelope):
    projects: list[ProjectRead]
