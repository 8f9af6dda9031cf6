"""Project endpoints. Every operation is restricted to the project's owner."""

from typing import Annotated

from fastapi import APIRouter, Query

from src.circuitweb.api.dependencies import CallerId, ProjectServiceDep
from src.circuitweb.core.exceptions import NotFound, ValidationError
from src.circuitweb.core.logging import get_logger
from src.circuitweb.schemas.common import Envelope
from src.circuitweb.schemas.project import (
    ProjectCreate,
    ProjectDuplicate,
    ProjectListResponse,
    ProjectRead,
    ProjectResponse,
    ProjectUpdate,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])

ProjectIdQuery = Annotated[str | None, Query(alias="projectId")]


def _require_project_id(project_id: str | None) -> str:
    if not project_id:
        raise ValidationError("Project ID is required")
    return project_id


@router.get("", response_model=ProjectListResponse)
async def list_projects(caller_id: CallerId, service: ProjectServiceDep) -> ProjectListResponse:
    """List the caller's projects, newest first."""
    projects = await service.list_user_projects(caller_id)
    return ProjectListResponse(
        message="Projects retrieved successfully",
        projects=[ProjectRead.from_model(p) for p in projects],
    )


@router.post("/create", response_model=ProjectResponse, responses={400: {}, 401: {}})
async def create_project(
    request: ProjectCreate,
    caller_id: CallerId,
    service: ProjectServiceDep,
) -> ProjectResponse:
    if not request.name:
        raise ValidationError("Project name is required")

    project = await service.create_project(caller_id, request.name, request.description)
    return ProjectResponse(
        message="Project created successfully",
        project=ProjectRead.from_model(project),
    )


@router.get("/get", response_model=ProjectResponse, responses={403: {}, 404: {}})
async def get_project(
    caller_id: CallerId,
    service: ProjectServiceDep,
    project_id: ProjectIdQuery = None,
) -> ProjectResponse:
    """Get one project, including its default editor settings."""
    project = await service.get_owned_project(_require_project_id(project_id), caller_id)
    return ProjectResponse(
        message="Project retrieved successfully",
        project=ProjectRead.from_model(project, with_settings=True),
    )


@router.put("/update", response_model=ProjectResponse, responses={403: {}, 404: {}})
async def update_project(
    request: ProjectUpdate,
    caller_id: CallerId,
    service: ProjectServiceDep,
) -> ProjectResponse:
    project_id = _require_project_id(request.project_id)
    await service.get_owned_project(project_id, caller_id)

    project = await service.update_project(project_id, request.name, request.description)
    return ProjectResponse(
        message="Project updated successfully",
        project=ProjectRead.from_model(project),
    )


@router.delete("/delete", response_model=Envelope, responses={403: {}, 404: {}})
async def delete_project(
    caller_id: CallerId,
    service: ProjectServiceDep,
    project_id: ProjectIdQuery = None,
) -> Envelope:
    """Delete a project. Its circuits are not removed."""
    project_id = _require_project_id(project_id)
    await service.get_owned_project(project_id, caller_id)

    if not await service.delete_project(project_id):
        raise NotFound("Project not found")
    return Envelope(message="Project deleted successfully")


@router.post("/duplicate", response_model=ProjectResponse, responses={403: {}, 404: {}})
async def duplicate_project(
    request: ProjectDuplicate,
    caller_id: CallerId,
    service: ProjectServiceDep,
) -> ProjectResponse:
    project_id = _require_project_id(request.project_id)
    if not request.name:
        raise ValidationError("New project name is required")

    await service.get_owned_project(
        project_id, caller_id, not_found_message="Original project not found"
    )
    project = await service.duplicate_project(project_id, request.name)
    logger.info("Project duplicated", source_project_id=project_id, project_id=project.id)
    return ProjectResponse(
        message="Project duplicated successfully",
        project=ProjectRead.from_model(project),
    )
