"""Circuit endpoints.

Access to a circuit is granted through its parent project: the caller must own
the project the circuit belongs to.
"""

from typing import Annotated

from fastapi import APIRouter, Query

from src.circuitweb.api.dependencies import CallerId, CircuitServiceDep, ProjectServiceDep
from src.circuitweb.core.exceptions import Forbidden, NotFound, ValidationError
from src.circuitweb.core.logging import get_logger
from src.circuitweb.models import Circuit
from src.circuitweb.schemas.circuit import (
    CircuitCreate,
    CircuitFromTemplate,
    CircuitListResponse,
    CircuitRead,
    CircuitResponse,
    CircuitUpdate,
    TemplateListResponse,
)
from src.circuitweb.schemas.common import Envelope
from src.circuitweb.services import CircuitService, ProjectService

logger = get_logger(__name__)

router = APIRouter(prefix="/circuits", tags=["circuits"])


async def _get_owned_circuit(
    circuit_id: str | None,
    caller_id: str,
    circuits: CircuitService,
    projects: ProjectService,
) -> Circuit:
    """Load a circuit whose parent project the caller owns.

    A circuit whose project no longer exists is treated as forbidden.
    """
    if not circuit_id:
        raise ValidationError("Circuit ID is required")

    circuit = await circuits.get_circuit(circuit_id)
    if circuit is None:
        raise NotFound("Circuit not found")

    project = await projects.get_project(circuit.project_id)
    if project is None or project.owner_id != caller_id:
        logger.warning("Circuit ownership check failed", circuit_id=circuit_id)
        raise Forbidden("You do not have access to this circuit")
    return circuit


@router.get("", response_model=CircuitListResponse, responses={403: {}, 404: {}})
async def list_circuits(
    caller_id: CallerId,
    circuits: CircuitServiceDep,
    projects: ProjectServiceDep,
    project_id: Annotated[str | None, Query(alias="projectId")] = None,
) -> CircuitListResponse:
    """List a project's circuits. Design payloads are omitted from the listing."""
    if not project_id:
        raise ValidationError("Project ID is required")
    await projects.get_owned_project(project_id, caller_id)

    items = await circuits.list_project_circuits(project_id)
    return CircuitListResponse(
        message="Circuits retrieved successfully",
        circuits=[CircuitRead.from_model(c, caller_id, with_data=False) for c in items],
    )


@router.post("/create", response_model=CircuitResponse, responses={403: {}, 404: {}})
async def create_circuit(
    request: CircuitCreate,
    caller_id: CallerId,
    circuits: CircuitServiceDep,
    projects: ProjectServiceDep,
) -> CircuitResponse:
    if not request.name:
        raise ValidationError("Circuit name is required")
    if not request.project_id:
        raise ValidationError("Project ID is required")
    await projects.get_owned_project(request.project_id, caller_id)

    circuit = await circuits.create_circuit(request.project_id, request.name, request.data)
    return CircuitResponse(
        message="Circuit created successfully",
        circuit=CircuitRead.from_model(circuit, caller_id),
    )


@router.get("/get", response_model=CircuitResponse, responses={403: {}, 404: {}})
async def get_circuit(
    caller_id: CallerId,
    circuits: CircuitServiceDep,
    projects: ProjectServiceDep,
    circuit_id: Annotated[str | None, Query(alias="circuitId")] = None,
) -> CircuitResponse:
    circuit = await _get_owned_circuit(circuit_id, caller_id, circuits, projects)
    return CircuitResponse(
        message="Circuit retrieved successfully",
        circuit=CircuitRead.from_model(circuit, caller_id),
    )


@router.put("/update", response_model=CircuitResponse, responses={403: {}, 404: {}})
async def update_circuit(
    request: CircuitUpdate,
    caller_id: CallerId,
    circuits: CircuitServiceDep,
    projects: ProjectServiceDep,
) -> CircuitResponse:
    """Rename a circuit and/or replace its design payload."""
    circuit = await _get_owned_circuit(request.circuit_id, caller_id, circuits, projects)

    updated = await circuits.update_circuit(circuit.id, request.name, request.data)
    return CircuitResponse(
        message="Circuit updated successfully",
        circuit=CircuitRead.from_model(updated, caller_id),
    )


@router.delete("/delete", response_model=Envelope, responses={403: {}, 404: {}})
async def delete_circuit(
    caller_id: CallerId,
    circuits: CircuitServiceDep,
    projects: ProjectServiceDep,
    circuit_id: Annotated[str | None, Query(alias="circuitId")] = None,
) -> Envelope:
    circuit = await _get_owned_circuit(circuit_id, caller_id, circuits, projects)

    if not await circuits.delete_circuit(circuit.id):
        raise NotFound("Circuit not found")
    return Envelope(message="Circuit deleted successfully")


@router.get("/templates", response_model=TemplateListResponse)
async def list_templates(caller_id: CallerId, circuits: CircuitServiceDep) -> TemplateListResponse:
    return TemplateListResponse(
        message="Templates feature not yet implemented",
        templates=await circuits.list_templates(),
    )


@router.post(
    "/create-from-template",
    response_model=CircuitResponse,
    responses={403: {}, 404: {}},
)
async def create_from_template(
    request: CircuitFromTemplate,
    caller_id: CallerId,
    circuits: CircuitServiceDep,
    projects: ProjectServiceDep,
) -> CircuitResponse:
    if not request.template_id:
        raise ValidationError("Template ID is required")
    if not request.project_id:
        raise ValidationError("Project ID is required")
    if not request.name:
        raise ValidationError("Circuit name is required")
    await projects.get_owned_project(request.project_id, caller_id)

    circuit = await circuits.create_from_template(
        request.template_id, request.project_id, request.name
    )
    return CircuitResponse(
        message="Circuit created from template successfully",
        circuit=CircuitRead.from_model(circuit, caller_id),
    )
