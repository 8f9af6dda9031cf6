"""Circuit service - CRUD over circuit design documents."""

import json
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.circuitweb.core.exceptions import NotFound
from src.circuitweb.core.logging import get_logger
from src.circuitweb.models import Circuit
from src.circuitweb.models.base import utc_now
from src.circuitweb.repositories import CircuitRepository

logger = get_logger(__name__)

EMPTY_CIRCUIT_DATA = "{}"


def serialize_data(data: Any) -> str:
    """Serialize a client payload for storage; None becomes an empty object."""
    if data is None:
        return EMPTY_CIRCUIT_DATA
    return json.dumps(data)


class CircuitService:
    """Circuit management service.

    The design payload is stored as an opaque JSON string and never inspected.
    """

    def __init__(self, circuit_repo: CircuitRepository, session: AsyncSession):
        self.circuit_repo = circuit_repo
        self.session = session

    async def list_project_circuits(self, project_id: str) -> list[Circuit]:
        return await self.circuit_repo.list_by_project(project_id)

    async def get_circuit(self, circuit_id: str) -> Circuit | None:
        return await self.circuit_repo.get_by_id(circuit_id)

    async def create_circuit(self, project_id: str, name: str, data: Any = None) -> Circuit:
        circuit = Circuit(
            project_id=project_id,
            name=name,
            data=serialize_data(data),
            created_at=utc_now(),
            updated_at=None,
        )
        self.circuit_repo.add(circuit)
        try:
            await self.session.commit()
            await self.session.refresh(circuit)
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Circuit created", circuit_id=circuit.id, project_id=project_id)
        return circuit

    async def update_circuit(
        self,
        circuit_id: str,
        name: str | None = None,
        data: Any = None,
    ) -> Circuit:
        """Apply supplied changes and refresh updated_at.

        Raises:
            NotFound: If the circuit does not exist.
        """
        circuit = await self.circuit_repo.get_by_id(circuit_id)
        if circuit is None:
            raise NotFound(f"Circuit with ID {circuit_id} not found")

        if name:
            circuit.name = name
        if data is not None:
            circuit.data = serialize_data(data)
        circuit.updated_at = utc_now()

        try:
            await self.session.commit()
            await self.session.refresh(circuit)
        except Exception:
            await self.session.rollback()
            raise
        return circuit

    async def delete_circuit(self, circuit_id: str) -> bool:
        """Delete a circuit. Returns False if it did not exist."""
        circuit = await self.circuit_repo.get_by_id(circuit_id)
        if circuit is None:
            return False

        await self.circuit_repo.delete(circuit)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Circuit deleted", circuit_id=circuit_id)
        return True

    async def list_templates(self) -> list[dict[str, Any]]:
        # Template catalog is not implemented yet
        return []

    async def create_from_template(self, template_id: str, project_id: str, name: str) -> Circuit:
        """Create an empty circuit; the template id is currently ignored."""
        logger.info(
            "Template lookup not implemented, creating empty circuit", template_id=template_id
        )
        return await self.create_circuit(project_id, name, None)
