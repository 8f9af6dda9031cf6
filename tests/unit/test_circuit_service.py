"""Unit tests for CircuitService."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.circuitweb.core.exceptions import NotFound
from src.circuitweb.services.circuit_service import (
    EMPTY_CIRCUIT_DATA,
    CircuitService,
    serialize_data,
)
from tests.factories import CircuitFactory

pytestmark = pytest.mark.unit


@pytest.fixture
def mock_circuit_repo() -> MagicMock:
    """Create mock circuit repository."""
    repo = MagicMock()
    repo.add = MagicMock()
    repo.get_by_id = AsyncMock(return_value=None)
    repo.list_by_project = AsyncMock(return_value=[])
    repo.delete = AsyncMock()
    return repo


@pytest.fixture
def circuit_service(mock_circuit_repo, mock_session) -> CircuitService:
    return CircuitService(mock_circuit_repo, mock_session)


def test_serialize_none_is_empty_object():
    assert serialize_data(None) == EMPTY_CIRCUIT_DATA


def test_serialize_keeps_payload_opaque():
    payload = {"components": [{"type": "resistor", "ohms": 220}], "anything": [1, "two"]}

    assert json.loads(serialize_data(payload)) == payload


class TestCreateCircuit:
    async def test_create_without_data_stores_empty_object(
        self, circuit_service, mock_circuit_repo, mock_session
    ):
        circuit = await circuit_service.create_circuit("project-1", "Blinker")

        assert circuit.project_id == "project-1"
        assert circuit.data == "{}"
        assert circuit.updated_at is None
        mock_circuit_repo.add.assert_called_once_with(circuit)
        mock_session.commit.assert_awaited_once()

    async def test_create_from_template_ignores_template(self, circuit_service):
        circuit = await circuit_service.create_from_template("tpl-555", "project-1", "From tpl")

        assert circuit.name == "From tpl"
        assert circuit.data == "{}"


class TestUpdateCircuit:
    async def test_update_missing_raises_not_found(self, circuit_service, mock_session):
        with pytest.raises(NotFound):
            await circuit_service.update_circuit("missing", name="x")

        mock_session.commit.assert_not_awaited()

    async def test_update_replaces_data_and_touches_timestamp(
        self, circuit_service, mock_circuit_repo
    ):
        circuit = CircuitFactory.build(project_id="project-1")
        mock_circuit_repo.get_by_id.return_value = circuit

        updated = await circuit_service.update_circuit(circuit.id, data={"wires": [1]})

        assert json.loads(updated.data) == {"wires": [1]}
        assert updated.name == "Voltage Divider"
        assert updated.updated_at is not None

    async def test_update_without_data_keeps_payload(self, circuit_service, mock_circuit_repo):
        circuit = CircuitFactory.build(project_id="project-1")
        original_data = circuit.data
        mock_circuit_repo.get_by_id.return_value = circuit

        updated = await circuit_service.update_circuit(circuit.id, name="Renamed")

        assert updated.name == "Renamed"
        assert updated.data == original_data


class TestDeleteCircuit:
    async def test_delete_missing_returns_false(self, circuit_service):
        assert await circuit_service.delete_circuit("missing") is False

    async def test_delete_existing_returns_true(self, circuit_service, mock_circuit_repo):
        circuit = CircuitFactory.build(project_id="project-1")
        mock_circuit_repo.get_by_id.return_value = circuit

        assert await circuit_service.delete_circuit(circuit.id) is True
        mock_circuit_repo.delete.assert_awaited_once_with(circuit)


async def test_templates_are_empty(circuit_service):
    assert await circuit_service.list_templates() == []
