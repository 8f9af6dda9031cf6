"""Circuit schemas for API request/response."""

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from src.circuitweb.models import Circuit
from src.circuitweb.schemas.common import Envelope, RequestModel


class CircuitCreate(RequestModel):
    project_id: str | None = None
    name: str | None = Field(default=None, max_length=200)
    data: Any = None


class CircuitUpdate(RequestModel):
    circuit_id: str | None = None
    name: str | None = Field(default=None, max_length=200)
    data: Any = None


class CircuitFromTemplate(RequestModel):
    project_id: str | None = None
    template_id: str | None = None
    name: str | None = Field(default=None, max_length=200)


class CircuitRead(BaseModel):
    id: str
    name: str
    description: str = ""
    project_id: str
    user_id: str
    data: Any = None
    version: int = 1
    is_template: bool = False
    tags: list[str] = []
    created_at: datetime
    updated_at: datetime | None

    @classmethod
    def from_model(cls, circuit: Circuit, user_id: str, with_data: bool = True) -> "CircuitRead":
        return cls(
            id=circuit.id,
            name=circuit.name,
            project_id=circuit.project_id,
            user_id=user_id,
            data=json.loads(circuit.data) if with_data else None,
            created_at=circuit.created_at,
            updated_at=circuit.updated_at,
        )


class CircuitResponse(Envelope):
    circuit: CircuitRead


class CircuitListResponse(Envelope):
    circuits: list[CircuitRead]


class TemplateListResponse(Envelope):
    templates: list[dict[str, Any]]
