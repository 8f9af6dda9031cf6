from src.circuitweb.schemas.circuit import (
    CircuitCreate,
    CircuitFromTemplate,
    CircuitRead,
    CircuitUpdate,
)
from src.circuitweb.schemas.common import Envelope, RequestModel
from src.circuitweb.schemas.project import (
    ProjectCreate,
    ProjectDuplicate,
    ProjectRead,
    ProjectUpdate,
)
from src.circuitweb.schemas.user import UserSummary

__all__ = [
    # Circuit
    "CircuitCreate",
    "CircuitFromTemplate",
    "CircuitRead",
    "CircuitUpdate",
    # Common
    "Envelope",
    "RequestModel",
    # Project
    "ProjectCreate",
    "ProjectDuplicate",
    "ProjectRead",
    "ProjectUpdate",
    # User
    "UserSummary",
]
