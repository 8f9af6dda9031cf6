"""Domain services."""

from src.circuitweb.services.auth_service import AuthService
from src.circuitweb.services.circuit_service import CircuitService
from src.circuitweb.services.project_service import ProjectService
from src.circuitweb.services.storage_service import StorageService

__all__ = [
    "AuthService",
    "CircuitService",
    "ProjectService",
    "StorageService",
]
