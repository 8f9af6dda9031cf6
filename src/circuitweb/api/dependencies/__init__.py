"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenience.
"""

from src.circuitweb.api.dependencies.auth import CallerId, get_caller_id
from src.circuitweb.api.dependencies.db import DBSession, get_db_session
from src.circuitweb.api.dependencies.providers import (
    IdentityProviderDep,
    StorageBackendDep,
    get_identity_provider,
    get_storage_backend,
)
from src.circuitweb.api.dependencies.repositories import (
    CircuitRepo,
    ProjectRepo,
    UserRepo,
    get_circuit_repository,
    get_project_repository,
    get_user_repository,
)
from src.circuitweb.api.dependencies.services import (
    AuthServiceDep,
    CircuitServiceDep,
    ProjectServiceDep,
    StorageServiceDep,
    get_auth_service,
    get_circuit_service,
    get_project_service,
    get_storage_service,
)

__all__ = [
    # Auth
    "CallerId",
    "get_caller_id",
    # Database
    "DBSession",
    "get_db_session",
    # Providers
    "IdentityProviderDep",
    "StorageBackendDep",
    "get_identity_provider",
    "get_storage_backend",
    # Repositories
    "CircuitRepo",
    "ProjectRepo",
    "UserRepo",
    "get_circuit_repository",
    "get_project_repository",
    "get_user_repository",
    # Services
    "AuthServiceDep",
    "CircuitServiceDep",
    "ProjectServiceDep",
    "StorageServiceDep",
    "get_auth_service",
    "get_circuit_service",
    "get_project_service",
    "get_storage_service",
]
