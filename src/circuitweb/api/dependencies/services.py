"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.circuitweb.api.dependencies.db import DBSession
from src.circuitweb.api.dependencies.providers import IdentityProviderDep, StorageBackendDep
from src.circuitweb.api.dependencies.repositories import CircuitRepo, ProjectRepo, UserRepo
from src.circuitweb.services import (
    AuthService,
    CircuitService,
    ProjectService,
    StorageService,
)


def get_auth_service(
    user_repo: UserRepo,
    session: DBSession,
    identity: IdentityProviderDep,
) -> AuthService:
    """Get auth service with the injected identity provider."""
    return AuthService(user_repo, session, identity)


def get_project_service(project_repo: ProjectRepo, session: DBSession) -> ProjectService:
    return ProjectService(project_repo, session)


def get_circuit_service(circuit_repo: CircuitRepo, session: DBSession) -> CircuitService:
    return CircuitService(circuit_repo, session)


def get_storage_service(backend: StorageBackendDep) -> StorageService:
    return StorageService(backend)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
CircuitServiceDep = Annotated[CircuitService, Depends(get_circuit_service)]
StorageServiceDep = Annotated[StorageService, Depends(get_storage_service)]
