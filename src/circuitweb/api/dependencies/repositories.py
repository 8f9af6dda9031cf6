"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.circuitweb.api.dependencies.db import DBSession
from src.circuitweb.repositories import (
    CircuitRepository,
    ProjectRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_circuit_repository(session: DBSession) -> CircuitRepository:
    return CircuitRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
CircuitRepo = Annotated[CircuitRepository, Depends(get_circuit_repository)]
