"""Repository layer - data access abstraction."""

from src.circuitweb.repositories.base import BaseRepository
from src.circuitweb.repositories.circuit import CircuitRepository
from src.circuitweb.repositories.project import ProjectRepository
from src.circuitweb.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "CircuitRepository",
    "ProjectRepository",
    "UserRepository",
]
