"""Model exports.

Import from here: `from src.circuitweb.models import Project, User`
"""

from src.circuitweb.models.circuit import Circuit
from src.circuitweb.models.project import Project
from src.circuitweb.models.user import User

__all__ = [
    "Circuit",
    "Project",
    "User",
]
