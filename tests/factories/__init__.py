"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import UserFactory, ProjectFactory, ...
"""

from tests.factories.base import BaseFactory, new_id, utc_now
from tests.factories.project import CircuitFactory, ProjectFactory
from tests.factories.user import UserFactory

__all__ = [
    # Base
    "BaseFactory",
    "new_id",
    "utc_now",
    # User
    "UserFactory",
    # Project
    "ProjectFactory",
    "CircuitFactory",
]
