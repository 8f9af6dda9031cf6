"""External provider dependencies (identity provider, object storage).

Tests replace these through `app.dependency_overrides`.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from src.circuitweb.core.config import get_settings
from src.circuitweb.core.firebase import get_firebase_app
from src.circuitweb.core.identity import FirebaseIdentityProvider, IdentityProvider
from src.circuitweb.core.storage import (
    FirebaseStorageBackend,
    StorageBackend,
    SyntheticStorageBackend,
)


@lru_cache
def get_identity_provider() -> IdentityProvider:
    """Get the identity provider client (built once per process)."""
    return FirebaseIdentityProvider(get_firebase_app())


@lru_cache
def get_storage_backend() -> StorageBackend:
    """Get the configured storage backend (built once per process)."""
    settings = get_settings()
    if settings.storage_backend == "firebase":
        return FirebaseStorageBackend(get_firebase_app(), settings.firebase_storage_bucket)
    return SyntheticStorageBackend(base_url=settings.storage_base_url)


IdentityProviderDep = Annotated[IdentityProvider, Depends(get_identity_provider)]
StorageBackendDep = Annotated[StorageBackend, Depends(get_storage_backend)]
