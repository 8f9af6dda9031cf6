"""Object storage backends for uploaded files and circuit images."""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Protocol, TypeVar

import firebase_admin
from firebase_admin import storage
from google.api_core.exceptions import GoogleAPIError

from src.circuitweb.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class StorageError(Exception):
    """Storage backend call failed."""


@dataclass
class StoredFile:
    """Metadata for an object held by a storage backend."""

    name: str
    path: str
    size: int
    content_type: str
    url: str
    created_at: datetime | None = None


class StorageBackend(Protocol):
    """Defines the operations the API needs from object storage."""

    async def upload(self, path: str, content: bytes, content_type: str | None = None) -> str: ...

    async def url_for(self, path: str) -> str: ...

    async def delete(self, path: str) -> bool: ...

    async def list_objects(self, prefix: str | None = None) -> list[StoredFile]: ...


@dataclass
class SyntheticStorageBackend:
    """Placeholder backend that stores nothing and synthesizes URLs.

    Every upload "succeeds" and every delete reports success; listings are
    always empty. Use FirebaseStorageBackend for real persistence.
    """

    base_url: str = "https://storage.example.com/files"

    async def upload(self, path: str, content: bytes, content_type: str | None = None) -> str:
        logger.warning("Object storage not configured, upload discarded", path=path)
        return f"{self.base_url}/{path}"

    async def url_for(self, path: str) -> str:
        logger.warning("Object storage not configured, returning synthetic URL", path=path)
        return f"{self.base_url}/{path}"

    async def delete(self, path: str) -> bool:
        logger.warning("Object storage not configured, delete ignored", path=path)
        return True

    async def list_objects(self, prefix: str | None = None) -> list[StoredFile]:
        logger.warning("Object storage not configured, listing is empty", prefix=prefix)
        return []


class FirebaseStorageBackend:
    """Firebase (Google Cloud Storage) bucket backend.

    Download URLs are V4 signed URLs, which requires service account credentials.
    """

    def __init__(
        self,
        app: firebase_admin.App,
        bucket_name: str | None = None,
        url_expiry: timedelta = timedelta(hours=1),
    ):
        self._bucket = storage.bucket(bucket_name, app=app)
        self.url_expiry = url_expiry

    async def _run(self, func: Callable[[], T]) -> T:
        try:
            return await asyncio.to_thread(func)
        except (GoogleAPIError, ValueError) as e:
            raise StorageError(str(e)) from e

    def _signed_url(self, path: str) -> str:
        blob = self._bucket.blob(path)
        return blob.generate_signed_url(version="v4", expiration=self.url_expiry)

    async def upload(self, path: str, content: bytes, content_type: str | None = None) -> str:
        def _upload() -> str:
            blob = self._bucket.blob(path)
            blob.upload_from_string(content, content_type=content_type)
            return self._signed_url(path)

        url = await self._run(_upload)
        logger.info("Uploaded object", path=path, size=len(content))
        return url

    async def url_for(self, path: str) -> str:
        return await self._run(lambda: self._signed_url(path))

    async def delete(self, path: str) -> bool:
        def _delete() -> bool:
            blob = self._bucket.blob(path)
            if not blob.exists():
                return False
            blob.delete()
            return True

        deleted = await self._run(_delete)
        if deleted:
            logger.info("Deleted object", path=path)
        return deleted

    async def list_objects(self, prefix: str | None = None) -> list[StoredFile]:
        def _list() -> list[StoredFile]:
            return [
                StoredFile(
                    name=blob.name.rsplit("/", 1)[-1],
                    path=blob.name,
                    size=blob.size or 0,
                    content_type=blob.content_type or "application/octet-stream",
                    url=self._signed_url(blob.name),
                    created_at=blob.time_created,
                )
                for blob in self._bucket.list_blobs(prefix=prefix)
            ]

        return await self._run(_list)
