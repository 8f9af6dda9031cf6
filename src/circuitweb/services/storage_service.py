"""Storage service - uploads, URLs and listings on top of a storage backend."""

from src.circuitweb.core.logging import get_logger
from src.circuitweb.core.storage import StorageBackend, StoredFile
from src.circuitweb.schemas.storage import UploadResult

logger = get_logger(__name__)


def build_path(file_name: str, folder: str | None = None) -> str:
    """Join an optional folder prefix and a file name into an object path."""
    folder = (folder or "").strip("/")
    return f"{folder}/{file_name}" if folder else file_name


class StorageService:
    """File storage for uploaded assets and circuit images."""

    def __init__(self, backend: StorageBackend):
        self.backend = backend

    async def upload_file(
        self,
        content: bytes,
        file_name: str,
        folder: str | None = None,
        content_type: str | None = None,
    ) -> UploadResult:
        path = build_path(file_name, folder)
        url = await self.backend.upload(path, content, content_type)
        logger.info("File uploaded", path=path, size=len(content))
        return UploadResult(
            download_url=url,
            file_path=path,
            file_name=file_name,
            size=len(content),
        )

    async def get_file_url(self, file_path: str) -> str:
        return await self.backend.url_for(file_path)

    async def delete_file(self, file_path: str) -> bool:
        return await self.backend.delete(file_path)

    async def list_files(self, folder: str | None = None) -> list[StoredFile]:
        return await self.backend.list_objects(folder or None)

    async def upload_circuit_image(
        self,
        content: bytes,
        file_name: str,
        circuit_id: str,
        content_type: str | None = None,
    ) -> UploadResult:
        """Store an image under circuits/{circuit_id}/."""
        return await self.upload_file(content, file_name, f"circuits/{circuit_id}", content_type)
