"""File storage endpoints (uploads, download URLs, listings, circuit images)."""

from typing import Annotated

from fastapi import APIRouter, File, Form, Query, UploadFile

from src.circuitweb.api.dependencies import CallerId, StorageServiceDep
from src.circuitweb.core.config import get_settings
from src.circuitweb.core.exceptions import NotFound, PayloadTooLarge, Unexpected, ValidationError
from src.circuitweb.core.logging import get_logger
from src.circuitweb.core.storage import StorageError
from src.circuitweb.schemas.common import Envelope
from src.circuitweb.schemas.storage import (
    FileListResponse,
    FileRead,
    FileUrlResponse,
    UploadResponse,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/storage", tags=["storage"])

FilePathQuery = Annotated[str | None, Query(alias="filePath")]


def _size_limit_mb() -> int:
    return get_settings().max_upload_bytes // (1024 * 1024)


async def _read_upload(upload: UploadFile, label: str) -> bytes:
    """Read an uploaded part, enforcing the configured size cap."""
    max_bytes = get_settings().max_upload_bytes
    if upload.size is not None and upload.size > max_bytes:
        raise PayloadTooLarge(f"{label} size exceeds {_size_limit_mb()}MB limit")

    content = await upload.read()
    if len(content) > max_bytes:
        raise PayloadTooLarge(f"{label} size exceeds {_size_limit_mb()}MB limit")
    return content


@router.post("/upload", response_model=UploadResponse, responses={400: {}, 500: {}})
async def upload_file(
    caller_id: CallerId,
    service: StorageServiceDep,
    file: Annotated[UploadFile | None, File()] = None,
    folder: Annotated[str | None, Form()] = None,
) -> UploadResponse:
    """Upload a file, optionally under a folder prefix."""
    if file is None or not file.filename or file.size == 0:
        raise ValidationError("No file uploaded")

    content = await _read_upload(file, "File")
    if not content:
        raise ValidationError("No file uploaded")

    try:
        result = await service.upload_file(content, file.filename, folder, file.content_type)
    except StorageError as e:
        logger.error("Error uploading file", error=str(e))
        raise Unexpected(str(e)) from e

    return UploadResponse(
        message="File uploaded successfully",
        download_url=result.download_url,
        file_path=result.file_path,
        file_name=result.file_name,
        size=result.size,
    )


@router.get("/url", response_model=FileUrlResponse)
async def get_file_url(
    caller_id: CallerId,
    service: StorageServiceDep,
    file_path: FilePathQuery = None,
) -> FileUrlResponse:
    if not file_path:
        raise ValidationError("File path is required")

    url = await service.get_file_url(file_path)
    return FileUrlResponse(message="File URL retrieved successfully", download_url=url)


@router.delete("/delete", response_model=Envelope, responses={404: {}, 500: {}})
async def delete_file(
    caller_id: CallerId,
    service: StorageServiceDep,
    file_path: FilePathQuery = None,
) -> Envelope:
    if not file_path:
        raise ValidationError("File path is required")

    try:
        deleted = await service.delete_file(file_path)
    except StorageError as e:
        logger.error("Error deleting file", file_path=file_path, error=str(e))
        raise Unexpected(str(e)) from e

    if not deleted:
        raise NotFound("File not found")
    return Envelope(message="File deleted successfully")


@router.get("/list", response_model=FileListResponse)
async def list_files(
    caller_id: CallerId,
    service: StorageServiceDep,
    folder: str | None = None,
) -> FileListResponse:
    files = await service.list_files(folder)
    return FileListResponse(
        message="Files listed successfully",
        files=[
            FileRead(
                name=f.name,
                path=f.path,
                size=f.size,
                type=f.content_type,
                url=f.url,
                created_at=f.created_at,
            )
            for f in files
        ],
    )


@router.post(
    "/upload-circuit-image",
    response_model=UploadResponse,
    responses={400: {}, 500: {}},
)
async def upload_circuit_image(
    caller_id: CallerId,
    service: StorageServiceDep,
    image: Annotated[UploadFile | None, File()] = None,
    circuit_id: Annotated[str | None, Form(alias="circuitId")] = None,
) -> UploadResponse:
    """Upload a preview image for a circuit (JPEG, PNG, GIF or WebP)."""
    if image is None or not image.filename or image.size == 0:
        raise ValidationError("No image uploaded")
    if not circuit_id:
        raise ValidationError("Circuit ID is required")
    if (image.content_type or "").lower() not in get_settings().allowed_image_types:
        raise ValidationError("Only image files are allowed (JPEG, PNG, GIF, WebP)")

    content = await _read_upload(image, "Image")
    try:
        result = await service.upload_circuit_image(
            content, image.filename, circuit_id, image.content_type
        )
    except StorageError as e:
        logger.error("Error uploading circuit image", circuit_id=circuit_id, error=str(e))
        raise Unexpected(str(e)) from e

    return UploadResponse(
        message="Circuit image uploaded successfully",
        download_url=result.download_url,
        file_path=result.file_path,
    )
