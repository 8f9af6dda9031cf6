"""Storage schemas."""

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel

from src.circuitweb.schemas.common import Envelope


@dataclass
class UploadResult:
    download_url: str
    file_path: str
    file_name: str
    size: int


class UploadResponse(Envelope):
    download_url: str
    file_path: str
    file_name: str | None = None
    size: int | None = None


class FileUrlResponse(Envelope):
    download_url: str


class FileRead(BaseModel):
    name: str
    path: str
    size: int
    type: str
    url: str
    created_at: datetime | None


class FileListResponse(Envelope):
    files: list[FileRead]
