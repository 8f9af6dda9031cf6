"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from src.circuitweb.core.config import Settings

pytestmark = pytest.mark.unit


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.max_upload_bytes == 32 * 1024 * 1024
    assert "image/webp" in settings.allowed_image_types
    assert settings.trust_user_id_header is True


def test_storage_backend_is_normalized():
    assert Settings(_env_file=None, storage_backend="Firebase").storage_backend == "firebase"


def test_unknown_storage_backend_is_rejected():
    with pytest.raises(ValidationError, match="STORAGE_BACKEND"):
        Settings(_env_file=None, storage_backend="s3")


def test_cors_wildcard_is_rejected():
    with pytest.raises(ValidationError, match="wildcard"):
        Settings(_env_file=None, cors_origins=["*"])
