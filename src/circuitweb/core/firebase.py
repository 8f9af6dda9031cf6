"""Firebase Admin app bootstrap."""

import firebase_admin
from firebase_admin import credentials

from src.circuitweb.core.config import get_settings
from src.circuitweb.core.logging import get_logger

logger = get_logger(__name__)

_app: firebase_admin.App | None = None


def get_firebase_app() -> firebase_admin.App:
    """Get or initialize the Firebase Admin app singleton.

    Uses the service account file from FIREBASE_CREDENTIALS_PATH when set,
    otherwise Application Default Credentials.
    """
    global _app
    if _app is not None:
        return _app

    try:
        _app = firebase_admin.get_app()
        return _app
    except ValueError:
        pass

    settings = get_settings()
    if settings.firebase_credentials_path:
        credential = credentials.Certificate(settings.firebase_credentials_path)
    else:
        credential = credentials.ApplicationDefault()

    options: dict[str, str] = {}
    if settings.firebase_project_id:
        options["projectId"] = settings.firebase_project_id
    if settings.firebase_storage_bucket:
        options["storageBucket"] = settings.firebase_storage_bucket

    _app = firebase_admin.initialize_app(credential, options or None)
    logger.info("Firebase app initialized", project_id=settings.firebase_project_id)
    return _app


def close_firebase_app() -> None:
    """Delete the Firebase app. Call during shutdown."""
    global _app
    if _app is not None:
        firebase_admin.delete_app(_app)
        _app = None
