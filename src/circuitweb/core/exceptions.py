"""Domain errors and the handlers that render them as response envelopes."""

from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.circuitweb.core.logging import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """A required field is missing or empty."""

    status_code = status.HTTP_400_BAD_REQUEST


class PayloadTooLarge(ValidationError):
    """Uploaded content exceeds the configured size cap (reported as 400)."""


class Unauthenticated(AppError):
    """Caller identity is missing or the token was rejected."""

    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(AppError):
    """Caller is authenticated but does not own the resource."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFound(AppError):
    """Entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class Unexpected(AppError):
    """Upstream failure whose message is passed through to the client."""


def error_envelope(message: str) -> dict[str, Any]:
    return {
        "success": False,
        "error": message,
        "request_id": correlation_id.get(),
    }


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that render the {success, error} envelope."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("Request failed", path=request.url.path, error=exc.message)
        return JSONResponse(status_code=exc.status_code, content=error_envelope(exc.message))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        message = "Invalid request"
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_envelope(message),
        )

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(str(exc.detail)),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_envelope("Internal server error"),
        )
