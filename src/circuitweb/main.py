from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from asgi_correlation_id import CorrelationIdMiddleware, correlation_id
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from sqlalchemy import text
from starlette.middleware.base import RequestResponseEndpoint

from src.circuitweb.api.dependencies import DBSession
from src.circuitweb.api.routes.router import api_router
from src.circuitweb.core.config import get_settings
from src.circuitweb.core.db import dispose_engine
from src.circuitweb.core.exceptions import setup_exception_handlers
from src.circuitweb.core.firebase import close_firebase_app
from src.circuitweb.core.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)
from src.circuitweb.models.base import utc_now

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}", env=settings.app_env)

    yield

    logger.info("Closing connections...")
    await dispose_engine()
    close_firebase_app()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "auth", "description": "ID token verification and account management"},
    {"name": "users", "description": "User directory"},
    {"name": "projects", "description": "Circuit design projects"},
    {"name": "circuits", "description": "Circuit design documents within a project"},
    {"name": "storage", "description": "File uploads and circuit images"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Backend API for the electric circuit design web application",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
        lifespan=lifespan,
    )

    setup_exception_handlers(app)

    # Add correlation ID middleware first (outermost middleware)
    app.add_middleware(CorrelationIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-User-ID", "X-Request-ID"],
    )

    @app.middleware("http")
    async def logging_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Bind request_id to log context for all requests."""
        clear_request_context()
        bind_request_context(correlation_id.get())
        try:
            response = await call_next(request)
            return response
        finally:
            clear_request_context()

    app.include_router(api_router)

    # Prometheus metrics instrumentation
    Instrumentator().instrument(app).expose(app, endpoint="/metrics")

    @app.get("/api/health", tags=["health"])
    async def health(session: DBSession) -> JSONResponse:
        """Health check with a database round trip."""
        health_status: dict[str, Any] = {
            "status": "healthy",
            "timestamp": utc_now().isoformat(),
            "database": "unknown",
        }

        try:
            await session.execute(text("SELECT 1"))
            health_status["database"] = "healthy"
        except Exception as e:
            logger.warning("Database health check failed", error=str(e))
            health_status["database"] = f"unhealthy: {str(e)}"
            health_status["status"] = "unhealthy"

        status_code = 200 if health_status["status"] == "healthy" else 503
        return JSONResponse(content=health_status, status_code=status_code)

    return app


app = create_app()
