"""
Main entrypoint for the Field Operations API.

This module assembles the FastAPI application, sets up logging, CORS
and error rendering, and includes the versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn field_ops_api.app.main:app --reload

Every error leaves the API as ``{"error": "<message>"}``: request
validation failures are reported as 400 (not FastAPI's default 422),
unknown methods as 405 with an ``Allow`` header and unexpected
exceptions as 500 after being logged with their traceback.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.logging_config import setup_logging
from .core.repository import utcnow_iso
from .services.dashboard_service import DashboardService

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type", "Authorization"]


def _validation_message(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into one line, e.g. ``name: Field required``."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ())[1:])
        message = error.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


def _allowed_origin(request: Request) -> str:
    if "*" in settings.cors_origins:
        return "*"
    origin = request.headers.get("origin", "")
    return origin if origin in settings.cors_origins else ""


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # Create the database file if needed and apply pending migrations.
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that the modules below
    # can safely log messages.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=ALLOWED_METHODS,
        allow_headers=ALLOWED_HEADERS,
    )

    # Every OPTIONS request, CORS preflights included, is answered here
    # with 200.  Registered after CORSMiddleware so that it runs first;
    # CORSMiddleware only decorates the other responses.
    @app.middleware("http")
    async def answer_options(request: Request, call_next):
        if request.method == "OPTIONS":
            headers = {
                "Access-Control-Allow-Methods": ", ".join(ALLOWED_METHODS),
                "Access-Control-Allow-Headers": ", ".join(ALLOWED_HEADERS),
            }
            origin = _allowed_origin(request)
            if origin:
                headers["Access-Control-Allow-Origin"] = origin
            return Response(status_code=status.HTTP_200_OK, headers=headers)
        return await call_next(request)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            message = f"Method {request.method} not allowed"
        else:
            message = exc.detail
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _validation_message(exc)},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    # Resources are served under /api (no version segment), which is
    # where the dashboard front end expects them.
    app.include_router(v1_router, prefix="/api")

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        """Liveness check with row counts per resource."""
        return {
            "status": "OK",
            "timestamp": utcnow_iso(),
            "environment": settings.environment,
            "stats": await DashboardService.record_counts(),
        }

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
