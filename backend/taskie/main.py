"""
Taskie Backend - FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers and routers.
Who:   uvicorn (uvicorn taskie.main:app) and the test suite.

Lifecycle:
    Startup:
    1. Configure logging
    2. Validate configuration (errors are logged and abort startup)
    3. Create storage directories
    4. Create tables when AUTO_CREATE_TABLES is on
    5. Seed reference data and the default admin when AUTO_SEED is on

    Shutdown:
    1. Dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskie import __version__
from taskie.config import settings
from taskie.database import async_session_factory, dispose_engine, init_models
from taskie.exceptions import DatabaseError, FileStorageError, TaskieError
from taskie.middleware.logging import RequestLoggingMiddleware
from taskie.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from taskie.routes import (
    admin,
    auth,
    favorites,
    files,
    health,
    messages,
    profile,
    reference,
    tasks,
)
from taskie.schemas.common import ErrorResponse
from taskie.services.file_service import file_service
from taskie.services.seed_service import seed_service

logger = logging.getLogger(__name__)

GENERIC_SERVER_MESSAGE = "An internal error occurred. Please try again later."

HTTP_ERROR_CODES = {
    400: "validation_error",
    401: "unauthenticated",
    403: "forbidden",
    404: "not_found",
    405: "method_not_allowed",
}


# ══════════════════════════════════════════════════════════════════════════
# Logging
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Lifespan
# ══════════════════════════════════════════════════════════════════════════

async def run_startup_seed() -> None:
    async with async_session_factory() as session:
        try:
            await seed_service.seed(session)
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("Taskie Backend %s starting up (%s)...", __version__, settings.environment)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        logger.error("Refusing to start. Fix the configuration and restart the server.")
        raise

    file_service.ensure_directories()
    logger.info("Storage directory: %s", file_service.storage_root)

    if settings.auto_create_tables:
        await init_models()
        logger.info("Database tables ensured")

    if settings.auto_seed:
        await run_startup_seed()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("Taskie Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def error_response(
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    rid = request_id_var.get("") or None
    body = ErrorResponse(
        error=error,
        message=message,
        details=details or None,
        request_id=rid,
    )
    if rid:
        headers = {**(headers or {}), REQUEST_ID_HEADER: rid}
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Handler hierarchy:
        DatabaseError / FileStorageError → 500, generic message, context logged
        TaskieError (and subclasses)     → exc.status_code, exc.message
        RequestValidationError           → 400 (bad path params, wrong types)
        StarletteHTTPException           → its status, in the error envelope
        Exception                        → 500
    """

    @app.exception_handler(DatabaseError)
    @app.exception_handler(FileStorageError)
    async def handle_internal_error(request: Request, exc: TaskieError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context
        )
        return error_response(exc.status_code, exc.error_code, GENERIC_SERVER_MESSAGE)

    @app.exception_handler(TaskieError)
    async def handle_taskie_error(request: Request, exc: TaskieError):
        rid = request_id_var.get("")
        level = logging.WARNING if exc.status_code < 500 else logging.ERROR
        logger.log(level, "[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return error_response(exc.status_code, exc.error_code, exc.message, exc.context)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = f"Invalid value for {location}" if location else "Invalid request"
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), location)
        return error_response(
            400,
            "validation_error",
            message,
            {"errors": [{"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors]},
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        if exc.status_code == 404 and message == "Not Found":
            message = "Route not found"
        return error_response(
            exc.status_code,
            HTTP_ERROR_CODES.get(exc.status_code, "http_error"),
            message,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s", request_id_var.get(""), str(exc), exc_info=True
        )
        message = str(exc) if settings.is_development and str(exc) else GENERIC_SERVER_MESSAGE
        return error_response(500, "server_error", message)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Taskie API",
        description=(
            "Task marketplace backend: requesters post paid tasks, taskers "
            "search, bookmark and message about them."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=settings.cors_origins != "*",
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(profile.router)
    app.include_router(tasks.router)
    app.include_router(messages.router)
    app.include_router(favorites.router)
    app.include_router(reference.router)
    app.include_router(admin.router)
    app.include_router(files.router)
    app.include_router(health.router)

    return app


app = create_app()
