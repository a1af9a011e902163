"""
Student API - FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
How:   `create_app()` wires the lifespan, middleware, exception handlers and the
       students router. `app` at module level is what uvicorn serves.

Lifecycle:
    Startup:
    1. Configure logging
    2. Connect the database gateway (ping); failure aborts startup
    Shutdown:
    1. Dispose the gateway's connection pool

Error responses:
    ValidationError / RequestValidationError → 400 {"error": ...}
    NotFoundError                           → 404 {"error": "Student not found"}
    DatabaseError                           → 500 {"error": <raw driver text>}
    anything else                           → 500 {"error": str(exc)}, traceback logged
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from student_api import __version__
from student_api.config import settings
from student_api.database import DatabaseGateway, connect
from student_api.exceptions import (
    DatabaseError,
    NotFoundError,
    StudentAPIError,
    ValidationError,
)
from student_api.middleware.logging import RequestLoggingMiddleware
from student_api.middleware.request_id import RequestIDMiddleware, request_id_var
from student_api.routes import students

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, writing plain text lines to stdout.

    Format: 2024-01-15T12:00:00 [INFO] student_api.database: Connected to database
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # uvicorn's own access log duplicates RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if settings.log_level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Connect the gateway on startup and release it on shutdown.

    A gateway passed to `create_app()` is connected as-is; otherwise
    `database.connect()` builds one from settings. `DatabaseConnectionError`
    is not caught: uvicorn reports the failed startup and the process exits.
    """
    setup_logging()
    logger.info("Student API %s starting up...", __version__)

    if app.state.gateway is None:
        app.state.gateway = await connect(settings)
    else:
        await app.state.gateway.connect()
    gateway: DatabaseGateway = app.state.gateway

    logger.info("Listening on http://%s:%d", settings.host, settings.port)

    try:
        yield
    finally:
        logger.info("Student API shutting down...")
        await gateway.dispose()
        logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def summarize_validation_errors(exc: RequestValidationError) -> str:
    """
    Flatten FastAPI's validation errors into one readable line.

    e.g. "name: Field required; birth_date: Input should be a valid datetime"
    """
    parts = []
    for err in exc.errors():
        field = ".".join(str(loc) for loc in err.get("loc", ()) if loc != "body")
        parts.append(f"{field}: {err['msg']}" if field else err["msg"])
    return "; ".join(parts) or "Invalid request body"


def register_exception_handlers(app: FastAPI) -> None:
    """Map application exceptions to `{"error": message}` JSON responses."""

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return _error(status.HTTP_400_BAD_REQUEST, exc.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        message = summarize_validation_errors(exc)
        logger.warning("[%s] Malformed request: %s", request_id_var.get(""), message)
        return _error(status.HTTP_400_BAD_REQUEST, message)

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return _error(status.HTTP_404_NOT_FOUND, exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)

    @app.exception_handler(StudentAPIError)
    async def handle_app_error(request: Request, exc: StudentAPIError):
        logger.error("[%s] %s: %s", request_id_var.get(""), type(exc).__name__, exc.message)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(gateway: Optional[DatabaseGateway] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        gateway: Pre-built persistence gateway. When omitted, the lifespan
                 builds one from settings at startup.
    """
    app = FastAPI(
        title="Student API",
        description="CRUD operations over the student table.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.gateway = gateway

    # Last added runs first: RequestID → Logging → route
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(students.router)

    return app


app = create_app()
