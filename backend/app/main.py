"""
Registry API — FastAPI Application Factory
============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers and routers;
       the lifespan owns the process-wide resources.
Who:   uvicorn app.main:app

Application Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                      FastAPI App                        │
    │                                                         │
    │  Middleware:  Request ID → Access Log → GZip → CORS     │
    │                                                         │
    │  Routes:                                                │
    │    /api/company  /api/customers  /api/students          │
    │    /api/foods    /say            /health                │
    │                                                         │
    │  Exception Handlers:                                    │
    │    field rules / ValidationError → 400 {errors: [...]}  │
    │    NotFoundError → 404 │ DatabaseError → 500            │
    │    UpstreamServiceError → 502 │ anything else → 500     │
    └─────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, build the ConnectionProvider and the
              FunctionClient, attach both to app.state
    Shutdown: close the function client, dispose the pool
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.database import ConnectionProvider
from app.exceptions import (
    DatabaseError,
    NotFoundError,
    UpstreamServiceError,
    ValidationError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import catalog, company, customers, health, proxy
from app.services.function_client import FunctionClient
from app.validation import format_errors

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once at startup.

    Format: 2024-01-15T12:00:00 [INFO] app.services.pipeline: message
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Chatty third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Create the connection pool and the function client, then tear both
    down at shutdown. Neither is reconfigured while the process runs.
    """
    setup_logging()
    logger.info("Registry API starting up...")

    provider = ConnectionProvider.from_settings(settings)
    function_client = FunctionClient.from_settings(settings)
    app.state.connection_provider = provider
    app.state.function_client = function_client

    logger.info("Server running at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("Swagger UI available at http://%s:%d/api-docs", settings.backend_host, settings.backend_port)

    try:
        yield
    finally:
        logger.info("Registry API shutting down...")
        await function_client.aclose()
        await provider.close()
        logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to HTTP responses.

    Handler hierarchy:
        RequestValidationError  → 400 {errors: [...]} (every failed rule)
        ValidationError         → 400 {errors: [...]} (pipeline precondition)
        NotFoundError           → 404
        DatabaseError           → 500 (generic message; covers StoreUnavailableError)
        UpstreamServiceError    → 502
        Exception (fallback)    → 500

    Internal details (SQL, driver errors, stack traces) are logged and never
    put in a response body.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        errors = format_errors(exc.errors())
        logger.info("[%s] Rejected %s %s: %d field error(s)", rid, request.method, request.url.path, len(errors))
        return JSONResponse(status_code=400, content={"errors": errors, "request_id": rid})

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.info("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={"errors": exc.to_errors(), "request_id": rid},
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={"error": "not_found", "message": exc.message, "request_id": rid},
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={"error": "server_error", "message": exc.message, "request_id": rid},
        )

    @app.exception_handler(UpstreamServiceError)
    async def handle_upstream_error(request: Request, exc: UpstreamServiceError):
        rid = request_id_var.get("")
        logger.error("[%s] Upstream function error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=502,
            content={"error": "upstream_error", "message": exc.message, "request_id": rid},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Registry API",
        description=(
            "CRUD endpoints for companies and customers, read-only listings for "
            "students and foods, and a passthrough to an external function."
        ),
        version=__version__,
        docs_url="/api-docs",
        redoc_url=None,
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in reverse order of addition.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(company.router)
    app.include_router(customers.router)
    app.include_router(catalog.router)
    app.include_router(proxy.router)
    app.include_router(health.router)

    return app


app = create_app()
