"""
Reelbase Backend — FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn reelbase.main:app).
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────┐ ┌─────┐  │
    │  │ Req ID   │→│  Logging        │→│ GZip │→│CORS │  │
    │  └──────────┘ └─────────────────┘ └──────┘ └─────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────┐ ┌───────────────┐ ┌──────────────┐  │
    │  │ /api/movies│ │/api/employees │ │ HTML views   │  │
    │  └────────────┘ └───────────────┘ └──────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ Validation→400 │ NotFound→404 │ Conflict→409  │  │
    │  │ Store→500      │ anything else→500            │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration
    3. Build the document store (unless one was injected)
    4. Probe the store with retry and create the Movie_ID unique index

    Shutdown:
    1. Close the store if this app built it
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from tenacity import RetryError

from reelbase.config import settings
from reelbase.exceptions import (
    ConflictError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from reelbase.middleware.logging import RequestLoggingMiddleware
from reelbase.middleware.request_id import RequestIDMiddleware, request_id_var
from reelbase.routes import employees, health, movies, views
from reelbase.store import build_store, connect_store
from reelbase.store.base import DocumentStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    When:   Called once during app startup, before any other initialization.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Per-operation chatter from these libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage application lifecycle: startup and shutdown procedures.

    A store passed to create_app() belongs to the caller and is not closed
    here. Otherwise the store is built from settings and closed on shutdown.
    A store that never answers is logged; the server still starts so that
    /health can report it.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Reelbase Backend starting up...")

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        logger.error("Fix the configuration and restart the server.")

    owns_store = getattr(app.state, "store", None) is None
    if owns_store:
        app.state.store = build_store(settings)

    try:
        await connect_store(app.state.store, settings)
    except RetryError as e:
        last_error = e.last_attempt.exception() if e.last_attempt else None
        logger.error(
            "Document store unavailable after %d attempts: %s",
            settings.store_connect_attempts,
            getattr(last_error, "detail", None) or str(last_error),
        )

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield  # Application runs here

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Reelbase Backend shutting down...")
    if owns_store:
        await app.state.store.close()
        app.state.store = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and JSON bodies.

    Handler hierarchy:
        ValidationError → 400 {message, error}
        NotFoundError   → 404 {message}
        ConflictError   → 409 {message, error}
        StoreError      → 500 {message, error}
        Exception       → 500 {message, error}

    The `error` field carries the underlying error text as-is.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s | %s", rid, exc.message, exc.context)
        return JSONResponse(status_code=400, content=exc.to_response())

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=exc.to_response())

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        rid = request_id_var.get("")
        logger.warning("[%s] Conflict: %s | key=%s", rid, exc.message, exc.key)
        return JSONResponse(status_code=409, content=exc.to_response())

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        rid = request_id_var.get("")
        logger.error("[%s] Store error: %s | %s | Context: %s", rid, exc.message, exc.detail, exc.context)
        return JSONResponse(status_code=500, content=exc.to_response())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"message": "An unexpected error occurred", "error": str(exc)},
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[DocumentStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Document store to serve from. When omitted, the lifespan
               builds one from settings at startup.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Reelbase API",
        description=(
            "Movie catalogue and employee records over a document database, "
            "with server-rendered pages for browsing and editing movies."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.store = store

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → route
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

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(movies.router)
    app.include_router(employees.router)
    app.include_router(views.router)
    app.include_router(health.router)
    app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")

    return app


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `reelbase.main:app` to be importable
app = create_app()
