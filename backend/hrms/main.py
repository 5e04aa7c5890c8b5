"""
HRMS Backend — FastAPI Application Factory
===========================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   uvicorn (`uvicorn hrms.main:app`) or the `hrms` console script (run()).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────────────┐  │
    │  │ Req ID   │→│  Logging        │→│  CORS        │  │
    │  └──────────┘ └─────────────────┘ └──────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────────────────────┐ ┌──────────────┐  │
    │  │ GET/POST/PUT/DELETE employee │ │ GET /health  │  │
    │  └──────────────────────────────┘ └──────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ HRMSError → its status (+ text if public)     │  │
    │  │ Exception → 500                               │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Connect to MongoDB (skipped when a Database was injected);
       failure is fatal and uvicorn exits
    3. Attach Database and EmployeeService to app.state

    Shutdown:
    1. Close the MongoDB client (only if the lifespan opened it)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response

from hrms import __version__
from hrms.config import Settings, settings as default_settings
from hrms.database import Database
from hrms.exceptions import DatabaseConnectionError, HRMSError
from hrms.middleware.logging import RequestLoggingMiddleware
from hrms.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from hrms.routes import employees, health
from hrms.services.employee_service import EmployeeService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str) -> None:
    """
    Configure logging for the entire application.

    Called once during app startup, before the database connects, so that a
    fatal connection error is visible on stdout.
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    # These log every operation at DEBUG/INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

def attach_database(app: FastAPI, database: Database) -> None:
    """Publish the shared database and service on app.state. Done once per app."""
    app.state.database = database
    app.state.employee_service = EmployeeService(database.collection)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Connect to MongoDB on startup and close the client on shutdown.

    A connection failure is re-raised: uvicorn logs "Application startup
    failed" and the process exits. There is no retry.
    """
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info("HRMS Backend %s starting up...", __version__)

    owns_database = getattr(app.state, "database", None) is None
    if owns_database:
        try:
            database = await Database.connect(app_settings)
        except DatabaseConnectionError as e:
            logger.critical("Fatal: %s", e.message)
            raise
        attach_database(app, database)

    logger.info(
        "Server ready at http://%s:%d",
        app_settings.backend_host,
        app_settings.backend_port,
    )

    yield

    logger.info("HRMS Backend shutting down...")
    if owns_database:
        app.state.database.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def render_error(exc: HRMSError) -> Response:
    """Plain-text body with the error text when public, bare status otherwise."""
    if exc.public:
        return PlainTextResponse(exc.message, status_code=exc.status_code)
    return Response(status_code=exc.status_code)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

    Handler hierarchy:
        HRMSError (and subclasses) → exc.status_code
        Exception (fallback)       → 500, empty body, traceback logged
    """

    @app.exception_handler(HRMSError)
    async def handle_hrms_error(request: Request, exc: HRMSError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error(
                "[%s] %s %s failed: %s | Context: %s",
                rid, request.method, request.url.path, exc.message, exc.context,
            )
        else:
            logger.warning(
                "[%s] %s %s rejected: %s",
                rid, request.method, request.url.path, exc.message,
            )
        return render_error(exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return Response(status_code=500)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration; defaults to the environment-loaded singleton.
        database: An already-connected Database. When given, the lifespan
                  neither connects nor closes it (tests pass an in-memory one).
    """
    app_settings = settings or default_settings

    app = FastAPI(
        title="HRMS API",
        description="Create, list, update and delete employee records stored in MongoDB.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    if database is not None:
        attach_database(app, database)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(employees.router)
    app.include_router(health.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve `app` on BACKEND_HOST:BACKEND_PORT."""
    uvicorn.run(
        "hrms.main:app",
        host=default_settings.backend_host,
        port=default_settings.backend_port,
        log_level=default_settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
