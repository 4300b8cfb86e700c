"""
MarkCMS FastAPI application.

Entry point for the API server.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from markcms import config, db
from markcms.errors import BackendError
from markcms.repos import postgres_gateways
from markcms.repos.base import Gateways
from markcms.repos.memory import memory_gateways
from markcms.routes import app_shell, auth_routes, catalog
from markcms.routes import editor as editor_routes
from markcms.routes import pages as pages_routes
from markcms.routes import projects as project_routes
from markcms.services.session_broker import SessionBroker
from markcms.ui.app_session import AppSessionRegistry

logger = logging.getLogger(__name__)


def configure_state(app: FastAPI, gateways: Gateways) -> None:
    """Attach the data gateways, session broker and app-session registry."""
    broker = SessionBroker()
    app.state.gateways = gateways
    app.state.session_broker = broker
    app.state.app_sessions = AppSessionRegistry(gateways, broker)


# Background task for cleanup
async def cleanup_task(app: FastAPI):
    """
    Background task to forget expired revoked tokens and idle app sessions.

    Runs every 60 seconds.
    """
    while True:
        try:
            removed = app.state.session_broker.cleanup_revoked()
            if removed > 0:
                logger.info("Cleaned up %d revoked session tokens", removed)

            app.state.app_sessions.cleanup_idle(max_idle_minutes=config.settings.SESSION_IDLE_MINUTES)

        except Exception:
            logger.exception("Error in cleanup task")

        # Wait 60 seconds before next cleanup
        await asyncio.sleep(60)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Handles startup and shutdown logic:
    - Initialize database pool (postgres backend only)
    - Start background cleanup task
    - Close database pool on shutdown
    """
    logging.basicConfig(level=config.settings.LOG_LEVEL)

    # Startup
    if config.settings.BACKEND == "postgres":
        await db.init_pool()
        logger.info("Database pool initialized")

    cleanup_task_handle = asyncio.create_task(cleanup_task(app))
    logger.info("Background cleanup task started")

    yield

    # Shutdown
    cleanup_task_handle.cancel()
    try:
        await cleanup_task_handle
    except asyncio.CancelledError:
        logger.info("Background cleanup task stopped")

    if config.settings.BACKEND == "postgres":
        await db.close_pool()
        logger.info("Database pool closed")


app = FastAPI(
    title="MarkCMS",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)

configure_state(app, postgres_gateways() if config.settings.BACKEND == "postgres" else memory_gateways())

# Register routes
app.include_router(auth_routes.router)
app.include_router(app_shell.router)
app.include_router(project_routes.router)
app.include_router(pages_routes.router)
app.include_router(editor_routes.router)
app.include_router(catalog.router)


@app.exception_handler(BackendError)
async def backend_error_handler(request: Request, exc: BackendError):
    """Data backend failures that escaped a screen become 502s."""
    logger.error("Backend error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=502, content={"detail": "Backend unavailable. Please try again."})


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}
