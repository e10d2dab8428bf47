from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import asyncio
import logging

from fragekasten import __version__
from fragekasten.config import settings
from fragekasten.routers import asks, index
from fragekasten.core.database import init_db, close_db
from fragekasten.core.structured_logging import setup_logging
from fragekasten.core.errors import FragekastenError
from fragekasten.core.errors.registry import error_registry
from fragekasten.core.errors.middleware import fragekasten_error_handler
from fragekasten.core.log_middleware import (
    CorrelationMiddleware,
    ResponseHeadersMiddleware,
    TrimTrailingSlashMiddleware,
)
from fragekasten.services.expiry_sweeper import expiry_sweeper_loop
from fragekasten.services.notification_service import close_notification_client
from fragekasten.services.question_store import QuestionStore

# Initialize structured logging before any logger calls
setup_logging(log_dir=settings.log_dir, log_level=settings.log_level.upper())

logger = logging.getLogger(__name__)

API_TITLE = "Fragekasten"

TAGS_METADATA = [
    {
        "name": "asks",
        "description": "Anonymous question submission. Public, no authentication.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Starts the expiry sweeper on startup and tears everything down on shutdown.
    """
    logger.info("Starting Fragekasten v%s...", __version__)

    error_registry.load()

    if not settings.discord_webhook_url:
        logger.warning(
            "FRAGEKASTEN_DISCORD_WEBHOOK_URL not set, every submitted question "
            "will fail notification and be answered with 500"
        )

    init_db()
    logger.info("Database initialized")

    sweeper_task = asyncio.create_task(expiry_sweeper_loop(QuestionStore()))

    logger.info(
        "Internal server started, listening on: http://%s:%d", settings.host, settings.port
    )

    yield

    logger.info("Shutting down Fragekasten...")

    sweeper_task.cancel()
    try:
        await sweeper_task
    except asyncio.CancelledError:
        logger.info("Expiry sweeper cancelled")

    await close_notification_client()
    close_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title=API_TITLE,
        description="Anonymous question box that relays questions to a Discord webhook.",
        version=__version__,
        openapi_tags=TAGS_METADATA,
        lifespan=lifespan,
    )

    app.add_middleware(ResponseHeadersMiddleware)
    app.add_middleware(CorrelationMiddleware)
    # Outermost, so routing never sees the trailing slash
    app.add_middleware(TrimTrailingSlashMiddleware)

    app.add_exception_handler(FragekastenError, fragekasten_error_handler)

    # Catch-all handler so unhandled exceptions return JSON (not bare text)
    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal Server Error"},
        )

    app.include_router(index.router)
    app.include_router(asks.router, prefix="/api", tags=["asks"])

    return app


app = create_app()
