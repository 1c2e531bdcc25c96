"""HTTP server initialization for Couchtube."""

from collections.abc import Awaitable, Callable
import logging

import uvicorn

from ..config import AppSettings
from ..db import ChannelDatabase, VideoDatabase
from ..logging_config import LOGGING_CONFIG
from .app import create_app

logger = logging.getLogger(__name__)


def create_server(
    settings: AppSettings,
    channel_database: ChannelDatabase,
    video_database: VideoDatabase,
    shutdown_callback: Callable[[], Awaitable[None]] | None = None,
) -> uvicorn.Server:
    """Create a uvicorn server running the FastAPI app.

    Args:
        settings: Application settings containing server configuration.
        channel_database: The channel database instance.
        video_database: The video database instance.
        shutdown_callback: Optional callback to execute during shutdown.

    Returns:
        Configured uvicorn server ready to run.
    """
    app = create_app(
        channel_database=channel_database,
        video_database=video_database,
        shutdown_callback=shutdown_callback,
    )

    config = uvicorn.Config(
        app=app,
        host=settings.server_host,
        port=settings.port,
        log_config=LOGGING_CONFIG,
        access_log=False,  # LoggingMiddleware logs requests
        ws="none",
        lifespan="on",
    )
    server = uvicorn.Server(config)

    logger.debug(
        "HTTP server configured.",
        extra={"host": settings.server_host, "port": settings.port},
    )
    return server
