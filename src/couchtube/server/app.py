"""FastAPI application factory for the Couchtube HTTP server."""

from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from .. import __version__
from ..db import ChannelDatabase, VideoDatabase
from .routers import channels, health

logger = logging.getLogger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log HTTP requests and responses."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Log the request, call the endpoint, then log the response.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or endpoint to call.

        Returns:
            The HTTP response.
        """
        logger.debug(
            "HTTP request received",
            extra={
                "method": request.method,
                "path": request.url.path,
                "client": request.client.host if request.client else None,
            },
        )

        response = await call_next(request)

        logger.debug(
            "HTTP response sent",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
            },
        )
        return response


def create_app(
    channel_database: ChannelDatabase,
    video_database: VideoDatabase,
    shutdown_callback: Callable[[], Awaitable[None]] | None = None,
) -> FastAPI:
    """Create the FastAPI application serving the stored catalog.

    Args:
        channel_database: The channel database instance.
        video_database: The video database instance.
        shutdown_callback: Optional coroutine run when the app shuts down.

    Returns:
        Configured FastAPI application instance.
    """

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
        try:
            yield
        finally:
            if shutdown_callback:
                await shutdown_callback()

    app = FastAPI(
        title="Couchtube",
        description="Channels of YouTube clips, served from a JSON catalog",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(LoggingMiddleware)

    app.state.channel_database = channel_database
    app.state.video_database = video_database

    app.include_router(health.router, tags=["health"])
    app.include_router(channels.router, tags=["channels"])

    logger.debug("FastAPI application created successfully")
    return app
