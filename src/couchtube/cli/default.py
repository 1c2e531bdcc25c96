"""Default mode implementation for Couchtube.

This module initializes the database (schema, then catalog population unless
read-only mode is on) and serves the stored catalog over HTTP.
"""

import logging

from ..catalog_reconciler import CatalogReconciler, ReconcileResult
from ..catalog_resolver import CatalogResolver
from ..config import AppSettings, load_catalog
from ..db import ChannelDatabase, SqlalchemyCore, VideoDatabase, ensure_schema
from ..exceptions import CatalogReconciliationError, DatabaseOperationError
from ..server import create_server
from ..youtube_provider import DurationProvider, YoutubeDurationProvider

logger = logging.getLogger(__name__)


async def graceful_shutdown(db_core: SqlalchemyCore | None) -> None:
    """Release resources held by the service.

    Args:
        db_core: The database core instance to close.
    """
    if db_core:
        try:
            await db_core.close()
            logger.info("Database connections closed.")
        except Exception as e:
            logger.error("Error closing database connections.", exc_info=e)
    logger.info("Couchtube shutdown completed.")


async def initialize_database(
    settings: AppSettings,
    db_core: SqlalchemyCore,
    channel_db: ChannelDatabase,
    video_db: VideoDatabase,
    provider: DurationProvider | None = None,
) -> ReconcileResult | None:
    """Create the schema and, unless read-only, populate it from the catalog.

    Args:
        settings: Application settings.
        db_core: The database to initialize.
        channel_db: Channel table operations.
        video_db: Video table operations.
        provider: Duration provider; defaults to the YouTube Data API.

    Returns:
        The reconciliation summary, or None in read-only mode.

    Raises:
        SchemaError: If the schema cannot be created.
        ConfigLoadError: If the catalog file cannot be loaded.
        CatalogReconciliationError: If population fails.
        DatabaseOperationError: If the stored rows cannot be counted.
    """
    await ensure_schema(db_core)

    result: ReconcileResult | None = None
    if settings.readonly_mode:
        logger.info("Read-only mode enabled. Skipping database population.")
    else:
        catalog = load_catalog(settings.json_file_path)
        resolver = CatalogResolver(
            provider
            or YoutubeDurationProvider(
                api_key=settings.youtube_api_key,
                timeout=settings.youtube_api_timeout,
            )
        )
        reconciler = CatalogReconciler(
            db_core=db_core,
            channel_db=channel_db,
            video_db=video_db,
            resolver=resolver,
        )
        try:
            result = await reconciler.reconcile(catalog, full_scan=settings.full_scan)
        except CatalogReconciliationError as e:
            logger.error("Catalog reconciliation failed, cannot continue.", exc_info=e)
            raise

    logger.info(
        "Database ready.",
        extra={
            "channels": await channel_db.count_channels(),
            "videos": await video_db.count_videos(),
            "links": await channel_db.count_links(),
        },
    )
    return result


async def default(settings: AppSettings) -> None:
    """Main async entry point for default mode.

    Args:
        settings: Application settings object containing configuration.

    Raises:
        CouchtubeError: If initialization fails; resources are released first.
    """
    db_core: SqlalchemyCore | None = None
    try:
        try:
            settings.database_file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DatabaseOperationError(
                "Failed to create database directory."
            ) from e

        db_core = SqlalchemyCore(settings.database_file_path)
        channel_db = ChannelDatabase(db_core)
        video_db = VideoDatabase(db_core)

        await initialize_database(settings, db_core, channel_db, video_db)
    except Exception:
        await graceful_shutdown(db_core)
        raise

    if settings.populate_only:
        logger.info("Populate-only mode; not starting the HTTP server.")
        await graceful_shutdown(db_core)
        return

    server = create_server(
        settings=settings,
        channel_database=channel_db,
        video_database=video_db,
        shutdown_callback=lambda: graceful_shutdown(db_core),
    )
    logger.info(
        "Starting HTTP server...",
        extra={"server_host": settings.server_host, "server_port": settings.port},
    )
    await server.serve()
