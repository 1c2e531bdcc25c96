"""Reconciliation of the JSON catalog with the database.

This module provides the CatalogReconciler class, which decides whether the
database needs populating, optionally wipes it for a full rebuild, and writes
channels, videos and their links in a single transaction.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
import logging
import time

from sqlalchemy.exc import SQLAlchemyError

from .catalog_resolver import CatalogResolver
from .config.catalog import Catalog
from .db import CATALOG_TABLES, ChannelDatabase, SqlalchemyCore, VideoDatabase
from .exceptions import (
    CatalogReconciliationError,
    CouchtubeError,
    DatabaseOperationError,
)
from .logging_config import reset_context_id, set_context_id

logger = logging.getLogger(__name__)


class ReconcileOutcome(str, Enum):
    """Terminal state of a successful reconciliation run."""

    SKIPPED = "SKIPPED"
    POPULATED = "POPULATED"


@dataclass
class ReconcileResult:
    """Summary of a reconciliation run.

    Attributes:
        outcome: Whether the run skipped population or committed it.
        start_time: When the run began (UTC).
        duration_seconds: Wall time of the run.
        wiped: Whether a full scan emptied the tables first.
        channels_inserted: New channel rows.
        channels_skipped_empty: Catalog channels without videos.
        videos_inserted: New video rows.
        videos_reused: Entries whose id was already stored; their bounds were discarded.
        videos_resolved: Entries whose end came from the metadata provider.
        links_inserted: New channel-video links.
    """

    outcome: ReconcileOutcome
    start_time: datetime = field(default_factory=lambda: datetime.now(UTC))
    duration_seconds: float = 0.0
    wiped: bool = False
    channels_inserted: int = 0
    channels_skipped_empty: int = 0
    videos_inserted: int = 0
    videos_reused: int = 0
    videos_resolved: int = 0
    links_inserted: int = 0


class CatalogReconciler:
    """Populate the database from the catalog.

    A run goes through these states:

    - Check: with ``full_scan`` go to Wipe; otherwise, if any channel row
      exists, stop (Skipped); else go to Populate.
    - Wipe: delete every row of the three tables, reset their AUTOINCREMENT
      counters and vacuum, then go to Populate.
    - Populate: in one transaction, insert-or-fetch each channel and video
      and link them. Any error rolls the whole transaction back.

    Only the channel table is checked, so a database with channels but no
    videos also counts as populated.

    Attributes:
        _db_core: Core database manager, used for the wipe.
        _channel_db: Channel table operations.
        _video_db: Video table operations.
        _resolver: Resolver for clips without explicit bounds.
    """

    def __init__(
        self,
        db_core: SqlalchemyCore,
        channel_db: ChannelDatabase,
        video_db: VideoDatabase,
        resolver: CatalogResolver,
    ) -> None:
        self._db_core = db_core
        self._channel_db = channel_db
        self._video_db = video_db
        self._resolver = resolver
        logger.debug("CatalogReconciler initialized.")

    async def reconcile(
        self, catalog: Catalog, full_scan: bool = False
    ) -> ReconcileResult:
        """Run one reconciliation of ``catalog`` against the database.

        Args:
            catalog: The catalog to write.
            full_scan: Wipe all stored data and rebuild it from the catalog.

        Returns:
            Summary of the run; its outcome is SKIPPED or POPULATED.

        Raises:
            CatalogReconciliationError: If the run is aborted. The database is
                left as it was before Populate began.
        """
        token = set_context_id(f"populate-{int(time.time())}")
        started = time.perf_counter()
        try:
            result = await self._reconcile(catalog, full_scan)
        finally:
            reset_context_id(token)
        result.duration_seconds = time.perf_counter() - started
        return result

    async def _reconcile(self, catalog: Catalog, full_scan: bool) -> ReconcileResult:
        result = ReconcileResult(outcome=ReconcileOutcome.SKIPPED)

        if full_scan:
            logger.info("Full scan enabled. Deleting all data from the database.")
            try:
                await self._db_core.wipe_tables(CATALOG_TABLES)
            except DatabaseOperationError as e:
                raise CatalogReconciliationError(
                    "Failed to wipe the database for a full scan."
                ) from e
            result.wiped = True
        else:
            try:
                populated = await self._channel_db.has_channels()
            except DatabaseOperationError as e:
                raise CatalogReconciliationError(
                    "Failed to check whether the database is populated."
                ) from e
            if populated:
                logger.info("Data already exists in the database. Skipping population.")
                return result

        await self._populate(catalog, result)
        result.outcome = ReconcileOutcome.POPULATED
        logger.info(
            "Catalog written to the database.",
            extra={
                "channels_inserted": result.channels_inserted,
                "videos_inserted": result.videos_inserted,
                "videos_reused": result.videos_reused,
                "videos_resolved": result.videos_resolved,
                "links_inserted": result.links_inserted,
            },
        )
        return result

    async def _populate(self, catalog: Catalog, result: ReconcileResult) -> None:
        """Write the whole catalog inside a single transaction.

        Raises:
            CatalogReconciliationError: If any step fails; nothing is committed.
        """
        channel_name: str | None = None
        video_id: str | None = None
        try:
            async with self._channel_db.transaction() as session:
                for channel in catalog.channels:
                    channel_name, video_id = channel.name, None
                    if not channel.videos:
                        logger.info(
                            "Channel has no videos. Skipping.",
                            extra={"channel_name": channel.name},
                        )
                        result.channels_skipped_empty += 1
                        continue

                    channel_id, channel_inserted = (
                        await self._channel_db.insert_or_get_channel_id(
                            session, channel.name
                        )
                    )
                    if channel_inserted:
                        result.channels_inserted += 1

                    for video in channel.videos:
                        video_id = video.id
                        if video.needs_resolution:
                            video = await self._resolver.resolve(video)
                            result.videos_resolved += 1

                        stored, inserted = await self._video_db.insert_or_get_video(
                            session, video
                        )
                        if inserted:
                            result.videos_inserted += 1
                        else:
                            result.videos_reused += 1

                        if await self._channel_db.link_video(
                            session, channel_id, stored.id
                        ):
                            result.links_inserted += 1
        except (CouchtubeError, SQLAlchemyError) as e:
            raise CatalogReconciliationError(
                "Catalog population aborted.",
                channel_name=channel_name,
                video_id=video_id,
            ) from e
