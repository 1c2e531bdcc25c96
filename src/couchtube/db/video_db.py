"""Database management for videos."""

import logging

from sqlalchemy import func, literal_column
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from ..config.catalog import VideoEntry
from ..exceptions import DatabaseOperationError
from .decorators import handle_db_errors, handle_video_db_errors
from .sqlalchemy_core import SqlalchemyCore
from .types import ChannelVideo, Video

logger = logging.getLogger(__name__)


class VideoDatabase:
    """Manage all database operations for videos.

    Attributes:
        _db: Core SQLAlchemy database manager.
    """

    def __init__(self, db_core: SqlalchemyCore):
        self._db = db_core

    @handle_video_db_errors("insert or get video", video_id_from="video.id")
    async def insert_or_get_video(
        self, session: AsyncSession, video: VideoEntry
    ) -> tuple[Video, bool]:
        """Insert a video, or fetch the stored row if the id already exists.

        An existing row is never updated: the bounds of ``video`` are
        discarded in favour of the stored ones.

        Args:
            session: Session of the enclosing transaction.
            video: The catalog entry, with its bounds already resolved.

        Returns:
            The stored video and whether it was inserted by this call.

        Raises:
            ConstraintViolationError: If the bounds violate a table constraint.
            DatabaseOperationError: If the database operation fails.
        """
        stmt = (
            insert(Video)
            .values(
                id=video.id,
                section_start=video.section_start,
                section_end=video.section_end,
            )
            .on_conflict_do_nothing(index_elements=["id"])
            .returning(col(Video.id))
        )
        inserted_id = (await session.execute(stmt)).scalar_one_or_none()
        if inserted_id is not None:
            logger.debug("Inserted video.", extra={"video_id": video.id})
            return (
                Video(
                    id=inserted_id,
                    section_start=video.section_start,
                    section_end=video.section_end,
                ),
                True,
            )

        existing = (
            await session.execute(select(Video).where(col(Video.id) == video.id))
        ).scalars().one_or_none()
        if existing is None:
            raise DatabaseOperationError(
                "Video insert was ignored but no existing row was found.",
                video_id=video.id,
            )
        if (existing.section_start, existing.section_end) != (
            video.section_start,
            video.section_end,
        ):
            logger.debug(
                "Video already stored with different bounds; keeping stored bounds.",
                extra={
                    "video_id": video.id,
                    "stored_bounds": [existing.section_start, existing.section_end],
                    "discarded_bounds": [video.section_start, video.section_end],
                },
            )
        return existing, False

    @handle_db_errors("get videos for channel")
    async def get_videos_for_channel(self, channel_id: int) -> list[Video]:
        """Return the videos linked to a channel, in the order they were linked.

        Args:
            channel_id: The channel id.

        Returns:
            The channel's videos; empty if the channel has none or does not exist.

        Raises:
            DatabaseOperationError: If the database query fails.
        """
        async with self._db.session() as session:
            stmt = (
                select(Video)
                .join(ChannelVideo, col(ChannelVideo.video_id) == col(Video.id))
                .where(col(ChannelVideo.channel_id) == channel_id)
                .order_by(literal_column("channel_videos.rowid"))
            )
            result = await session.execute(stmt)
            return list(result.scalars().all())

    @handle_db_errors("count videos")
    async def count_videos(self) -> int:
        """Return the number of video rows."""
        async with self._db.session() as session:
            result = await session.execute(select(func.count()).select_from(Video))
            return result.scalar_one()
