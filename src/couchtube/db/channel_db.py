"""Database management for channels and their video links."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
import logging

from sqlalchemy import func
from sqlalchemy.dialects.sqlite import insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from ..exceptions import ChannelNotFoundError, DatabaseOperationError
from .decorators import (
    handle_channel_db_errors,
    handle_db_errors,
    handle_video_db_errors,
)
from .sqlalchemy_core import SqlalchemyCore
from .types import Channel, ChannelVideo

logger = logging.getLogger(__name__)


class ChannelDatabase:
    """Manage all database operations for channels.

    Write methods take the session of an enclosing transaction so that a
    whole population run commits or rolls back as a unit.

    Attributes:
        _db: Core SQLAlchemy database manager.
    """

    def __init__(self, db_core: SqlalchemyCore):
        self._db = db_core

    # --- Transaction Support ---
    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession]:
        """Provide a session wrapped in a single transaction.

        This is a passthrough to the core SQLAlchemy transaction manager.

        Yields:
            An AsyncSession with an open transaction.
        """
        async with self._db.transaction() as session:
            yield session

    # --- Writes ---
    @handle_channel_db_errors("insert or get channel")
    async def insert_or_get_channel_id(
        self, session: AsyncSession, name: str
    ) -> tuple[int, bool]:
        """Insert a channel by name, or fetch the id of the existing one.

        Both statements run on the caller's session, inside its transaction.

        Args:
            session: Session of the enclosing transaction.
            name: The channel name.

        Returns:
            The channel id and whether a new row was inserted.

        Raises:
            DatabaseOperationError: If the database operation fails.
        """
        stmt = (
            insert(Channel)
            .values(name=name)
            .on_conflict_do_nothing(index_elements=["name"])
            .returning(col(Channel.id))
        )
        inserted_id = (await session.execute(stmt)).scalar_one_or_none()
        if inserted_id is not None:
            logger.debug(
                "Inserted channel.", extra={"channel_name": name, "channel_id": inserted_id}
            )
            return inserted_id, True

        existing_id = (
            await session.execute(
                select(col(Channel.id)).where(col(Channel.name) == name)
            )
        ).scalar_one_or_none()
        if existing_id is None:
            raise DatabaseOperationError(
                "Channel insert was ignored but no existing row was found.",
                channel_name=name,
            )
        logger.debug(
            "Channel already exists.", extra={"channel_name": name, "channel_id": existing_id}
        )
        return existing_id, False

    @handle_video_db_errors("link video to channel")
    async def link_video(
        self, session: AsyncSession, channel_id: int, video_id: str
    ) -> bool:
        """Associate a video with a channel; an existing link is a no-op.

        Args:
            session: Session of the enclosing transaction.
            channel_id: The channel id.
            video_id: The video identifier.

        Returns:
            True if a new link was inserted, False if it already existed.

        Raises:
            ConstraintViolationError: If either side of the link does not exist.
            DatabaseOperationError: If the database operation fails.
        """
        stmt = (
            insert(ChannelVideo)
            .values(channel_id=channel_id, video_id=video_id)
            .on_conflict_do_nothing(index_elements=["channel_id", "video_id"])
        )
        result = self._db.as_cursor_result(await session.execute(stmt))
        return result.rowcount == 1

    # --- Reads ---
    @handle_db_errors("check for existing channels")
    async def has_channels(self) -> bool:
        """Return whether at least one channel row exists."""
        async with self._db.session() as session:
            row = (await session.execute(select(col(Channel.id)).limit(1))).first()
            return row is not None

    @handle_db_errors("count channels")
    async def count_channels(self) -> int:
        """Return the number of channel rows."""
        async with self._db.session() as session:
            result = await session.execute(select(func.count()).select_from(Channel))
            return result.scalar_one()

    @handle_db_errors("get channels")
    async def get_channels(self) -> list[Channel]:
        """Return all channels ordered by id.

        Raises:
            DatabaseOperationError: If the database query fails.
        """
        async with self._db.session() as session:
            result = await session.execute(select(Channel).order_by(col(Channel.id)))
            return list(result.scalars().all())

    @handle_db_errors("get channel by id")
    async def get_channel_by_id(self, channel_id: int) -> Channel:
        """Retrieve a channel by its id.

        Raises:
            ChannelNotFoundError: If the channel does not exist.
            DatabaseOperationError: If the database query fails.
        """
        async with self._db.session() as session:
            channel = await session.get(Channel, channel_id)
            if channel is None:
                raise ChannelNotFoundError("Channel not found.")
            return channel

    @handle_db_errors("count channel video links")
    async def count_links(self) -> int:
        """Return the number of channel-video links."""
        async with self._db.session() as session:
            result = await session.execute(
                select(func.count()).select_from(ChannelVideo)
            )
            return result.scalar_one()
