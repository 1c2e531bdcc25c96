# pyright: reportPrivateUsage=false

"""Tests for the ChannelDatabase class."""

import pytest

from couchtube.config import VideoEntry
from couchtube.db import ChannelDatabase, VideoDatabase
from couchtube.exceptions import ChannelNotFoundError, ConstraintViolationError


@pytest.mark.unit
@pytest.mark.asyncio
async def test_insert_or_get_channel_id_inserts_then_fetches(
    channel_db: ChannelDatabase,
):
    """The first call inserts; a later call with the same name returns the same id."""
    async with channel_db.transaction() as session:
        first_id, first_inserted = await channel_db.insert_or_get_channel_id(
            session, "Cartoons"
        )
        second_id, second_inserted = await channel_db.insert_or_get_channel_id(
            session, "Cartoons"
        )

    assert first_inserted is True
    assert second_inserted is False
    assert first_id == second_id == 1
    assert await channel_db.count_channels() == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_insert_or_get_channel_id_across_transactions(
    channel_db: ChannelDatabase,
):
    """An already committed channel is fetched rather than duplicated."""
    async with channel_db.transaction() as session:
        await channel_db.insert_or_get_channel_id(session, "A")
        await channel_db.insert_or_get_channel_id(session, "B")

    async with channel_db.transaction() as session:
        channel_id, inserted = await channel_db.insert_or_get_channel_id(session, "B")

    assert (channel_id, inserted) == (2, False)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_link_video_is_idempotent(
    channel_db: ChannelDatabase, video_db: VideoDatabase
):
    """Linking the same pair twice stores a single link."""
    async with channel_db.transaction() as session:
        channel_id, _ = await channel_db.insert_or_get_channel_id(session, "A")
        await video_db.insert_or_get_video(
            session, VideoEntry(id="v1", section_end=10)
        )
        first = await channel_db.link_video(session, channel_id, "v1")
        second = await channel_db.link_video(session, channel_id, "v1")

    assert first is True
    assert second is False
    assert await channel_db.count_links() == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_link_video_missing_video_raises(channel_db: ChannelDatabase):
    """A link to a video that was never stored violates the foreign key."""
    with pytest.raises(ConstraintViolationError) as exc_info:
        async with channel_db.transaction() as session:
            channel_id, _ = await channel_db.insert_or_get_channel_id(session, "A")
            await channel_db.link_video(session, channel_id, "ghost")

    assert exc_info.value.video_id == "ghost"
    assert await channel_db.count_channels() == 0


@pytest.mark.unit
@pytest.mark.asyncio
async def test_has_channels(channel_db: ChannelDatabase):
    """has_channels reports whether any channel row exists."""
    assert await channel_db.has_channels() is False

    async with channel_db.transaction() as session:
        await channel_db.insert_or_get_channel_id(session, "A")

    assert await channel_db.has_channels() is True


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_channels_ordered_by_id(channel_db: ChannelDatabase):
    """Channels come back in insertion order."""
    async with channel_db.transaction() as session:
        for name in ("Zulu", "Alpha", "Mike"):
            await channel_db.insert_or_get_channel_id(session, name)

    channels = await channel_db.get_channels()

    assert [(c.id, c.name) for c in channels] == [
        (1, "Zulu"),
        (2, "Alpha"),
        (3, "Mike"),
    ]


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_channel_by_id(channel_db: ChannelDatabase):
    """A stored channel can be fetched by id."""
    async with channel_db.transaction() as session:
        channel_id, _ = await channel_db.insert_or_get_channel_id(session, "News")

    by_id = await channel_db.get_channel_by_id(channel_id)

    assert by_id.name == "News"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_get_channel_not_found(channel_db: ChannelDatabase):
    """An unknown channel id raises ChannelNotFoundError."""
    with pytest.raises(ChannelNotFoundError):
        await channel_db.get_channel_by_id(42)
