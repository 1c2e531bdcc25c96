"""Read-only endpoints for the stored channels and their clips."""

import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ...exceptions import ChannelNotFoundError, DatabaseOperationError
from ..dependencies import ChannelDatabaseDep, VideoDatabaseDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


class ChannelResponse(BaseModel):
    """A stored channel."""

    id: int
    name: str


class VideoResponse(BaseModel):
    """A stored clip, bounds in seconds."""

    id: str
    section_start: int
    section_end: int


@router.get("/channels", response_model=list[ChannelResponse])
async def list_channels(channel_db: ChannelDatabaseDep) -> list[ChannelResponse]:
    """List all channels ordered by id.

    Raises:
        HTTPException: 500 if the database cannot be read.
    """
    try:
        channels = await channel_db.get_channels()
    except DatabaseOperationError as e:
        logger.error("Failed to list channels.", exc_info=e)
        raise HTTPException(status_code=500, detail="Failed to list channels.") from e
    return [ChannelResponse(id=c.id, name=c.name) for c in channels if c.id is not None]


@router.get("/channels/{channel_id}/videos", response_model=list[VideoResponse])
async def list_channel_videos(
    channel_id: int,
    channel_db: ChannelDatabaseDep,
    video_db: VideoDatabaseDep,
) -> list[VideoResponse]:
    """List the clips of a channel in playback order.

    Raises:
        HTTPException: 404 if the channel does not exist, 500 if the
            database cannot be read.
    """
    try:
        await channel_db.get_channel_by_id(channel_id)
        videos = await video_db.get_videos_for_channel(channel_id)
    except ChannelNotFoundError as e:
        raise HTTPException(status_code=404, detail="Channel not found.") from e
    except DatabaseOperationError as e:
        logger.error(
            "Failed to list channel videos.",
            extra={"channel_id": channel_id},
            exc_info=e,
        )
        raise HTTPException(
            status_code=500, detail="Failed to list channel videos."
        ) from e
    return [
        VideoResponse(
            id=v.id, section_start=v.section_start, section_end=v.section_end
        )
        for v in videos
    ]
