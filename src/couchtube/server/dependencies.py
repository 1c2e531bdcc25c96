"""Dependency provider functions for FastAPI endpoints.

This module contains functions that retrieve dependencies from the
application state for use in FastAPI endpoints via the Depends system.
"""

from typing import Annotated

from fastapi import Depends, Request

from couchtube.db import ChannelDatabase, VideoDatabase


def get_channel_database(request: Request) -> ChannelDatabase:
    """Return the :class:`ChannelDatabase` stored on ``app.state``."""
    return request.app.state.channel_database


def get_video_database(request: Request) -> VideoDatabase:
    """Return the :class:`VideoDatabase` stored on ``app.state``."""
    return request.app.state.video_database


ChannelDatabaseDep = Annotated[ChannelDatabase, Depends(get_channel_database)]
VideoDatabaseDep = Annotated[VideoDatabase, Depends(get_video_database)]
