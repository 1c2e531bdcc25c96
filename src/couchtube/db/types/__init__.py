"""Database model types."""

from .channel import Channel
from .channel_video import ChannelVideo
from .video import Video

__all__ = [
    "Channel",
    "ChannelVideo",
    "Video",
]
