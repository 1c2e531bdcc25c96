from .channel_db import ChannelDatabase
from .schema import CATALOG_TABLES, ensure_schema
from .sqlalchemy_core import SqlalchemyCore
from .video_db import VideoDatabase

__all__ = [
    "CATALOG_TABLES",
    "ChannelDatabase",
    "SqlalchemyCore",
    "VideoDatabase",
    "ensure_schema",
]
