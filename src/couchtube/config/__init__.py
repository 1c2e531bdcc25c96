from .catalog import Catalog, ChannelEntry, VideoEntry, load_catalog
from .config import AppSettings

__all__ = [
    "AppSettings",
    "Catalog",
    "ChannelEntry",
    "VideoEntry",
    "load_catalog",
]
