"""Catalog models for the JSON file of channels and their video clips.

The catalog is the declarative input of the service. It looks like::

    {
        "channels": [
            {
                "name": "Cartoons",
                "videos": [
                    {"id": "dQw4w9WgXcQ", "sectionStart": 10, "sectionEnd": 50},
                    {"id": "9bZkp7q19f0"}
                ]
            }
        ]
    }

A video whose bounds are both zero (or absent) plays in full; its end is
resolved from the video's duration at population time.
"""

import logging
from pathlib import Path

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import ConfigLoadError

logger = logging.getLogger(__name__)


class VideoEntry(BaseModel):
    """A clip declared in the catalog.

    Attributes:
        id: The YouTube video identifier.
        section_start: Start of the clip in seconds.
        section_end: End of the clip in seconds, 0 with a 0 start for "full length".
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    section_start: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("sectionStart", "section_start"),
    )
    section_end: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices("sectionEnd", "section_end"),
    )

    @property
    def needs_resolution(self) -> bool:
        """Whether the clip has no explicit bounds and should play in full."""
        return self.section_start == 0 and self.section_end == 0


class ChannelEntry(BaseModel):
    """A channel and the ordered list of clips it plays.

    Attributes:
        name: Unique channel name.
        videos: Clips in playback order.
    """

    name: str = Field(min_length=1)
    videos: list[VideoEntry] = Field(default_factory=list[VideoEntry])


class Catalog(BaseModel):
    """The complete catalog of channels."""

    channels: list[ChannelEntry] = Field(default_factory=list[ChannelEntry])


def load_catalog(path: Path) -> Catalog:
    """Read and validate the JSON catalog file.

    Args:
        path: Path to the JSON file.

    Returns:
        The validated catalog.

    Raises:
        ConfigLoadError: If the file cannot be read, is not valid JSON, or
            does not match the catalog structure.
    """
    log_params = {"file_path": str(path)}
    logger.debug("Loading catalog file.", extra=log_params)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ConfigLoadError(
            "Failed to read catalog file.", config_file=str(path)
        ) from e

    try:
        catalog = Catalog.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigLoadError(
            "Catalog file is not valid JSON or does not match the expected structure.",
            config_file=str(path),
        ) from e

    logger.info(
        "Catalog loaded.",
        extra={
            **log_params,
            "channels": len(catalog.channels),
            "videos": sum(len(c.videos) for c in catalog.channels),
        },
    )
    return catalog
