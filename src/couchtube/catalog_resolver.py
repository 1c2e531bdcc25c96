"""Fill in the end of catalog clips that should play in full."""

import logging

from .config.catalog import VideoEntry
from .duration import parse_duration
from .youtube_provider import DurationProvider

logger = logging.getLogger(__name__)


class CatalogResolver:
    """Resolve full-length clips to explicit bounds using a duration provider.

    Attributes:
        _provider: Source of video durations.
    """

    def __init__(self, provider: DurationProvider):
        self._provider = provider

    async def resolve(self, video: VideoEntry) -> VideoEntry:
        """Return a copy of ``video`` whose end is the video's full duration.

        Entries with explicit bounds are returned unchanged. The start of a
        resolved entry stays 0.

        Args:
            video: The catalog entry.

        Returns:
            The entry with ``section_end`` set to the duration in seconds.

        Raises:
            VideoNotFoundError: If the provider knows no such video.
            ProviderError: If the provider call fails.
            InvalidDurationFormatError: If the returned duration is unparseable.
        """
        if not video.needs_resolution:
            return video

        duration_text = await self._provider.get_duration(video.id)
        seconds = parse_duration(duration_text)
        log_params = {"video_id": video.id, "duration": duration_text, "seconds": seconds}
        if seconds == 0:
            logger.warning("Provider reported a zero-length video.", extra=log_params)
        else:
            logger.debug("Resolved full-length clip.", extra=log_params)
        return video.model_copy(update={"section_end": seconds})
