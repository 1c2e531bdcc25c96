"""Video duration lookups against the YouTube Data API v3."""

import logging
from typing import Any, Protocol

import httpx

from .exceptions import ProviderError, VideoNotFoundError

logger = logging.getLogger(__name__)

YOUTUBE_VIDEOS_URL = "https://www.googleapis.com/youtube/v3/videos"


class DurationProvider(Protocol):
    """Anything that can report the duration of a video."""

    async def get_duration(self, video_id: str) -> str:
        """Return the ISO 8601 duration of a video.

        Raises:
            VideoNotFoundError: If no video exists with this id.
            ProviderError: If the lookup itself fails.
        """
        ...


class YoutubeDurationProvider:
    """Look up video durations with the ``videos.list`` endpoint.

    Each lookup is a single blocking round trip; there are no retries.

    Attributes:
        _api_key: YouTube Data API key.
        _timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        api_key: str,
        timeout: float = 10.0,
        api_url: str = YOUTUBE_VIDEOS_URL,
    ):
        self._api_key = api_key
        self._timeout = timeout
        self._api_url = api_url
        logger.debug("YoutubeDurationProvider initialized.")

    async def get_duration(self, video_id: str) -> str:
        """Fetch the ``contentDetails.duration`` of a video.

        Args:
            video_id: The YouTube video identifier.

        Returns:
            The duration string, e.g. ``PT4M13S``.

        Raises:
            VideoNotFoundError: If the API returns no item for the id.
            ProviderError: On missing API key, transport errors, timeouts,
                non-2xx responses or malformed payloads.
        """
        log_params = {"video_id": video_id}
        if not self._api_key:
            raise ProviderError(
                "YouTube API key is not configured; cannot resolve video duration.",
                video_id=video_id,
            )

        logger.debug("Requesting video content details.", extra=log_params)
        params = {"part": "contentDetails", "id": video_id, "key": self._api_key}
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            try:
                response = await client.get(self._api_url, params=params)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise ProviderError(
                    "YouTube API returned an error response.",
                    video_id=video_id,
                    status_code=e.response.status_code,
                ) from e
            except httpx.HTTPError as e:
                raise ProviderError(
                    "YouTube API request failed.", video_id=video_id
                ) from e

        try:
            payload: dict[str, Any] = response.json()
            items: list[dict[str, Any]] = payload.get("items") or []
        except (ValueError, AttributeError) as e:
            raise ProviderError(
                "YouTube API returned a malformed response.", video_id=video_id
            ) from e

        if not items:
            raise VideoNotFoundError("No video found with this ID.", video_id=video_id)

        try:
            duration = items[0]["contentDetails"]["duration"]
        except (KeyError, TypeError) as e:
            raise ProviderError(
                "YouTube API response has no contentDetails.duration.",
                video_id=video_id,
            ) from e
        if not isinstance(duration, str):
            raise ProviderError(
                "YouTube API returned a non-string duration.", video_id=video_id
            )

        logger.debug("Video duration fetched.", extra={**log_params, "duration": duration})
        return duration
