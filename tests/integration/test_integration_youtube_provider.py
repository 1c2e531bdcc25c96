"""Integration tests for the YouTube Data API duration provider."""

import pytest

from couchtube.catalog_resolver import CatalogResolver
from couchtube.config import VideoEntry
from couchtube.exceptions import ProviderError, VideoNotFoundError
from couchtube.youtube_provider import YoutubeDurationProvider

# "Me at the zoo", 19 seconds long
ZOO_VIDEO_ID = "jNQXAC9IVRw"
ZOO_VIDEO_SECONDS = 19


@pytest.mark.integration
@pytest.mark.asyncio
async def test_get_duration_real_video(youtube_provider: YoutubeDurationProvider):
    """A public video reports its ISO 8601 duration."""
    duration = await youtube_provider.get_duration(ZOO_VIDEO_ID)

    assert duration == "PT19S"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_resolve_real_video(youtube_provider: YoutubeDurationProvider):
    """A full-length clip resolves to the video's length in seconds."""
    resolver = CatalogResolver(youtube_provider)

    resolved = await resolver.resolve(VideoEntry(id=ZOO_VIDEO_ID))

    assert resolved.section_end == ZOO_VIDEO_SECONDS


@pytest.mark.integration
@pytest.mark.asyncio
async def test_get_duration_unknown_video(youtube_provider: YoutubeDurationProvider):
    """An id that does not exist raises VideoNotFoundError."""
    with pytest.raises(VideoNotFoundError):
        await youtube_provider.get_duration("xxxxxxxxxxx")


@pytest.mark.integration
@pytest.mark.asyncio
async def test_get_duration_invalid_key():
    """A rejected key surfaces as a ProviderError with the HTTP status."""
    provider = YoutubeDurationProvider(api_key="invalid-key", timeout=15.0)

    with pytest.raises(ProviderError) as exc_info:
        await provider.get_duration(ZOO_VIDEO_ID)

    assert exc_info.value.status_code == 400
