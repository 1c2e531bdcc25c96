"""Shared fixtures for integration tests."""

from collections.abc import AsyncGenerator
import os
from pathlib import Path

from helpers.alembic import run_migrations
import pytest
import pytest_asyncio

from couchtube.db import ChannelDatabase, SqlalchemyCore, VideoDatabase
from couchtube.youtube_provider import YoutubeDurationProvider


@pytest.fixture
def youtube_api_key() -> str:
    """Provide the YouTube Data API key, skipping the test if none is set."""
    key = os.getenv("YOUTUBE_API_KEY", "")
    if not key:
        pytest.skip("YOUTUBE_API_KEY is not set")
    return key


@pytest.fixture
def youtube_provider(youtube_api_key: str) -> YoutubeDurationProvider:
    """Provide a provider talking to the real YouTube Data API."""
    return YoutubeDurationProvider(api_key=youtube_api_key, timeout=15.0)


@pytest_asyncio.fixture
async def db_core(tmp_path: Path) -> AsyncGenerator[SqlalchemyCore]:
    """Provide a SqlalchemyCore on a database migrated with Alembic."""
    db_path = tmp_path / "couchtube.db"
    run_migrations(db_path)
    core = SqlalchemyCore(db_path)
    yield core
    await core.close()


@pytest.fixture
def channel_db(db_core: SqlalchemyCore) -> ChannelDatabase:
    """Provide a ChannelDatabase instance."""
    return ChannelDatabase(db_core)


@pytest.fixture
def video_db(db_core: SqlalchemyCore) -> VideoDatabase:
    """Provide a VideoDatabase instance."""
    return VideoDatabase(db_core)
