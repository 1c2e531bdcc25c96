"""Shared database fixtures for the couchtube tests."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio

from couchtube.db import ChannelDatabase, SqlalchemyCore, VideoDatabase, ensure_schema


@pytest_asyncio.fixture
async def db_core(tmp_path: Path) -> AsyncGenerator[SqlalchemyCore]:
    """Provide a SqlalchemyCore on a fresh database file with the schema created."""
    core = SqlalchemyCore(tmp_path / "couchtube.db")
    await ensure_schema(core)
    yield core
    await core.close()


@pytest_asyncio.fixture
async def channel_db(db_core: SqlalchemyCore) -> ChannelDatabase:
    """Provide a ChannelDatabase bound to the test database."""
    return ChannelDatabase(db_core)


@pytest_asyncio.fixture
async def video_db(db_core: SqlalchemyCore) -> VideoDatabase:
    """Provide a VideoDatabase bound to the test database."""
    return VideoDatabase(db_core)
