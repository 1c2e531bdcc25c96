"""Alembic environment script for the Couchtube database.

The database URL is read from the DATABASE_URL environment variable, falling
back to ``sqlalchemy.url`` in alembic.ini. Both synchronous (``sqlite://``)
and asynchronous (``sqlite+aiosqlite://``) URLs are supported. SQLModel
metadata is used as the autogenerate target.
"""

import asyncio
from logging.config import fileConfig
import os

from sqlalchemy import engine_from_config, pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config
from sqlmodel import SQLModel

from alembic import context

# Register the models with SQLModel's metadata
from couchtube.db import types as db_types

_ = db_types

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = SQLModel.metadata


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode, emitting SQL to the script output."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_for_context(connection: Connection) -> None:
    """Configure the migration context on a connection and run migrations."""
    context.configure(
        connection=connection,
        target_metadata=target_metadata,
        render_as_batch=True,  # SQLite cannot ALTER most constraints in place
    )
    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations(connectable_config: dict[str, str]) -> None:
    """Run migrations through an async engine."""
    async_engine = async_engine_from_config(
        connectable_config,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    async with async_engine.connect() as connection:
        await connection.run_sync(run_migrations_for_context)
    await async_engine.dispose()


def run_migrations_online() -> None:
    """Run migrations against a live database, sync or async by URL."""
    connectable_config = config.get_section(config.config_ini_section)
    if connectable_config is None:
        raise ValueError(
            f"Alembic .ini file is missing section: {config.config_ini_section}"
        )

    url = os.getenv("DATABASE_URL", config.get_main_option("sqlalchemy.url"))
    if not url:
        raise ValueError(
            "Database URL is not configured. Set sqlalchemy.url in alembic.ini or DATABASE_URL env var."
        )
    connectable_config["sqlalchemy.url"] = url

    if "aiosqlite" in url:
        asyncio.run(run_async_migrations(connectable_config))
    else:
        engine = engine_from_config(
            connectable_config, prefix="sqlalchemy.", poolclass=pool.NullPool
        )
        with engine.connect() as connection:
            run_migrations_for_context(connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
