"""Core async database components using SQLAlchemy and SQLModel."""

from collections.abc import AsyncGenerator, Sequence
from contextlib import asynccontextmanager
import logging
from pathlib import Path
import sqlite3
from typing import Any

from sqlalchemy import bindparam, event, text
from sqlalchemy.engine import CursorResult, Engine, Result
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import ConnectionPoolEntry

from ..exceptions import DatabaseOperationError
from .decorators import handle_db_errors

logger = logging.getLogger(__name__)


class SqlalchemyCore:
    """Core wrapper for SQLAlchemy async operations on the SQLite file.

    Attributes:
        db_path: Path to the SQLite database file.
        engine: The async engine bound to the file.
    """

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        db_url = f"sqlite+aiosqlite:///{db_path.resolve()}"
        self.engine: AsyncEngine = create_async_engine(
            db_url,
            echo=logger.isEnabledFor(logging.DEBUG),
            pool_size=1,  # single writer
            connect_args={
                "check_same_thread": False,
                "timeout": 60.0,
            },
        )
        self.async_session_maker = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession]:
        """Provide a session that is closed after use.

        Yields:
            An AsyncSession; callers commit explicitly.
        """
        async with self.async_session_maker() as session:
            yield session

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession]:
        """Provide a session wrapped in a single transaction.

        The transaction commits when the block exits normally and rolls back
        if the block raises; the exception is re-raised unchanged.

        Yields:
            An AsyncSession with an open transaction.
        """
        async with self.async_session_maker() as session, session.begin():
            yield session

    async def close(self) -> None:
        """Close the database engine and all its connections."""
        await self.engine.dispose()

    @handle_db_errors("wipe tables")
    async def wipe_tables(self, table_names: Sequence[str]) -> None:
        """Delete every row of the given tables and reclaim the space.

        AUTOINCREMENT counters of the tables are reset, so the next inserted
        row gets id 1 again. The deletes run in one transaction; VACUUM then
        runs on an autocommit connection because SQLite refuses to vacuum
        inside a transaction.

        Args:
            table_names: Tables to empty, children before parents.

        Raises:
            DatabaseOperationError: If any statement fails.
        """
        log_params = {"tables": list(table_names)}
        logger.debug("Wiping tables.", extra=log_params)
        async with self.engine.begin() as conn:
            for name in table_names:
                await conn.execute(text(f'DELETE FROM "{name}"'))
            has_sequence = (
                await conn.execute(
                    text(
                        "SELECT 1 FROM sqlite_master "
                        "WHERE type = 'table' AND name = 'sqlite_sequence'"
                    )
                )
            ).first() is not None
            if has_sequence:
                await conn.execute(
                    text("DELETE FROM sqlite_sequence WHERE name IN :names").bindparams(
                        bindparam("names", expanding=True)
                    ),
                    {"names": list(table_names)},
                )

        async with self.engine.connect() as conn:
            autocommit_conn = await conn.execution_options(
                isolation_level="AUTOCOMMIT"
            )
            await autocommit_conn.execute(text("VACUUM"))
        logger.debug("Tables wiped and storage reclaimed.", extra=log_params)

    @staticmethod
    def as_cursor_result(result: Result[Any]) -> CursorResult[Any]:
        """Coerce a Result to a CursorResult.

        Args:
            result: Result object returned by ``AsyncSession.execute``.

        Returns:
            The result coerced to :class:`CursorResult` so row-level metadata is available.

        Raises:
            DatabaseOperationError: If the result is not backed by a cursor.
        """
        if isinstance(result, CursorResult):
            return result
        raise DatabaseOperationError(
            f"Expected cursor-backed SQLAlchemy result, got {type(result).__name__}.",
        )


@event.listens_for(Engine, "connect")
def _(
    dbapi_connection: sqlite3.Connection, _connection_record: ConnectionPoolEntry
) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode = WAL;")
    cursor.execute("PRAGMA synchronous = NORMAL;")
    cursor.execute("PRAGMA foreign_keys = ON;")
    cursor.close()
