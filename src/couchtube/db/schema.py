"""Schema creation for the channel, video and channel-video tables."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel

from ..exceptions import SchemaError
from .sqlalchemy_core import SqlalchemyCore
from .types import Channel, ChannelVideo, Video

logger = logging.getLogger(__name__)

# Children before parents, the order a wipe deletes in
CATALOG_TABLES: tuple[str, ...] = (
    ChannelVideo.__tablename__,
    Video.__tablename__,
    Channel.__tablename__,
)


async def ensure_schema(db_core: SqlalchemyCore) -> None:
    """Create the catalog tables and their index if they do not exist.

    Existing tables are left untouched, so this runs on every start.

    Args:
        db_core: The database to create the schema in.

    Raises:
        SchemaError: If a table or index cannot be created.
    """
    logger.debug("Ensuring database schema.", extra={"db_path": str(db_core.db_path)})
    tables = [
        SQLModel.metadata.tables[name] for name in reversed(CATALOG_TABLES)
    ]
    try:
        async with db_core.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all, tables=tables)
    except SQLAlchemyError as e:
        raise SchemaError("Failed to create database schema.") from e
    logger.info("Database schema ready.", extra={"tables": list(CATALOG_TABLES)})
