"""Channel table mapped with SQLModel."""

from sqlalchemy import Column, String
from sqlmodel import Field, SQLModel


class Channel(SQLModel, table=True):
    """ORM model representing a channel.

    Rows are created the first time a catalog references the channel name
    and are never updated afterwards.

    Attributes:
        id: Surrogate key, assigned by SQLite AUTOINCREMENT.
        name: Unique channel name.
    """

    __tablename__ = "channels"  # type: ignore[assignment]
    # AUTOINCREMENT keeps ids from being reused and registers the table in
    # sqlite_sequence, which a full scan resets.
    __table_args__ = {"sqlite_autoincrement": True}

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(sa_column=Column(String, nullable=False, unique=True))
