"""Video table mapped with SQLModel."""

from sqlalchemy import CheckConstraint, Column, Integer
from sqlmodel import Field, SQLModel


class Video(SQLModel, table=True):
    """ORM model representing a clip of a YouTube video.

    The first catalog entry for a given id wins; later entries with the same
    id reuse the stored row and their bounds are discarded.

    Attributes:
        id: The YouTube video identifier.
        section_start: Start of the clip in seconds.
        section_end: End of the clip in seconds, always after the start.
    """

    __tablename__ = "videos"  # type: ignore[assignment]
    __table_args__ = (
        CheckConstraint("section_end > section_start", name="ck_videos_section"),
        CheckConstraint("section_start >= 0", name="ck_videos_section_start"),
    )

    id: str = Field(primary_key=True)
    section_start: int = Field(sa_column=Column(Integer, nullable=False))
    section_end: int = Field(sa_column=Column(Integer, nullable=False))
