"""Channel-video association table mapped with SQLModel."""

from sqlalchemy import Index
from sqlmodel import Field, SQLModel


class ChannelVideo(SQLModel, table=True):
    """ORM model linking a channel to one of its videos.

    The (channel_id, video_id) pair is unique. Deleting either parent row
    deletes the link.

    Attributes:
        channel_id: The channel's surrogate key.
        video_id: The video identifier.
    """

    __tablename__ = "channel_videos"  # type: ignore[assignment]
    __table_args__ = (
        Index("idx_videos_channel_id", "channel_id", "video_id"),
    )

    channel_id: int = Field(
        foreign_key="channels.id", primary_key=True, ondelete="CASCADE"
    )
    video_id: str = Field(
        foreign_key="videos.id", primary_key=True, ondelete="CASCADE"
    )
