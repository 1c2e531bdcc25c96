"""create channels, videos and channel_videos tables.

Revision ID: 5c1d2e7a9b30
Revises:
Create Date: 2026-10-17 09:12:44.118302
"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c1d2e7a9b30"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "channels",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("name", sa.String(), nullable=False, unique=True),
        sqlite_autoincrement=True,
    )
    op.create_table(
        "videos",
        sa.Column("id", sa.String(), primary_key=True, nullable=False),
        sa.Column("section_start", sa.Integer(), nullable=False),
        sa.Column("section_end", sa.Integer(), nullable=False),
        sa.CheckConstraint("section_end > section_start", name="ck_videos_section"),
        sa.CheckConstraint("section_start >= 0", name="ck_videos_section_start"),
    )
    op.create_table(
        "channel_videos",
        sa.Column(
            "channel_id",
            sa.Integer(),
            sa.ForeignKey("channels.id", ondelete="CASCADE"),
            primary_key=True,
            nullable=False,
        ),
        sa.Column(
            "video_id",
            sa.String(),
            sa.ForeignKey("videos.id", ondelete="CASCADE"),
            primary_key=True,
            nullable=False,
        ),
    )
    op.create_index(
        "idx_videos_channel_id", "channel_videos", ["channel_id", "video_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_videos_channel_id", table_name="channel_videos")
    op.drop_table("channel_videos")
    op.drop_table("videos")
    op.drop_table("channels")
