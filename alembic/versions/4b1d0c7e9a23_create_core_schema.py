"""Create users, tracks, environments and section config

Revision ID: 4b1d0c7e9a23
Revises:
Create Date: 2026-10-19 10:12:44.318052

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "4b1d0c7e9a23"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)

    op.create_table(
        "user_tracks",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("filename", sa.String(length=255), nullable=False),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=False),
        sa.Column("file_size", sa.BigInteger(), nullable=False),
        sa.Column("mime_type", sa.String(length=100), nullable=False),
        *_timestamps(),
        sa.CheckConstraint("type IN ('music', 'ambient', 'effect')", name="ck_user_tracks_type"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_user_tracks_user_id"), "user_tracks", ["user_id"], unique=False)
    op.create_index(op.f("ix_user_tracks_type"), "user_tracks", ["type"], unique=False)

    op.create_table(
        "user_environments",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("combat_track_id", sa.String(length=36), nullable=True),
        sa.Column("exploration_track_id", sa.String(length=36), nullable=True),
        sa.Column("tension_track_id", sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["combat_track_id"], ["user_tracks.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(
            ["exploration_track_id"], ["user_tracks.id"], ondelete="SET NULL"
        ),
        sa.ForeignKeyConstraint(["tension_track_id"], ["user_tracks.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_user_environments_user_id"), "user_environments", ["user_id"], unique=False
    )

    op.create_table(
        "user_section_config",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("section_type", sa.String(length=20), nullable=False),
        sa.Column("sound_id", sa.String(length=255), nullable=False),
        sa.Column("sound_source", sa.String(length=20), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "section_type IN ('ambient', 'effect')", name="ck_user_section_config_section_type"
        ),
        sa.CheckConstraint(
            "sound_source IN ('builtin', 'uploaded')", name="ck_user_section_config_sound_source"
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "section_type", "display_order", name="uq_user_section_config_order"
        ),
    )
    op.create_index(
        op.f("ix_user_section_config_user_id"), "user_section_config", ["user_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_user_section_config_user_id"), table_name="user_section_config")
    op.drop_table("user_section_config")
    op.drop_index(op.f("ix_user_environments_user_id"), table_name="user_environments")
    op.drop_table("user_environments")
    op.drop_index(op.f("ix_user_tracks_type"), table_name="user_tracks")
    op.drop_index(op.f("ix_user_tracks_user_id"), table_name="user_tracks")
    op.drop_table("user_tracks")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
