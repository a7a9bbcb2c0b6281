"""Initial schema for Seerr

Revision ID: 20261019_000000
Revises: None
Create Date: 2026-10-19 00:00:00.000000

Creates the users, media, media_requests, routing_rules, override_rules and
blocklist tables.

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261019_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables."""

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("username", sa.String(255), nullable=True),
        sa.Column("plex_username", sa.String(255), nullable=True),
        sa.Column("jellyfin_username", sa.String(255), nullable=True),
        sa.Column("user_type", sa.Integer(), nullable=False),
        sa.Column("permissions", sa.Integer(), nullable=False),
        sa.Column("avatar", sa.String(512), nullable=False),
        sa.Column("max_movie_rating", sa.String(16), nullable=True),
        sa.Column("max_tv_rating", sa.String(16), nullable=True),
        sa.Column("movie_quota_limit", sa.Integer(), nullable=True),
        sa.Column("movie_quota_days", sa.Integer(), nullable=True),
        sa.Column("tv_quota_limit", sa.Integer(), nullable=True),
        sa.Column("tv_quota_days", sa.Integer(), nullable=True),
        sa.Column("combined_quota_limit", sa.Integer(), nullable=True),
        sa.Column("combined_quota_days", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "media",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("media_type", sa.String(16), nullable=False),
        sa.Column("tmdb_id", sa.Integer(), nullable=True),
        sa.Column("tvdb_id", sa.Integer(), nullable=True),
        sa.Column("imdb_id", sa.String(32), nullable=True),
        sa.Column("hc_id", sa.Integer(), nullable=True),
        sa.Column("status", sa.Integer(), nullable=False),
        sa.Column("status_4k", sa.Integer(), nullable=False),
        sa.Column("service_id", sa.Integer(), nullable=True),
        sa.Column("service_id_4k", sa.Integer(), nullable=True),
        sa.Column("external_service_id", sa.Integer(), nullable=True),
        sa.Column("external_service_id_4k", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tmdb_id", "media_type", name="uq_media_tmdb_id_media_type"),
    )
    op.create_index("ix_media_tmdb_id", "media", ["tmdb_id"])
    op.create_index("ix_media_tvdb_id", "media", ["tvdb_id"], unique=True)
    op.create_index("ix_media_imdb_id", "media", ["imdb_id"])
    op.create_index("ix_media_hc_id", "media", ["hc_id"])

    op.create_table(
        "media_requests",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("status", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(16), nullable=False),
        sa.Column("media_id", sa.Integer(), nullable=False),
        sa.Column("requested_by_id", sa.Integer(), nullable=False),
        sa.Column("modified_by_id", sa.Integer(), nullable=True),
        sa.Column("is_4k", sa.Boolean(), nullable=False),
        sa.Column("is_auto_request", sa.Boolean(), nullable=False),
        sa.Column("server_id", sa.Integer(), nullable=True),
        sa.Column("profile_id", sa.Integer(), nullable=True),
        sa.Column("root_folder", sa.String(512), nullable=True),
        sa.Column("language_profile_id", sa.Integer(), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=True),
        sa.Column("seasons", sa.JSON(), nullable=True),
        sa.Column("decline_reason", sa.String(1024), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["media_id"], ["media.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["requested_by_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["modified_by_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_media_requests_status", "media_requests", ["status"])
    op.create_index("ix_media_requests_media_id", "media_requests", ["media_id"])
    op.create_index("ix_media_requests_requested_by_id", "media_requests", ["requested_by_id"])
    op.create_index("ix_media_requests_created_at", "media_requests", ["created_at"])

    op.create_table(
        "routing_rules",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("service_type", sa.String(16), nullable=False),
        sa.Column("is_4k", sa.Boolean(), nullable=False),
        sa.Column("priority", sa.Integer(), nullable=False),
        sa.Column("users", sa.String(), nullable=True),
        sa.Column("genres", sa.String(), nullable=True),
        sa.Column("languages", sa.String(), nullable=True),
        sa.Column("keywords", sa.String(), nullable=True),
        sa.Column("target_service_id", sa.Integer(), nullable=False),
        sa.Column("active_profile_id", sa.Integer(), nullable=True),
        sa.Column("root_folder", sa.String(512), nullable=True),
        sa.Column("series_type", sa.String(16), nullable=True),
        sa.Column("tags", sa.String(), nullable=True),
        sa.Column("minimum_availability", sa.String(32), nullable=True),
        sa.Column("is_fallback", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "override_rules",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("radarr_service_id", sa.Integer(), nullable=True),
        sa.Column("sonarr_service_id", sa.Integer(), nullable=True),
        sa.Column("users", sa.String(), nullable=True),
        sa.Column("genre", sa.String(), nullable=True),
        sa.Column("language", sa.String(), nullable=True),
        sa.Column("keywords", sa.String(), nullable=True),
        sa.Column("profile_id", sa.Integer(), nullable=True),
        sa.Column("root_folder", sa.String(512), nullable=True),
        sa.Column("tags", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "blocklist",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("media_type", sa.String(16), nullable=False),
        sa.Column("title", sa.String(512), nullable=True),
        sa.Column("tmdb_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("media_id", sa.Integer(), nullable=True),
        sa.Column("blocklisted_tags", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["media_id"], ["media.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tmdb_id", "media_type", name="uq_blocklist_tmdb_id_media_type"),
    )
    op.create_index("ix_blocklist_tmdb_id", "blocklist", ["tmdb_id"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("blocklist")
    op.drop_table("override_rules")
    op.drop_table("routing_rules")
    op.drop_index("ix_media_requests_created_at", table_name="media_requests")
    op.drop_index("ix_media_requests_requested_by_id", table_name="media_requests")
    op.drop_index("ix_media_requests_media_id", table_name="media_requests")
    op.drop_index("ix_media_requests_status", table_name="media_requests")
    op.drop_table("media_requests")
    op.drop_table("media")
    op.drop_table("users")
