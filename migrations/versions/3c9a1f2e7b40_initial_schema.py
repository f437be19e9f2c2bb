"""initial schema

Revision ID: 3c9a1f2e7b40
Revises:
Create Date: 2026-10-19 10:12:41.503218

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c9a1f2e7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create accounts, profiles, swipes, matches, messages and offers."""
    op.create_table(
        "user_account",
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("user_type", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("user_type IN ('athlete', 'sponsor')", name="ck_user_account_type"),
        sa.PrimaryKeyConstraint("user_id"),
        sa.UniqueConstraint("email"),
    )
    op.create_table(
        "profile",
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("variant", sa.String(length=16), nullable=False),
        sa.Column("display_name", sa.Text(), nullable=False),
        sa.Column("category", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=False),
        sa.Column("preferred_colleges", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("college", sa.Text(), nullable=True),
        sa.Column("position", sa.Text(), nullable=True),
        sa.Column("graduation_year", sa.Integer(), nullable=True),
        sa.Column("height", sa.Text(), nullable=True),
        sa.Column("weight", sa.Text(), nullable=True),
        sa.Column("gpa", sa.Float(), nullable=True),
        sa.Column("achievements", sa.Text(), nullable=True),
        sa.Column("amount_requested", sa.Integer(), nullable=True),
        sa.Column("website", sa.Text(), nullable=True),
        sa.Column("min_budget", sa.Integer(), nullable=True),
        sa.Column("max_budget", sa.Integer(), nullable=True),
        sa.Column("preferred_sports", sa.JSON(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["user_account.user_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id"),
    )
    op.create_index("ix_profile_variant", "profile", ["variant"])

    op.create_table(
        "swipe",
        sa.Column("profile_user_id", sa.String(length=64), nullable=False),
        sa.Column("counterpart_user_id", sa.String(length=64), nullable=False),
        sa.Column("action", sa.String(length=8), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("action IN ('like', 'pass')", name="ck_swipe_action"),
        sa.ForeignKeyConstraint(["profile_user_id"], ["profile.user_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["counterpart_user_id"], ["profile.user_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("profile_user_id", "counterpart_user_id"),
    )
    op.create_index("ix_swipe_counterpart", "swipe", ["counterpart_user_id"])

    op.create_table(
        "sponsor_match",
        sa.Column("id", sa.String(length=32), nullable=False),
        sa.Column("sponsor_id", sa.String(length=64), nullable=False),
        sa.Column("athlete_id", sa.String(length=64), nullable=False),
        sa.Column("pair_key", sa.String(length=129), nullable=False),
        sa.Column("sponsor_name", sa.Text(), nullable=False),
        sa.Column("athlete_name", sa.Text(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["sponsor_id"], ["profile.user_id"]),
        sa.ForeignKeyConstraint(["athlete_id"], ["profile.user_id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "uq_match_active_pair",
        "sponsor_match",
        ["pair_key"],
        unique=True,
        sqlite_where=sa.text("status = 'active'"),
        postgresql_where=sa.text("status = 'active'"),
    )
    op.create_index("ix_match_sponsor_id", "sponsor_match", ["sponsor_id"])
    op.create_index("ix_match_athlete_id", "sponsor_match", ["athlete_id"])

    op.create_table(
        "chat_message",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("match_id", sa.String(length=32), nullable=False),
        sa.Column("sender_id", sa.String(length=64), nullable=False),
        sa.Column("sender_name", sa.Text(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["match_id"], ["sponsor_match.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_chat_message_match_created", "chat_message", ["match_id", "created_at"])

    op.create_table(
        "sponsorship_offer",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("athlete_id", sa.String(length=64), nullable=False),
        sa.Column("sponsor_id", sa.String(length=64), nullable=False),
        sa.Column("company_name", sa.Text(), nullable=False),
        sa.Column("offer_amount", sa.Integer(), nullable=False),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint("offer_amount > 0", name="ck_offer_amount_positive"),
        sa.ForeignKeyConstraint(["athlete_id"], ["profile.user_id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["sponsor_id"], ["profile.user_id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_sponsorship_offer_athlete_id", "sponsorship_offer", ["athlete_id"]
    )


def downgrade() -> None:
    """Drop every table created by this revision."""
    op.drop_index("ix_sponsorship_offer_athlete_id", table_name="sponsorship_offer")
    op.drop_table("sponsorship_offer")
    op.drop_index("ix_chat_message_match_created", table_name="chat_message")
    op.drop_table("chat_message")
    op.drop_index("ix_match_athlete_id", table_name="sponsor_match")
    op.drop_index("ix_match_sponsor_id", table_name="sponsor_match")
    op.drop_index("uq_match_active_pair", table_name="sponsor_match")
    op.drop_table("sponsor_match")
    op.drop_index("ix_swipe_counterpart", table_name="swipe")
    op.drop_table("swipe")
    op.drop_index("ix_profile_variant", table_name="profile")
    op.drop_table("profile")
    op.drop_table("user_account")
