# src/sponsormatch/models/swipe.py
"""Ledger of like/pass decisions."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sponsormatch.db.session import Base
from sponsormatch.db.time import utcnow

if TYPE_CHECKING:
    from .profile import Profile

SWIPE_LIKE = "like"
SWIPE_PASS = "pass"


class Swipe(Base):
    """Decision recorded on the swiping user's profile about a counterpart.

    The composite primary key keeps one decision per ordered pair, so a
    counterpart id can sit in either `likes` or `passes` but never both.
    """

    __tablename__ = "swipe"
    __table_args__ = (
        CheckConstraint("action IN ('like', 'pass')", name="ck_swipe_action"),
        Index("ix_swipe_counterpart", "counterpart_user_id"),
    )

    profile_user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("profile.user_id", ondelete="CASCADE"),
        primary_key=True,
    )
    counterpart_user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("profile.user_id", ondelete="CASCADE"),
        primary_key=True,
    )
    action: Mapped[str] = mapped_column(String(8), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )

    profile: Mapped[Profile] = relationship(
        "Profile",
        foreign_keys=[profile_user_id],
        back_populates="swipes",
    )
