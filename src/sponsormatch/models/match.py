# src/sponsormatch/models/match.py
"""Mutual-consent pairing between one sponsor and one athlete."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from sponsormatch.db.session import Base
from sponsormatch.db.time import utcnow

MATCH_STATUS_ACTIVE = "active"


def pair_key(first_id: str, second_id: str) -> str:
    """Return the order-independent key of a participant pair."""
    return "_".join(sorted((first_id, second_id)))


class Match(Base):
    """Pairing that enables a conversation.

    At most one active match exists per unordered participant pair; the
    partial unique index on `pair_key` enforces it at write time.
    """

    __tablename__ = "sponsor_match"
    __table_args__ = (
        Index(
            "uq_match_active_pair",
            "pair_key",
            unique=True,
            sqlite_where=text("status = 'active'"),
            postgresql_where=text("status = 'active'"),
        ),
        Index("ix_match_sponsor_id", "sponsor_id"),
        Index("ix_match_athlete_id", "athlete_id"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=lambda: uuid.uuid4().hex)
    sponsor_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("profile.user_id"),
        nullable=False,
    )
    athlete_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("profile.user_id"),
        nullable=False,
    )
    pair_key: Mapped[str] = mapped_column(String(129), nullable=False)

    # Names captured when the match was created; later renames are not applied.
    sponsor_name: Mapped[str] = mapped_column(Text, nullable=False)
    athlete_name: Mapped[str] = mapped_column(Text, nullable=False)

    status: Mapped[str] = mapped_column(String(16), nullable=False, default=MATCH_STATUS_ACTIVE)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    @property
    def participants(self) -> list[str]:
        """Return `[sponsor_id, athlete_id]`."""
        return [self.sponsor_id, self.athlete_id]

    def other_participant(self, user_id: str) -> str:
        """Return the participant that is not `user_id`."""
        return self.athlete_id if user_id == self.sponsor_id else self.sponsor_id

    def fallback_name_for(self, user_id: str) -> str:
        """Return the stored name of the participant opposite `user_id`."""
        return self.athlete_name if user_id == self.sponsor_id else self.sponsor_name
