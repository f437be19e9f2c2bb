# src/sponsormatch/models/profile.py
"""Athlete and sponsor profiles stored as one tagged table."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sponsormatch.db.session import Base
from sponsormatch.db.time import utcnow

if TYPE_CHECKING:
    from .swipe import Swipe


class Profile(Base):
    """Public matching record of one user.

    The `variant` column is the discriminator: loading a row yields either an
    `Athlete` or a `Sponsor` instance, so the role of a user is resolved by a
    single lookup.
    """

    __tablename__ = "profile"

    user_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("user_account.user_id", ondelete="CASCADE"),
        primary_key=True,
    )
    variant: Mapped[str] = mapped_column(String(16), nullable=False, index=True)

    # Full name for athletes, company name for sponsors.
    display_name: Mapped[str] = mapped_column(Text, nullable=False)
    # Sport for athletes, industry for sponsors.
    category: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str] = mapped_column(Text, nullable=False)
    preferred_colleges: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )

    swipes: Mapped[list[Swipe]] = relationship(
        "Swipe",
        foreign_keys="Swipe.profile_user_id",
        back_populates="profile",
        cascade="all, delete-orphan",
    )

    __mapper_args__ = {
        "polymorphic_on": "variant",
        "polymorphic_abstract": True,
    }

    @property
    def likes(self) -> set[str]:
        """Return the ids this profile's owner liked."""
        return {s.counterpart_user_id for s in self.swipes if s.action == "like"}

    @property
    def passes(self) -> set[str]:
        """Return the ids this profile's owner passed on."""
        return {s.counterpart_user_id for s in self.swipes if s.action == "pass"}


class Athlete(Profile):
    """Athlete seeking sponsorship."""

    college: Mapped[str | None] = mapped_column(Text, nullable=True)
    position: Mapped[str | None] = mapped_column(Text, nullable=True)
    graduation_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    height: Mapped[str | None] = mapped_column(Text, nullable=True)
    weight: Mapped[str | None] = mapped_column(Text, nullable=True)
    gpa: Mapped[float | None] = mapped_column(Float, nullable=True)
    achievements: Mapped[str | None] = mapped_column(Text, nullable=True)
    amount_requested: Mapped[int | None] = mapped_column(Integer, nullable=True)

    __mapper_args__ = {"polymorphic_identity": "athlete"}


class Sponsor(Profile):
    """Company offering sponsorship."""

    website: Mapped[str | None] = mapped_column(Text, nullable=True)
    min_budget: Mapped[int | None] = mapped_column(Integer, nullable=True)
    max_budget: Mapped[int | None] = mapped_column(Integer, nullable=True)
    preferred_sports: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)

    __mapper_args__ = {"polymorphic_identity": "sponsor"}
