# src/sponsormatch/models/offer.py
"""Sponsorship offers submitted to athletes."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sponsormatch.db.session import Base
from sponsormatch.db.time import utcnow

OFFER_STATUS_PENDING = "pending"


class SponsorshipOffer(Base):
    """Monetary offer from a sponsor to an athlete."""

    __tablename__ = "sponsorship_offer"
    __table_args__ = (CheckConstraint("offer_amount > 0", name="ck_offer_amount_positive"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    athlete_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("profile.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sponsor_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("profile.user_id", ondelete="CASCADE"),
        nullable=False,
    )
    company_name: Mapped[str] = mapped_column(Text, nullable=False)
    offer_amount: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default=OFFER_STATUS_PENDING)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )
