# src/sponsormatch/models/message.py
"""Models describing chat messages inside a match."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sponsormatch.db.session import Base
from sponsormatch.db.time import utcnow


class Message(Base):
    """Immutable chat line owned by exactly one match.

    Messages of a match are totally ordered by `(created_at, id)`.
    """

    __tablename__ = "chat_message"
    __table_args__ = (Index("ix_chat_message_match_created", "match_id", "created_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    match_id: Mapped[str] = mapped_column(
        String(32),
        ForeignKey("sponsor_match.id", ondelete="CASCADE"),
        nullable=False,
    )
    sender_id: Mapped[str] = mapped_column(String(64), nullable=False)
    # Denormalised at write time.
    sender_name: Mapped[str] = mapped_column(Text, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
