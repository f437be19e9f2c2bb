# src/sponsormatch/models/user.py
"""SQLAlchemy model for authenticated accounts."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from sponsormatch.db.session import Base
from sponsormatch.db.time import utcnow


def new_user_id() -> str:
    """Return a fresh opaque user identifier."""
    return uuid.uuid4().hex


class UserAccount(Base):
    """Login identity carrying the user-type claim.

    The `user_id` is shared with the profile row owned by this account.
    """

    __tablename__ = "user_account"
    __table_args__ = (
        CheckConstraint("user_type IN ('athlete', 'sponsor')", name="ck_user_account_type"),
    )

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_user_id)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    user_type: Mapped[str] = mapped_column(String(16), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
