"""Conversation Index: the caller's matches with counterpart and last message."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sponsormatch.models import Match, Message
from sponsormatch.services.match_resolver import list_matches
from sponsormatch.services.profile_store import find_profile

__all__ = ["Counterpart", "ConversationView", "LastMessage", "list_conversations"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Counterpart:
    id: str
    name: str
    image_url: str | None


@dataclass(frozen=True)
class LastMessage:
    text: str
    sender_id: str
    created_at: datetime


@dataclass(frozen=True)
class ConversationView:
    """Derived projection of one match for one requesting user."""

    match_id: str
    pair_key: str
    other_user: Counterpart
    last_message: LastMessage | None
    created_at: datetime


def _resolve_counterpart(db: Session, match: Match, user_id: str) -> Counterpart:
    other_id = match.other_participant(user_id)
    try:
        profile = find_profile(db, other_id)
    except SQLAlchemyError as exc:
        logger.warning("Could not load profile %s for match %s: %s", other_id, match.id, exc)
        profile = None
    if profile is None:
        return Counterpart(id=other_id, name=match.fallback_name_for(user_id), image_url=None)
    return Counterpart(id=other_id, name=profile.display_name, image_url=profile.image_url)


def _last_message(db: Session, match_id: str) -> LastMessage | None:
    try:
        message = db.scalars(
            select(Message)
            .where(Message.match_id == match_id)
            .order_by(Message.created_at.desc(), Message.id.desc())
            .limit(1)
        ).first()
    except SQLAlchemyError as exc:
        logger.warning("Could not load last message for match %s: %s", match_id, exc)
        return None
    if message is None:
        return None
    return LastMessage(text=message.text, sender_id=message.sender_id, created_at=message.created_at)


def list_conversations(db: Session, user_id: str) -> list[ConversationView]:
    """Return one entry per counterpart, newest match first.

    Duplicate matches for the same pair collapse to the most recently created
    one. A counterpart whose profile cannot be loaded falls back to the name
    stored on the match; a last-message lookup failure yields ``None``.
    """
    newest: dict[str, Match] = {}
    for match in list_matches(db, user_id):
        kept = newest.get(match.pair_key)
        if kept is None or match.created_at > kept.created_at:
            newest[match.pair_key] = match

    views = [
        ConversationView(
            match_id=match.id,
            pair_key=match.pair_key,
            other_user=_resolve_counterpart(db, match, user_id),
            last_message=_last_message(db, match.id),
            created_at=match.created_at,
        )
        for match in newest.values()
    ]
    views.sort(key=lambda view: view.created_at, reverse=True)
    return views
