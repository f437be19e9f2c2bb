"""Match Resolver: turns reciprocal likes into exactly one match.

A like from A on B produces a match only when A and B hold opposite profile
variants and each one's `likes` contains the other. The check-then-create
sequence is not atomic across requests; the partial unique index on
`Match.pair_key` is the final arbiter, and a losing insert is reported as
``already_matched`` instead of producing a duplicate row.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sponsormatch.models import MATCH_STATUS_ACTIVE, Athlete, Match, Sponsor, pair_key
from sponsormatch.services.profile_store import get_profile
from sponsormatch.services.swipe_ledger import likes_of

__all__ = ["MatchOutcome", "MatchResult", "find_active_match", "list_matches", "resolve_like"]

logger = logging.getLogger(__name__)


class MatchOutcome(str, Enum):
    """Result of resolving one like."""

    CREATED = "created"
    ALREADY_MATCHED = "already_matched"
    NOT_MUTUAL = "not_mutual"
    INCOMPATIBLE = "incompatible"


@dataclass(frozen=True)
class MatchResult:
    """Outcome plus the match involved, when there is one."""

    outcome: MatchOutcome
    match: Match | None = None

    @property
    def is_match(self) -> bool:
        return self.outcome in (MatchOutcome.CREATED, MatchOutcome.ALREADY_MATCHED)


def find_active_match(db: Session, first_id: str, second_id: str) -> Match | None:
    """Return the active match of an unordered pair, if one exists."""
    return db.scalars(
        select(Match)
        .where(
            Match.pair_key == pair_key(first_id, second_id),
            Match.status == MATCH_STATUS_ACTIVE,
        )
        .order_by(Match.created_at.desc())
        .limit(1)
    ).first()


def list_matches(db: Session, user_id: str) -> Sequence[Match]:
    """Return every active match `user_id` participates in."""
    return db.scalars(
        select(Match).where(
            or_(Match.sponsor_id == user_id, Match.athlete_id == user_id),
            Match.status == MATCH_STATUS_ACTIVE,
        )
    ).all()


def _create_match(db: Session, sponsor: Sponsor, athlete: Athlete) -> MatchResult:
    match = Match(
        sponsor_id=sponsor.user_id,
        athlete_id=athlete.user_id,
        pair_key=pair_key(sponsor.user_id, athlete.user_id),
        sponsor_name=sponsor.display_name,
        athlete_name=athlete.display_name,
        status=MATCH_STATUS_ACTIVE,
    )
    db.add(match)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = find_active_match(db, sponsor.user_id, athlete.user_id)
        if existing is None:
            raise
        logger.warning(
            "Concurrent match creation for %s and %s; keeping %s",
            sponsor.user_id,
            athlete.user_id,
            existing.id,
        )
        return MatchResult(MatchOutcome.ALREADY_MATCHED, existing)

    db.refresh(match)
    logger.info("Created match %s between %s and %s", match.id, sponsor.user_id, athlete.user_id)
    return MatchResult(MatchOutcome.CREATED, match)


def resolve_like(db: Session, actor_id: str, target_id: str) -> MatchResult:
    """Decide whether the like from `actor_id` on `target_id` completes a match.

    Args:
        db: Database session.
        actor_id: User who just liked.
        target_id: User who was liked.

    Returns:
        The outcome and, for ``created``/``already_matched``, the match.

    Raises:
        NotFoundError: If either profile does not exist.
    """
    actor = get_profile(db, actor_id)
    target = get_profile(db, target_id)

    if isinstance(actor, Sponsor) and isinstance(target, Athlete):
        sponsor, athlete = actor, target
    elif isinstance(actor, Athlete) and isinstance(target, Sponsor):
        sponsor, athlete = target, actor
    else:
        logger.debug("Like between two %s profiles cannot match", actor.variant)
        return MatchResult(MatchOutcome.INCOMPATIBLE)

    existing = find_active_match(db, sponsor.user_id, athlete.user_id)
    if existing is not None:
        return MatchResult(MatchOutcome.ALREADY_MATCHED, existing)

    mutual = athlete.user_id in likes_of(db, sponsor.user_id) and sponsor.user_id in likes_of(
        db, athlete.user_id
    )
    if not mutual:
        return MatchResult(MatchOutcome.NOT_MUTUAL)

    return _create_match(db, sponsor, athlete)
