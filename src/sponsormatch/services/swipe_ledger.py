"""Swipe Ledger: records like and pass decisions on profiles."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sponsormatch.core.errors import NotFoundError, ValidationError
from sponsormatch.models import SWIPE_LIKE, SWIPE_PASS, Profile, Swipe

__all__ = ["apply_swipe_action", "likes_of", "passes_of", "swiped_ids"]

logger = logging.getLogger(__name__)

SWIPE_ACTIONS = (SWIPE_LIKE, SWIPE_PASS)


def apply_swipe_action(db: Session, profile_id: str, action: str, counterpart_id: str) -> bool:
    """Record on `profile_id` its owner's decision about `counterpart_id`.

    The profile of the swiping user carries the decision: after a sponsor S
    likes athlete A, ``A`` is in ``S.likes`` and ``A.likes`` is untouched.
    Repeating a decision is a no-op. A different decision about the same
    counterpart replaces the previous one, so `likes` and `passes` stay
    disjoint.

    Returns:
        True if the ledger changed, False if the decision was already recorded.

    Raises:
        ValidationError: For unknown actions or a swipe on one's own profile.
        NotFoundError: If either profile does not exist.
    """
    if action not in SWIPE_ACTIONS:
        raise ValidationError(f"Unknown swipe action: {action!r}")
    if profile_id == counterpart_id:
        raise ValidationError("Cannot swipe on your own profile")

    if db.get(Profile, profile_id) is None:
        raise NotFoundError(f"Profile not found with ID: {profile_id}")
    if db.get(Profile, counterpart_id) is None:
        raise NotFoundError(f"Profile not found with ID: {counterpart_id}")

    swipe = db.get(Swipe, (profile_id, counterpart_id))
    if swipe is not None and swipe.action == action:
        return False

    if swipe is None:
        db.add(Swipe(profile_user_id=profile_id, counterpart_user_id=counterpart_id, action=action))
        try:
            db.commit()
        except IntegrityError:
            # A concurrent request recorded a decision on the same pair first.
            db.rollback()
            stored = db.get(Swipe, (profile_id, counterpart_id))
            if stored is None:
                raise
            logger.warning("Concurrent swipe from %s on %s", profile_id, counterpart_id)
            if stored.action == action:
                return False
            stored.action = action
            db.commit()
    else:
        logger.info(
            "Profile %s changed decision on %s from %s to %s",
            profile_id,
            counterpart_id,
            swipe.action,
            action,
        )
        swipe.action = action
        db.commit()
    logger.debug("Recorded %s from %s on %s", action, profile_id, counterpart_id)
    return True


def _ids_with_action(db: Session, profile_id: str, action: str | None) -> set[str]:
    stmt = select(Swipe.counterpart_user_id).where(Swipe.profile_user_id == profile_id)
    if action is not None:
        stmt = stmt.where(Swipe.action == action)
    return set(db.scalars(stmt))


def likes_of(db: Session, profile_id: str) -> set[str]:
    """Return the ids liked by the owner of `profile_id`."""
    return _ids_with_action(db, profile_id, SWIPE_LIKE)


def passes_of(db: Session, profile_id: str) -> set[str]:
    """Return the ids passed on by the owner of `profile_id`."""
    return _ids_with_action(db, profile_id, SWIPE_PASS)


def swiped_ids(db: Session, profile_id: str) -> set[str]:
    """Return every id the owner of `profile_id` has decided on."""
    return _ids_with_action(db, profile_id, None)
