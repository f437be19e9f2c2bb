"""Discovery feed composition."""
from __future__ import annotations

from sqlalchemy.orm import Session

from sponsormatch.core.context import UserContext
from sponsormatch.models import Profile
from sponsormatch.services.match_resolver import list_matches
from sponsormatch.services.profile_store import list_profiles
from sponsormatch.services.swipe_ledger import swiped_ids

__all__ = ["list_feed"]


def list_feed(db: Session, context: UserContext) -> list[Profile]:
    """Return the profiles the caller can still swipe on.

    Candidates are all profiles of the opposite variant minus the caller,
    counterparts the caller already decided on, and counterparts with an
    active match.
    """
    excluded = {context.user_id}
    excluded |= swiped_ids(db, context.user_id)
    excluded |= {match.other_participant(context.user_id) for match in list_matches(db, context.user_id)}
    return [
        profile
        for profile in list_profiles(db, context.counterpart_type)
        if profile.user_id not in excluded
    ]
