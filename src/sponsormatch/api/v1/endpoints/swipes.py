# src/sponsormatch/api/v1/endpoints/swipes.py
"""Swipe endpoint: records a decision and resolves matches on likes."""

from __future__ import annotations

from fastapi import APIRouter, status

from sponsormatch.api.v1.dependencies import CurrentUserDep, SessionDep, http_error
from sponsormatch.core.errors import SponsorMatchError
from sponsormatch.schemas.match import MatchSummary, SwipeCreate, SwipeResponse
from sponsormatch.services.match_resolver import resolve_like
from sponsormatch.services.swipe_ledger import apply_swipe_action

router = APIRouter(prefix="/swipes", tags=["swipes"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=SwipeResponse)
async def swipe(payload: SwipeCreate, current_user: CurrentUserDep, db: SessionDep) -> SwipeResponse:
    """Like or pass on a profile.

    A like is followed by a match check; the response tells the client
    whether the pair is now matched.
    """
    try:
        apply_swipe_action(db, current_user.user_id, payload.action, payload.target_user_id)
        if payload.action != "like":
            return SwipeResponse(action=payload.action, outcome="recorded", is_match=False)
        result = resolve_like(db, current_user.user_id, payload.target_user_id)
    except SponsorMatchError as exc:
        raise http_error(exc) from exc

    return SwipeResponse(
        action=payload.action,
        outcome=result.outcome.value,  # type: ignore[arg-type]
        is_match=result.is_match,
        match=MatchSummary.model_validate(result.match) if result.match else None,
    )
