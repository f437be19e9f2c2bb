# src/sponsormatch/api/v1/endpoints/feed.py
"""Discovery feed endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from sponsormatch.api.v1.dependencies import CurrentUserDep, SessionDep
from sponsormatch.models import Profile
from sponsormatch.schemas.profile import ProfileResponse
from sponsormatch.services.feed import list_feed

router = APIRouter(prefix="/feed", tags=["feed"])


@router.get("", response_model=list[ProfileResponse])
async def get_feed(current_user: CurrentUserDep, db: SessionDep) -> list[Profile]:
    """Return the profiles the caller has not swiped on or matched with yet."""
    return list_feed(db, current_user)
