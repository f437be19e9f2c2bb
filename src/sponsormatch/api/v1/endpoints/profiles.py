# src/sponsormatch/api/v1/endpoints/profiles.py
"""Profile endpoints: completion, lookup and listing."""

from __future__ import annotations

import asyncio
import base64
import binascii
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, status

from sponsormatch.api.v1.dependencies import CurrentUserDep, SessionDep, StorageDep, http_error
from sponsormatch.core.errors import SponsorMatchError
from sponsormatch.models import Profile
from sponsormatch.schemas.profile import OwnProfileResponse, ProfileResponse, ProfileUpsert
from sponsormatch.services import profile_store

router = APIRouter(prefix="/profiles", tags=["profiles"])


def _own_profile(profile: Profile) -> OwnProfileResponse:
    return OwnProfileResponse.model_validate(profile, from_attributes=True)


@router.put("/me", response_model=OwnProfileResponse)
async def upsert_my_profile(
    payload: ProfileUpsert,
    current_user: CurrentUserDep,
    db: SessionDep,
    storage: StorageDep,
) -> OwnProfileResponse:
    """Create or fully replace the caller's profile, uploading its image."""
    image: bytes | None = None
    if payload.image_base64:
        try:
            image = base64.b64decode(payload.image_base64, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Image must be valid base64",
            ) from exc

    try:
        # Uploads may block on network I/O and retry backoff.
        profile = await asyncio.to_thread(
            profile_store.create_or_replace_profile,
            db,
            storage,
            current_user,
            payload.variant,
            payload.profile_fields(),
            image,
            content_type=payload.image_content_type,
        )
    except SponsorMatchError as exc:
        raise http_error(exc) from exc
    return _own_profile(profile)


@router.get("/me", response_model=OwnProfileResponse)
async def get_my_profile(current_user: CurrentUserDep, db: SessionDep) -> OwnProfileResponse:
    """Return the caller's profile with their likes and passes."""
    try:
        profile = profile_store.get_profile(db, current_user.user_id)
    except SponsorMatchError as exc:
        raise http_error(exc) from exc
    return _own_profile(profile)


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(user_id: str, current_user: CurrentUserDep, db: SessionDep) -> Profile:
    """Return another user's public profile."""
    try:
        return profile_store.get_profile(db, user_id)
    except SponsorMatchError as exc:
        raise http_error(exc) from exc


@router.get("", response_model=list[ProfileResponse])
async def list_profiles(
    current_user: CurrentUserDep,
    db: SessionDep,
    variant: Literal["athlete", "sponsor"] = Query(...),
) -> list[Profile]:
    """List every profile of one variant."""
    return list(profile_store.list_profiles(db, variant))
