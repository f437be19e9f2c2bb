# src/sponsormatch/api/v1/endpoints/offers.py
"""Sponsorship offer endpoints."""

from __future__ import annotations

from collections.abc import Sequence

from fastapi import APIRouter, status

from sponsormatch.api.v1.dependencies import CurrentUserDep, SessionDep, http_error
from sponsormatch.core.errors import SponsorMatchError
from sponsormatch.models import SponsorshipOffer
from sponsormatch.schemas.offer import OfferCreate, OfferResponse
from sponsormatch.services import offers

router = APIRouter(prefix="/athletes", tags=["offers"])


@router.post(
    "/{athlete_id}/offers",
    status_code=status.HTTP_201_CREATED,
    response_model=OfferResponse,
)
async def submit_offer(
    athlete_id: str,
    payload: OfferCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> SponsorshipOffer:
    """Submit a sponsorship offer to an athlete."""
    try:
        return offers.submit_offer(db, current_user, athlete_id, payload.offer_amount)
    except SponsorMatchError as exc:
        raise http_error(exc) from exc


@router.get("/{athlete_id}/offers", response_model=list[OfferResponse])
async def list_offers(
    athlete_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Sequence[SponsorshipOffer]:
    """List offers received by an athlete, newest first."""
    try:
        return offers.list_offers(db, athlete_id)
    except SponsorMatchError as exc:
        raise http_error(exc) from exc
