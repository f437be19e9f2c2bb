"""Sponsorship offers from sponsors to athletes."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from sponsormatch.core.context import UserContext
from sponsormatch.core.errors import NotFoundError, ValidationError
from sponsormatch.models import Athlete, Sponsor, SponsorshipOffer
from sponsormatch.models.offer import OFFER_STATUS_PENDING

__all__ = ["list_offers", "submit_offer"]

logger = logging.getLogger(__name__)


def submit_offer(
    db: Session,
    context: UserContext,
    athlete_id: str,
    offer_amount: int,
) -> SponsorshipOffer:
    """Record a pending offer from the calling sponsor to an athlete.

    Raises:
        ValidationError: If the caller is not a sponsor with a profile or the
            amount is not positive.
        NotFoundError: If the athlete does not exist.
    """
    if context.user_type != "sponsor":
        raise ValidationError("Only sponsors can submit offers")
    if offer_amount <= 0:
        raise ValidationError("Offer amount must be greater than 0")

    sponsor = db.get(Sponsor, context.user_id)
    if sponsor is None:
        raise ValidationError("Complete your sponsor profile before submitting offers")
    if db.get(Athlete, athlete_id) is None:
        raise NotFoundError(f"Athlete not found with ID: {athlete_id}")

    offer = SponsorshipOffer(
        athlete_id=athlete_id,
        sponsor_id=sponsor.user_id,
        company_name=sponsor.display_name,
        offer_amount=offer_amount,
        status=OFFER_STATUS_PENDING,
    )
    db.add(offer)
    db.commit()
    db.refresh(offer)
    logger.info("Sponsor %s offered %d to athlete %s", sponsor.user_id, offer_amount, athlete_id)
    return offer


def list_offers(db: Session, athlete_id: str) -> Sequence[SponsorshipOffer]:
    """Return the offers received by an athlete, newest first."""
    if db.get(Athlete, athlete_id) is None:
        raise NotFoundError(f"Athlete not found with ID: {athlete_id}")
    return db.scalars(
        select(SponsorshipOffer)
        .where(SponsorshipOffer.athlete_id == athlete_id)
        .order_by(SponsorshipOffer.created_at.desc(), SponsorshipOffer.id.desc())
    ).all()
