"""Sponsorship offer Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class OfferCreate(BaseModel):
    """Schema for submitting a sponsorship offer."""

    offer_amount: int


class OfferResponse(BaseModel):
    """Schema for sponsorship offers returned by the API."""

    id: int
    athlete_id: str
    sponsor_id: str
    company_name: str
    offer_amount: int
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
