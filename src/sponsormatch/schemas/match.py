"""Swipe and match-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SwipeCreate(BaseModel):
    """Schema for recording a like or pass on another profile."""

    target_user_id: str = Field(..., description="User id of the profile being swiped on")
    action: Literal["like", "pass"]


class MatchSummary(BaseModel):
    """Match information returned when a like completes a pair."""

    id: str
    sponsor_id: str
    athlete_id: str
    sponsor_name: str
    athlete_name: str
    status: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SwipeResponse(BaseModel):
    """Outcome of a swipe."""

    action: Literal["like", "pass"]
    outcome: Literal["recorded", "created", "already_matched", "not_mutual", "incompatible"]
    is_match: bool
    match: MatchSummary | None = None


class CounterpartResponse(BaseModel):
    """The other participant of a conversation."""

    id: str
    name: str
    image_url: str | None = None


class LastMessageResponse(BaseModel):
    """Most recent message of a conversation."""

    text: str
    sender_id: str
    created_at: datetime


class ConversationResponse(BaseModel):
    """One entry of the caller's conversation list."""

    match_id: str
    other_user: CounterpartResponse
    last_message: LastMessageResponse | None
    created_at: datetime
