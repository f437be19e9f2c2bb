"""Profile-related Pydantic schemas."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProfileUpsert(BaseModel):
    """Full replacement payload for the caller's profile.

    Required fields are checked by the profile store so that every missing
    value is reported the same way regardless of the entry point.
    """

    variant: Literal["athlete", "sponsor"]
    display_name: str | None = Field(None, description="Full name or company name")
    category: str | None = Field(None, description="Sport for athletes, industry for sponsors")
    description: str | None = None
    image_base64: str | None = Field(None, description="Base64-encoded profile image or logo")
    image_content_type: str = Field("image/jpeg", description="MIME type of the image")
    preferred_colleges: list[str] = Field(default_factory=list)

    # Athlete details
    college: str | None = None
    position: str | None = None
    graduation_year: int | None = None
    height: str | None = None
    weight: str | None = None
    gpa: float | None = None
    achievements: str | None = None
    amount_requested: int | None = None

    # Sponsor details
    website: str | None = None
    min_budget: int | None = None
    max_budget: int | None = None
    preferred_sports: list[str] | None = None

    def profile_fields(self) -> dict[str, object]:
        """Return the descriptive fields without transport-only values."""
        return self.model_dump(exclude={"variant", "image_base64", "image_content_type"})


class ProfileResponse(BaseModel):
    """Public profile information returned by the API."""

    user_id: str
    variant: Literal["athlete", "sponsor"]
    display_name: str
    category: str
    description: str
    image_url: str
    preferred_colleges: list[str] = Field(default_factory=list)

    college: str | None = None
    position: str | None = None
    graduation_year: int | None = None
    height: str | None = None
    weight: str | None = None
    gpa: float | None = None
    achievements: str | None = None
    amount_requested: int | None = None

    website: str | None = None
    min_budget: int | None = None
    max_budget: int | None = None
    preferred_sports: list[str] | None = None

    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OwnProfileResponse(ProfileResponse):
    """Profile of the caller, including their swipe decisions."""

    likes: list[str] = Field(default_factory=list)
    passes: list[str] = Field(default_factory=list)

    @field_validator("likes", "passes", mode="before")
    @classmethod
    def sort_ids(cls, value: Iterable[str]) -> list[str]:
        return sorted(value)
