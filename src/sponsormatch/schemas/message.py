"""Chat message Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sponsormatch.core.settings import settings


class MessageCreate(BaseModel):
    """Schema for sending a chat message."""

    text: str = Field(..., description="Message body")

    @field_validator("text")
    @classmethod
    def check_length(cls, value: str) -> str:
        """Apply the client-facing length bound."""
        if len(value) > settings.message_max_length:
            raise ValueError(f"Message must be at most {settings.message_max_length} characters")
        return value


class MessageResponse(BaseModel):
    """Schema for chat message information returned by the API."""

    id: int
    match_id: str
    sender_id: str
    sender_name: str
    text: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
