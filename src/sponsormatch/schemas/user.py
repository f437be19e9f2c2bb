"""Account-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SignupRequest(BaseModel):
    """Schema for creating a new account."""

    email: str = Field(..., max_length=320, description="Login email address")
    password: str = Field(..., min_length=8, description="Plain-text password (hashed server-side)")
    user_type: Literal["athlete", "sponsor"] = Field(..., description="Role claim of the account")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        """Case-fold the address and reject obviously malformed input."""
        value = value.strip().lower()
        if "@" not in value or value.startswith("@") or value.endswith("@"):
            raise ValueError("Invalid email address")
        return value


class LoginRequest(BaseModel):
    """Credentials presented at login."""

    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class TokenResponse(BaseModel):
    """Access token returned after signup or login."""

    access_token: str
    token_type: str = "bearer"
    user_id: str
    user_type: Literal["athlete", "sponsor"]


class UserResponse(BaseModel):
    """Public account information of the caller."""

    user_id: str
    email: str
    user_type: Literal["athlete", "sponsor"]
    has_profile: bool

    model_config = ConfigDict(from_attributes=True)
