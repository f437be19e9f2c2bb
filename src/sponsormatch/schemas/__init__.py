# src/sponsormatch/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .match import ConversationResponse, SwipeCreate, SwipeResponse
from .message import MessageCreate, MessageResponse
from .offer import OfferCreate, OfferResponse
from .profile import OwnProfileResponse, ProfileResponse, ProfileUpsert
from .user import LoginRequest, SignupRequest, TokenResponse, UserResponse

__all__ = [
    "SignupRequest", "LoginRequest", "TokenResponse", "UserResponse",
    "ProfileUpsert", "ProfileResponse", "OwnProfileResponse",
    "SwipeCreate", "SwipeResponse", "ConversationResponse",
    "MessageCreate", "MessageResponse",
    "OfferCreate", "OfferResponse",
]
