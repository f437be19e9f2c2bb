# src/sponsormatch/models/__init__.py
"""SQLAlchemy models for the SponsorMatch application."""

from .match import MATCH_STATUS_ACTIVE, Match, pair_key
from .message import Message
from .offer import SponsorshipOffer
from .profile import Athlete, Profile, Sponsor
from .swipe import SWIPE_LIKE, SWIPE_PASS, Swipe
from .user import UserAccount

__all__ = [
    "UserAccount",
    "Profile", "Athlete", "Sponsor",
    "Swipe", "SWIPE_LIKE", "SWIPE_PASS",
    "Match", "MATCH_STATUS_ACTIVE", "pair_key",
    "Message",
    "SponsorshipOffer",
]
