"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    feed_router,
    matches_router,
    offers_router,
    profiles_router,
    swipes_router,
)

__all__ = [
    "auth_router",
    "profiles_router",
    "feed_router",
    "swipes_router",
    "matches_router",
    "offers_router",
]
