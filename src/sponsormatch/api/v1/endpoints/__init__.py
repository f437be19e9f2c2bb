# src/sponsormatch/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .feed import router as feed_router
from .matches import router as matches_router
from .offers import router as offers_router
from .profiles import router as profiles_router
from .swipes import router as swipes_router

__all__ = [
    "auth_router",
    "profiles_router",
    "feed_router",
    "swipes_router",
    "matches_router",
    "offers_router",
]
