# src/sponsormatch/services/__init__.py
"""Business logic services for the SponsorMatch application."""

from .match_resolver import MatchOutcome, MatchResult
from .message_log import MessageHub, MessageSubscription
from .storage import HttpObjectStorage, LocalObjectStorage, ObjectStorage

__all__ = [
    "MatchOutcome",
    "MatchResult",
    "MessageHub",
    "MessageSubscription",
    "ObjectStorage",
    "LocalObjectStorage",
    "HttpObjectStorage",
]
