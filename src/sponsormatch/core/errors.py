"""Domain error taxonomy shared by services and the API layer."""

from __future__ import annotations


class SponsorMatchError(RuntimeError):
    """Base exception raised for domain-level failures."""


class ValidationError(SponsorMatchError):
    """Raised when a required field is missing or a value is invalid.

    Reported to the caller as-is and never retried.
    """


class NotFoundError(SponsorMatchError):
    """Raised when a referenced profile, match or account does not exist."""


class ConflictError(SponsorMatchError):
    """Raised when a write collides with existing state (duplicate email)."""


class AuthenticationError(SponsorMatchError):
    """Raised when credentials do not match a known account."""


class StorageError(SponsorMatchError):
    """Raised when an image upload or URL lookup fails."""


class TransientIOError(StorageError):
    """Raised when a collaborator stayed unavailable after all retries."""
