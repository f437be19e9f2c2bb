"""Explicit per-request session context."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

UserType = Literal["athlete", "sponsor"]


@dataclass(frozen=True)
class UserContext:
    """The authenticated actor passed to service calls.

    Built once per request from the access token; services never read the
    current user from global state.
    """

    user_id: str
    user_type: UserType

    @property
    def counterpart_type(self) -> UserType:
        """Return the profile variant this user swipes on."""
        return "sponsor" if self.user_type == "athlete" else "athlete"
