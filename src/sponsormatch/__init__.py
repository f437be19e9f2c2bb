"""SponsorMatch: swipe-to-match connector between athletes and sponsors."""

__version__ = "0.1.0"
