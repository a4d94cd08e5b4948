"""Application ports (interfaces)."""

from .unit_feed import UnitFeedPort

__all__ = [
    "UnitFeedPort",
]
