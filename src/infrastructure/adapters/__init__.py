"""Infrastructure adapters."""

from .sheet_feed_adapter import SheetFeedAdapter

__all__ = [
    "SheetFeedAdapter",
]
