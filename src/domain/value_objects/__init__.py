"""Domain value objects."""

from .types import ModId, SortDirection, UnitId

__all__ = [
    "ModId",
    "SortDirection",
    "UnitId",
]
