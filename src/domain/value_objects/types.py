"""Domain value objects and type aliases."""

from enum import Enum
from typing import NewType

# Type aliases for domain clarity
UnitId = NewType("UnitId", str)
ModId = NewType("ModId", str)


class SortDirection(str, Enum):
    """Table sort direction."""

    ASC = "asc"
    DESC = "desc"
