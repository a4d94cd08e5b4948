"""Port (interface) for the unit and mod data feed."""

from abc import ABC, abstractmethod
from typing import List, Tuple

from unitstats.mod_effects import Mod
from unitstats.normalize import Unit


class UnitFeedPort(ABC):
    """Port for loading unit and mod records from an external source."""

    @abstractmethod
    def load_catalog(self) -> Tuple[List[Unit], List[Mod]]:
        """Load every unit and mod.

        Returns:
            Tuple of (units, mods)

        Raises:
            FeedError: if the source cannot be reached
        """
        ...
