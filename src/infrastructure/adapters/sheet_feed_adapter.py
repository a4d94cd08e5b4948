"""Adapter wrapping the published-sheet feed."""

import logging
import threading
from typing import List, Optional, Tuple

from unitstats.config import FeedConfig, feed_config_from_env
from unitstats.mod_effects import Mod
from unitstats.normalize import Unit
from unitstats.sheet_client import SheetClient
from unitstats.sheet_ingest import load_catalog

from ...application.ports.unit_feed import UnitFeedPort

logger = logging.getLogger(__name__)


class SheetFeedAdapter(UnitFeedPort):
    """Loads units and mods from the published sheet once and keeps them."""

    def __init__(
        self,
        config: Optional[FeedConfig] = None,
        client: Optional[SheetClient] = None,
    ):
        """Initialize the adapter.

        Args:
            config: Feed configuration. If None, read from the environment.
            client: Sheet client to reuse. If None, one is built from config.
        """
        self._config = config or feed_config_from_env()
        self._client = client
        self._lock = threading.Lock()
        self._catalog: Optional[Tuple[List[Unit], List[Mod]]] = None

    def load_catalog(self) -> Tuple[List[Unit], List[Mod]]:
        with self._lock:
            if self._catalog is None:
                self._catalog = load_catalog(self._config, client=self._client)
                logger.info(
                    "sheet catalog cached: %d units, %d mods",
                    len(self._catalog[0]),
                    len(self._catalog[1]),
                )
            return self._catalog

    def reset(self) -> None:
        """Forget the cached catalog so the next load refetches."""
        with self._lock:
            self._catalog = None
