from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import Dict, List, Optional

from .config import FeedConfig, feed_config_from_env
from .mod_effects import Mod
from .normalize import Unit, normalize_mods, normalize_units
from .sheet_client import SheetClient

logger = logging.getLogger(__name__)


def parse_csv(text: str, source: str = "<csv>") -> List[Dict[str, str]]:
    """Parse CSV text whose first row is the header.

    Rows with a different number of cells than the header are skipped.
    """
    lines = text.strip()
    if not lines:
        logger.warning("CSV from %s is empty", source)
        return []

    reader = csv.reader(io.StringIO(lines))
    try:
        headers = [h.strip() for h in next(reader)]
    except StopIteration:
        return []

    rows: List[Dict[str, str]] = []
    for line_no, values in enumerate(reader, start=2):
        if not values:
            continue
        if len(values) != len(headers):
            logger.warning(
                "skipping malformed row %d in %s: expected %d columns, got %d",
                line_no,
                source,
                len(headers),
                len(values),
            )
            continue
        rows.append({h: v.strip() for h, v in zip(headers, values)})

    logger.info("parsed %d rows from %s", len(rows), source)
    return rows


def fetch_units(client: SheetClient, url: str) -> List[Unit]:
    return normalize_units(parse_csv(client.fetch_csv(url), source=url))


def fetch_mods(client: SheetClient, url: str) -> List[Mod]:
    return normalize_mods(parse_csv(client.fetch_csv(url), source=url))


def load_units_csv(path: str | Path) -> List[Unit]:
    path = Path(path)
    return normalize_units(parse_csv(path.read_text(encoding="utf-8-sig"), source=str(path)))


def load_mods_csv(path: str | Path) -> List[Mod]:
    path = Path(path)
    return normalize_mods(parse_csv(path.read_text(encoding="utf-8-sig"), source=str(path)))


def load_catalog(
    config: Optional[FeedConfig] = None,
    client: Optional[SheetClient] = None,
    units_csv: Optional[str] = None,
    mods_csv: Optional[str] = None,
) -> tuple[List[Unit], List[Mod]]:
    """Load units and mods, preferring local files when given."""
    config = config or feed_config_from_env()
    if client is None and not (units_csv and mods_csv):
        client = SheetClient(timeout_s=config.timeout_s, cache=config.cache)

    units = load_units_csv(units_csv) if units_csv else fetch_units(client, config.units_url)
    mods = load_mods_csv(mods_csv) if mods_csv else fetch_mods(client, config.mods_url)
    logger.info("catalog loaded: %d units, %d mods", len(units), len(mods))
    return units, mods
