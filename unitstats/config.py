from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


UNITS_CSV_URL = (
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vQO78VJA7y_g5zHpzw1gTaJhLV2mjNdRxA33zcj1WPFj-QYxQS09nInTQXg6kXNJcjm4f7Gk7lPVZuV"
    "/pub?gid=201310748&single=true&output=csv"
)

MODS_CSV_URL = (
    "https://docs.google.com/spreadsheets/d/e/"
    "2PACX-1vQO78VJA7y_g5zHpzw1gTaJhLV2mjNdRxA33zcj1WPFj-QYxQS09nInTQXg6kXNJcjm4f7Gk7lPVZuV"
    "/pub?gid=331730679&single=true&output=csv"
)

DEFAULT_TIMEOUT_S = 30


@dataclass(frozen=True)
class CacheConfig:
    enabled: bool
    base_dir: Path


def cache_config_from_env() -> CacheConfig:
    enabled = os.environ.get("UNITSTATS_CACHE", "0").lower() in {"1", "true", "yes"}
    base_dir = Path(os.environ.get("UNITSTATS_CACHE_DIR", ".cache/sheets"))
    return CacheConfig(enabled=enabled, base_dir=base_dir)


@dataclass(frozen=True)
class FeedConfig:
    units_url: str = UNITS_CSV_URL
    mods_url: str = MODS_CSV_URL
    timeout_s: int = DEFAULT_TIMEOUT_S
    cache: CacheConfig = field(default_factory=cache_config_from_env)


def feed_config_from_env() -> FeedConfig:
    return FeedConfig(
        units_url=os.environ.get("UNITSTATS_UNITS_URL") or UNITS_CSV_URL,
        mods_url=os.environ.get("UNITSTATS_MODS_URL") or MODS_CSV_URL,
        timeout_s=int(os.environ.get("UNITSTATS_TIMEOUT", DEFAULT_TIMEOUT_S)),
        cache=cache_config_from_env(),
    )
