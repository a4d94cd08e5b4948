from __future__ import annotations

import hashlib
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import requests

from .config import DEFAULT_TIMEOUT_S, CacheConfig, cache_config_from_env

logger = logging.getLogger(__name__)

RETRY_STATUSES = (429, 500, 502, 503, 504)


class FeedError(RuntimeError):
    """The published sheet could not be fetched."""


@dataclass
class SheetClient:
    timeout_s: int = DEFAULT_TIMEOUT_S
    cache: Optional[CacheConfig] = None

    def __post_init__(self) -> None:
        self.session = requests.Session()
        self.session.headers.update({"accept": "text/csv"})
        if self.cache is None:
            self.cache = cache_config_from_env()

    def _cache_path(self, url: str) -> Path:
        assert self.cache is not None
        digest = hashlib.sha1(url.encode("utf-8")).hexdigest()
        return self.cache.base_dir / f"{digest}.csv"

    def fetch_csv(self, url: str, retries: int = 3, backoff_s: float = 0.6) -> str:
        cache = self.cache
        if cache and cache.enabled:
            path = self._cache_path(url)
            if path.exists():
                logger.debug("cache hit for %s", url)
                return path.read_text(encoding="utf-8")

        logger.info("fetching CSV from %s", url)
        last_err: Optional[Exception] = None
        for attempt in range(retries):
            try:
                resp = self.session.get(url, timeout=self.timeout_s)
                if resp.status_code in RETRY_STATUSES:
                    last_err = FeedError(f"HTTP {resp.status_code} from {url}")
                    time.sleep(backoff_s * (attempt + 1))
                    continue

                resp.raise_for_status()
                text = resp.content.decode("utf-8-sig")
                logger.info("fetched %d characters from %s", len(text), url)

                if cache and cache.enabled:
                    path.parent.mkdir(parents=True, exist_ok=True)
                    path.write_text(text, encoding="utf-8")
                return text
            except requests.RequestException as exc:
                last_err = exc
                logger.warning("attempt %d for %s failed: %s", attempt + 1, url, exc)
                time.sleep(backoff_s * (attempt + 1))

        raise FeedError(f"Failed after {retries} attempts. Last error: {last_err}")
