"""Disk-backed TTL cache for icon search results."""

import hashlib
import json
import logging
import time
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Union

logger = logging.getLogger(__name__)


class SearchCache:
    """
    Caches JSON-serializable values on disk with a time-to-live.

    Each key is hashed to a stable filename under the cache directory. The
    stored file wraps the value as {"data", "timestamp", "ttl"} where
    timestamp is in milliseconds and ttl in seconds.

    Usage:
        cache = SearchCache(".cache/icon-search", ttl=86400)
        result = await cache.get_or_fetch("search:heart", fetch_fn)

    Note: a stored value of None is indistinguishable from a miss.
    """

    def __init__(
        self,
        directory: Union[str, Path],
        ttl: int,
        clock: Callable[[], float] = time.time
    ):
        """
        Args:
            directory: Directory to store cache files
            ttl: Time-to-live in seconds
            clock: Returns current time in seconds (injectable for tests)
        """
        self.directory = Path(directory)
        self.ttl = ttl
        self._clock = clock

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    def get_path(self, key: str) -> Path:
        """Hash the key to a safe filename."""
        digest = hashlib.md5(key.encode("utf-8")).hexdigest()
        return self.directory / f"{digest}.json"

    def get(self, key: str) -> Optional[Any]:
        """
        Get a cached value.

        Expired entries are deleted and reported as a miss. Unreadable or
        corrupt entries are also reported as a miss.
        """
        path = self.get_path(key)
        try:
            entry = json.loads(path.read_text(encoding="utf-8"))
            timestamp = entry["timestamp"]
            ttl = entry["ttl"]
            data = entry["data"]
        except FileNotFoundError:
            logger.debug(f"Search cache miss: {key}")
            return None
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning(f"Ignoring unreadable search cache entry {path.name}: {e}")
            return None

        if self._now_ms() > timestamp + ttl * 1000:
            logger.debug(f"Search cache entry expired: {key}")
            path.unlink(missing_ok=True)
            return None

        logger.debug(f"Search cache hit: {key}")
        return data

    def set(self, key: str, data: Any) -> None:
        """Store a value, overwriting any previous entry for the key."""
        self.directory.mkdir(parents=True, exist_ok=True)
        entry = {
            "data": data,
            "timestamp": self._now_ms(),
            "ttl": self.ttl,
        }
        self.get_path(key).write_text(json.dumps(entry, indent=2), encoding="utf-8")

    def delete(self, key: str) -> None:
        self.get_path(key).unlink(missing_ok=True)

    def clear(self) -> int:
        """
        Remove all cached entries.

        Returns:
            Number of entries removed
        """
        if not self.directory.is_dir():
            return 0
        removed = 0
        for path in self.directory.glob("*.json"):
            path.unlink(missing_ok=True)
            removed += 1
        logger.info(f"Cleared {removed} search cache entries from {self.directory}")
        return removed

    async def get_or_fetch(self, key: str, fetch_fn: Callable[[], Awaitable[Any]]) -> Any:
        """
        Return the cached value, or await fetch_fn() once and cache its result.

        Errors raised by fetch_fn propagate and nothing is cached.
        """
        cached = self.get(key)
        if cached is not None:
            return cached

        data = await fetch_fn()
        self.set(key, data)
        return data
