"""In-process LRU cache with per-entry expiry."""

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any

from .interface import CacheInterface

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    value: Any
    inserted_at: float
    expires_at: float


class MemoryCache(CacheInterface):
    """Bounded in-memory cache.

    Reads refresh recency; inserting into a full cache evicts the least
    recently used entry. Expired entries are dropped when they are next read.
    Mutations never span an ``await``, so concurrent tasks on one event loop
    cannot interleave inside them.
    """

    def __init__(
        self,
        default_ttl: int = 600,
        max_entries: int = 100,
        key_prefix: str = "",
    ):
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")

        self.default_ttl = default_ttl
        self.max_entries = max_entries
        self.key_prefix = key_prefix
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._closed = False

        self._stats = {
            "hits": 0,
            "misses": 0,
            "sets": 0,
            "evictions": 0,
            "expirations": 0,
        }

    def _make_key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def _now(self) -> float:
        return time.monotonic()

    def _lookup(self, key: str) -> CacheEntry | None:
        full_key = self._make_key(key)
        entry = self._entries.get(full_key)
        if entry is None:
            return None

        if entry.expires_at <= self._now():
            del self._entries[full_key]
            self._stats["expirations"] += 1
            return None

        self._entries.move_to_end(full_key)
        return entry

    async def get(self, key: str) -> Any:
        entry = self._lookup(key)
        if entry is None:
            self._stats["misses"] += 1
            return None

        self._stats["hits"] += 1
        return entry.value

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        full_key = self._make_key(key)
        now = self._now()
        ttl = self.default_ttl if ttl is None else ttl

        if full_key in self._entries:
            self._entries.move_to_end(full_key)
        elif len(self._entries) >= self.max_entries:
            evicted_key, _ = self._entries.popitem(last=False)
            self._stats["evictions"] += 1
            logger.debug("cache_evict", extra={"key": evicted_key})

        self._entries[full_key] = CacheEntry(value=value, inserted_at=now, expires_at=now + ttl)
        self._stats["sets"] += 1
        return True

    async def exists(self, key: str) -> bool:
        return self._lookup(key) is not None

    async def close(self) -> None:
        self._entries.clear()
        self._closed = True

    async def health_check(self) -> bool:
        return not self._closed

    def get_stats(self) -> dict[str, Any]:
        lookups = self._stats["hits"] + self._stats["misses"]
        hit_rate = (self._stats["hits"] / lookups * 100) if lookups else 0.0
        return {
            "backend": "memory",
            **self._stats,
            "entries": len(self._entries),
            "max_entries": self.max_entries,
            "hit_rate_percent": round(hit_rate, 2),
        }
