"""Cache interface."""

from abc import ABC, abstractmethod
from typing import Any


class CacheInterface(ABC):
    """Async key/value cache.

    Entries leave the cache only by expiring or being evicted; there is no
    delete or clear operation.
    """

    @abstractmethod
    async def get(self, key: str) -> Any:
        """Return the cached value, or None on a miss."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store ``value`` for ``ttl`` seconds (backend default when None)."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Whether an unexpired entry exists for ``key``."""

    @abstractmethod
    async def close(self) -> None:
        """Release backend resources."""

    @abstractmethod
    async def health_check(self) -> bool:
        """Whether the backend is usable."""

    @abstractmethod
    def get_stats(self) -> dict[str, Any]:
        """Backend statistics."""
