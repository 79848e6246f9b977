"""Caching for API lookups."""

from .interface import CacheInterface
from .manager import CacheManager
from .memory_cache import MemoryCache

__all__ = ["CacheInterface", "CacheManager", "MemoryCache"]
