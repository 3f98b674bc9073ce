# -*- coding: utf-8 -*-
"""Fixed capacity, thread-safe least recently used caches."""

from .cache import LRUCache
from .core import MISS, CacheInfo
from .decorators import lru_cached
from .errors import RecencyError, InvalidCapacityError, LockTimeoutError, TraceError
from .ordered import OrderedLRUCache


__version__ = "1.0.0"


__all__ = [
    "LRUCache",
    "OrderedLRUCache",
    "MISS",
    "CacheInfo",
    "lru_cached",
    "RecencyError",
    "InvalidCapacityError",
    "LockTimeoutError",
    "TraceError",
]
