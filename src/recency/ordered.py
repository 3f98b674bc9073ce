# -*- coding: utf-8 -*-
"""
Module containing an LRU cache built on :class:`collections.OrderedDict`. It offers the
same interface as :class:`recency.cache.LRUCache` and is a good fit where the reference
implementation's control over node storage is not needed.
"""

from __future__ import annotations

from collections import OrderedDict
from threading import RLock
from typing import Any, Callable, ContextManager, Hashable, List, Optional, Tuple

from .core import MISS, CacheInfo, bounded_lock, validate_capacity


__all__ = ["OrderedLRUCache"]


class OrderedLRUCache:
    """A simple LRU cache implementation on top of an access-ordered dict

    The most recently used entry is kept at the end of the dict.

    :param capacity: Maximum number of entries to keep. Must be at least 1.
    :param touch_on_contains: If ``True``, :meth:`contains` marks a found key as most
        recently used.
    :param on_evict: Callback which is called with the key and value of each evicted
        entry after the cache lock has been released.
    :param lock_timeout: Maximum time in seconds to wait for the cache lock before
        raising :exc:`recency.errors.LockTimeoutError`. Waits indefinitely if ``None``.
    """

    def __init__(
        self,
        capacity: int,
        touch_on_contains: bool = False,
        on_evict: Optional[Callable[[Any, Any], Any]] = None,
        lock_timeout: Optional[float] = None,
    ) -> None:
        self._capacity = validate_capacity(capacity)
        self._touch_on_contains = touch_on_contains
        self._on_evict = on_evict
        self._lock_timeout = lock_timeout
        self._lock = RLock()
        self._cache: OrderedDict[Hashable, Any] = OrderedDict()

        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def _locked(self) -> ContextManager[None]:
        return bounded_lock(self._lock, self._lock_timeout)

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def touch_on_contains(self) -> bool:
        return self._touch_on_contains

    def get(self, key: Hashable, default: Any = MISS) -> Any:
        """
        Get the cached value for a key. Mark as most recently used.

        :param key: Key to query.
        :param default: Value to return if the key is not cached.
        :returns: Cached value or ``default``.
        """
        with self._locked():
            try:
                self._cache.move_to_end(key)
            except KeyError:
                self._misses += 1
                return default

            self._hits += 1
            return self._cache[key]

    def peek(self, key: Hashable, default: Any = MISS) -> Any:
        """
        Get the cached value for a key without affecting recency.

        :param key: Key to query.
        :param default: Value to return if the key is not cached.
        :returns: Cached value or ``default``.
        """
        with self._locked():
            return self._cache.get(key, default)

    def contains(self, key: Hashable) -> bool:
        with self._locked():
            if key not in self._cache:
                return False
            if self._touch_on_contains:
                self._cache.move_to_end(key)
            return True

    def __contains__(self, key: Any) -> bool:
        return self.contains(key)

    def put(self, key: Hashable, value: Any) -> Optional[Tuple[Any, Any]]:
        """
        Set the cached value for a key. Mark as most recently used.

        :param key: Key to use. Must be hashable.
        :param value: Value to cache.
        :returns: The evicted key and value or None if nothing was evicted.
        """
        evicted = None

        with self._locked():
            self._cache[key] = value
            self._cache.move_to_end(key)
            if len(self._cache) > self._capacity:
                evicted = self._cache.popitem(last=False)
                self._evictions += 1

        if evicted is not None and self._on_evict is not None:
            self._on_evict(*evicted)

        return evicted

    def pop(self, key: Hashable, default: Any = MISS) -> Any:
        with self._locked():
            return self._cache.pop(key, default)

    def clear(self) -> None:
        """
        Clears the cache.
        """
        with self._locked():
            self._cache.clear()

    def size(self) -> int:
        with self._locked():
            return len(self._cache)

    def __len__(self) -> int:
        return self.size()

    def keys(self) -> List[Any]:
        """Returns all keys, from most to least recently used."""
        with self._locked():
            return list(reversed(self._cache.keys()))

    def values(self) -> List[Any]:
        with self._locked():
            return list(reversed(self._cache.values()))

    def items(self) -> List[Tuple[Any, Any]]:
        with self._locked():
            return list(reversed(self._cache.items()))

    def info(self) -> CacheInfo:
        with self._locked():
            return CacheInfo(
                self._hits,
                self._misses,
                self._evictions,
                len(self._cache),
                self._capacity,
            )

    def reset_info(self) -> None:
        with self._locked():
            self._hits = 0
            self._misses = 0
            self._evictions = 0

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__}(size={len(self._cache)}, "
            f"capacity={self._capacity})>"
        )
