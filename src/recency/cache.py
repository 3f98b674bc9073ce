# -*- coding: utf-8 -*-
"""
This module contains the reference LRU cache implementation. It combines a dict which
maps keys to node indices with the arena backed :class:`recency.arena.RecencyList`,
giving O(1) lookups, touches and evictions. A single lock per instance serializes all
access since even lookups reorder the recency list.
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import (
    Any,
    Callable,
    ContextManager,
    Dict,
    Generic,
    Hashable,
    List,
    Optional,
    Tuple,
    TypeVar,
)

from .arena import RecencyList
from .core import MISS, CacheInfo, bounded_lock, validate_capacity


__all__ = ["LRUCache"]


logger = logging.getLogger(__name__)

KT = TypeVar("KT", bound=Hashable)
VT = TypeVar("VT")


class LRUCache(Generic[KT, VT]):
    """A fixed capacity, thread-safe least recently used cache

    Both :meth:`get` hits and :meth:`put` mark an entry as most recently used. When a
    new key is put into a full cache, the least recently used entry is evicted in the
    same operation.

    :param capacity: Maximum number of entries to keep. Must be at least 1.
    :param touch_on_contains: If ``True``, :meth:`contains` marks a found key as most
        recently used. By default membership tests do not affect recency.
    :param on_evict: Callback which is called with the key and value of each evicted
        entry. It runs after the cache lock has been released.
    :param lock_timeout: Maximum time in seconds to wait for the cache lock before
        raising :exc:`recency.errors.LockTimeoutError`. Waits indefinitely if ``None``.
    :raises InvalidCapacityError: if the capacity is not an integer >= 1.
    """

    def __init__(
        self,
        capacity: int,
        touch_on_contains: bool = False,
        on_evict: Optional[Callable[[KT, VT], Any]] = None,
        lock_timeout: Optional[float] = None,
    ) -> None:
        self._capacity = validate_capacity(capacity)
        self._touch_on_contains = touch_on_contains
        self._on_evict = on_evict
        self._lock_timeout = lock_timeout

        self._lock = RLock()
        self._table: Dict[KT, int] = {}
        self._entries = RecencyList()

        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @classmethod
    def from_config(cls, config_name: str = "recency") -> LRUCache:
        """
        Creates a cache from the settings of a config profile.

        :param config_name: Name of the config profile. A config file with default
            values is created if none exists.
        :returns: New empty cache.
        """
        from .config import RecencyConfig

        conf = RecencyConfig(config_name)
        lock_timeout = conf.get("cache", "lock_timeout")

        return cls(
            conf.get("cache", "capacity"),
            touch_on_contains=conf.get("cache", "touch_on_contains"),
            lock_timeout=lock_timeout if lock_timeout > 0 else None,
        )

    def _locked(self) -> ContextManager[None]:
        return bounded_lock(self._lock, self._lock_timeout)

    # ---- properties ------------------------------------------------------------------

    @property
    def capacity(self) -> int:
        """Maximum number of entries. Read only."""
        return self._capacity

    @property
    def touch_on_contains(self) -> bool:
        """Whether membership tests mark found keys as most recently used."""
        return self._touch_on_contains

    # ---- lookups ---------------------------------------------------------------------

    def get(self, key: KT, default: Any = MISS) -> Any:
        """
        Get the cached value for a key. Mark as most recently used.

        :param key: Key to query.
        :param default: Value to return if the key is not cached.
        :returns: Cached value or ``default``, :data:`recency.core.MISS` if not given.
        """
        with self._locked():
            index = self._table.get(key)

            if index is None:
                self._misses += 1
                return default

            self._hits += 1
            self._entries.move_to_front(index)
            return self._entries.value(index)

    def peek(self, key: KT, default: Any = MISS) -> Any:
        """
        Get the cached value for a key without affecting recency or statistics.

        :param key: Key to query.
        :param default: Value to return if the key is not cached.
        :returns: Cached value or ``default``.
        """
        with self._locked():
            index = self._table.get(key)
            return default if index is None else self._entries.value(index)

    def contains(self, key: KT) -> bool:
        """
        Checks if a key is cached. Only marks the key as most recently used if the
        cache was created with ``touch_on_contains=True``.

        :param key: Key to query.
        :returns: Whether the key is cached.
        """
        with self._locked():
            index = self._table.get(key)

            if index is None:
                return False

            if self._touch_on_contains:
                self._entries.move_to_front(index)

            return True

    def __contains__(self, key: Any) -> bool:
        return self.contains(key)

    # ---- mutations -------------------------------------------------------------------

    def put(self, key: KT, value: VT) -> Optional[Tuple[KT, VT]]:
        """
        Set the cached value for a key. Mark as most recently used. If the key is new
        and the cache is full, the least recently used entry is evicted.

        :param key: Key to use. Must be hashable.
        :param value: Value to cache.
        :returns: The evicted key and value or None if nothing was evicted.
        """
        evicted = None

        with self._locked():
            index = self._table.get(key)

            if index is not None:
                self._entries.set_value(index, value)
                self._entries.move_to_front(index)
            else:
                if len(self._table) >= self._capacity:
                    evicted = self._evict_lru()
                self._table[key] = self._entries.insert(key, value)

        if evicted is not None and self._on_evict is not None:
            self._on_evict(*evicted)

        return evicted

    def _evict_lru(self) -> Tuple[KT, VT]:
        """Removes the tail entry from the list and the table. Requires the lock."""
        index = self._entries.tail()

        key, value = self._entries.remove(index)
        del self._table[key]
        self._evictions += 1

        logger.debug("Evicted least recently used key %r", key)

        return key, value

    def pop(self, key: KT, default: Any = MISS) -> Any:
        """
        Removes a key from the cache. This does not count as an eviction.

        :param key: Key to remove.
        :param default: Value to return if the key is not cached.
        :returns: The removed value or ``default``.
        """
        with self._locked():
            index = self._table.pop(key, None)

            if index is None:
                return default

            _, value = self._entries.remove(index)
            return value

    def clear(self) -> None:
        """
        Clears the cache. Statistics are kept, see :meth:`reset_info`.
        """
        with self._locked():
            self._table.clear()
            self._entries.clear()

        logger.debug("Cache cleared")

    # ---- observers -------------------------------------------------------------------

    def size(self) -> int:
        """Returns the number of cached entries."""
        with self._locked():
            return len(self._table)

    def __len__(self) -> int:
        return self.size()

    def keys(self) -> List[KT]:
        """Returns all keys, from most to least recently used."""
        with self._locked():
            return [self._entries.key(i) for i in self._entries]

    def values(self) -> List[VT]:
        """Returns all values, from most to least recently used."""
        with self._locked():
            return [self._entries.value(i) for i in self._entries]

    def items(self) -> List[Tuple[KT, VT]]:
        """Returns all key, value pairs, from most to least recently used."""
        with self._locked():
            return [(self._entries.key(i), self._entries.value(i)) for i in self._entries]

    def info(self) -> CacheInfo:
        """Returns hit, miss and eviction counts together with size and capacity."""
        with self._locked():
            return CacheInfo(
                self._hits,
                self._misses,
                self._evictions,
                len(self._table),
                self._capacity,
            )

    def reset_info(self) -> None:
        """Resets hit, miss and eviction counts to zero."""
        with self._locked():
            self._hits = 0
            self._misses = 0
            self._evictions = 0

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__}(size={len(self._table)}, "
            f"capacity={self._capacity})>"
        )
