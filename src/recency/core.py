# -*- coding: utf-8 -*-
"""This module contains the small value types shared by all cache implementations."""

from __future__ import annotations

from contextlib import contextmanager
from threading import RLock
from typing import Any, Iterator, NamedTuple, Optional

from .errors import InvalidCapacityError, LockTimeoutError


__all__ = ["MISS", "CacheInfo", "validate_capacity", "bounded_lock"]


class _Miss:
    """Type of the :data:`MISS` marker. There is only ever one instance."""

    _instance: _Miss | None = None

    def __new__(cls) -> _Miss:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISS"

    def __reduce__(self) -> str:
        return "MISS"


MISS: Any = _Miss()
"""Returned by lookups of absent keys when no default is given."""


class CacheInfo(NamedTuple):
    """Snapshot of cache statistics

    :param hits: Number of :meth:`get` calls which found their key.
    :param misses: Number of :meth:`get` calls which did not find their key.
    :param evictions: Number of entries removed to make room for new keys.
    :param size: Number of entries at the time of the snapshot.
    :param capacity: Maximum number of entries.
    """

    hits: int
    misses: int
    evictions: int
    size: int
    capacity: int

    @property
    def hit_ratio(self) -> float:
        """Fraction of lookups which were hits, 0.0 if there were no lookups."""
        lookups = self.hits + self.misses
        return self.hits / lookups if lookups > 0 else 0.0


def validate_capacity(capacity: Any) -> int:
    """
    Validates a cache capacity.

    :param capacity: Requested maximum number of entries.
    :returns: The capacity.
    :raises InvalidCapacityError: if the capacity is not an integer >= 1.
    """
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        raise InvalidCapacityError(
            "Invalid capacity", f"Capacity must be an integer, got {capacity!r}"
        )

    if capacity < 1:
        raise InvalidCapacityError(
            "Invalid capacity", f"Capacity must be at least 1, got {capacity}"
        )

    return capacity


@contextmanager
def bounded_lock(lock: RLock, timeout: Optional[float]) -> Iterator[None]:
    """
    Holds a lock for the duration of the context.

    :param lock: Lock to acquire.
    :param timeout: Maximum time in seconds to wait for the lock. Waits indefinitely
        if ``None``.
    :raises LockTimeoutError: if the lock could not be acquired in time.
    """
    if timeout is None:
        acquired = lock.acquire()
    else:
        acquired = lock.acquire(timeout=timeout)

    if not acquired:
        raise LockTimeoutError(
            "Cache is busy",
            f"Could not acquire the cache lock within {timeout} sec",
        )

    try:
        yield
    finally:
        lock.release()
