# -*- coding: utf-8 -*-
"""Module containing a memoizing decorator backed by :class:`recency.cache.LRUCache`."""

from __future__ import annotations

import functools
from typing import Any, Callable, Dict, Hashable, Optional, Tuple, TypeVar

from .cache import LRUCache
from .core import MISS


__all__ = ["lru_cached"]


_F = TypeVar("_F", bound=Callable[..., Any])

# Separates positional from keyword arguments in cache keys.
_KWD_MARK = (object(),)


def _make_key(args: Tuple[Any, ...], kwargs: Dict[str, Any], typed: bool) -> Hashable:
    """
    Builds a cache key from call arguments. Keyword arguments are sorted by name so
    that their order does not matter.

    :param args: Positional arguments.
    :param kwargs: Keyword arguments.
    :param typed: Whether to include argument types in the key.
    :returns: Hashable key.
    """
    key: Tuple[Any, ...] = args
    sorted_kwargs = tuple(sorted(kwargs.items()))

    if sorted_kwargs:
        key += _KWD_MARK + sorted_kwargs

    if typed:
        key += tuple(type(arg) for arg in args)
        key += tuple(type(value) for _, value in sorted_kwargs)

    # Unhashable arguments fail here, before the cache is touched.
    hash(key)
    return key


def lru_cached(
    capacity: int = 128, typed: bool = False, cache: Optional[LRUCache] = None
) -> Callable[[_F], _F]:
    """
    Decorator to memoize a function's results in an LRU cache. The decorated function
    exposes the cache as ``cache`` together with ``cache_info()`` and
    ``cache_clear()``.

    :param capacity: Capacity of the cache to create. Ignored if ``cache`` is given.
    :param typed: If ``True``, arguments of different types are cached separately,
        e.g., ``f(1)`` and ``f(1.0)``.
    :param cache: An existing cache to store results in. This allows sharing a cache
        or setting eviction callbacks.
    :returns: Decorator.
    :raises InvalidCapacityError: if no cache is given and the capacity is invalid.
    """
    if cache is None:
        cache = LRUCache(capacity)

    def decorator(func: _F) -> _F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            key = _make_key(args, kwargs, typed)
            result = cache.get(key)

            if result is MISS:
                result = func(*args, **kwargs)
                cache.put(key, result)

            return result

        wrapper.cache = cache  # type: ignore
        wrapper.cache_info = cache.info  # type: ignore
        wrapper.cache_clear = cache.clear  # type: ignore

        return wrapper  # type: ignore

    return decorator
