# -*- coding: utf-8 -*-

import random
import threading
import time

import pytest

from recency import LRUCache, LockTimeoutError, RecencyError


N_THREADS = 16


def test_parallel_put_then_get(cache_cls):
    cache = cache_cls(N_THREADS)
    barrier = threading.Barrier(N_THREADS)
    results = {}

    def worker(key):
        cache.put(key, f"value-{key}")
        barrier.wait()
        results[key] = cache.get(key)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(N_THREADS)]

    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results == {i: f"value-{i}" for i in range(N_THREADS)}
    assert cache.size() == N_THREADS


def test_parallel_mixed_traffic(check_consistency):
    cache = LRUCache(32, touch_on_contains=True)
    errors = []

    def worker(seed):
        rng = random.Random(seed)
        try:
            for _ in range(2000):
                key = rng.randrange(64)
                action = rng.randrange(4)
                if action == 0:
                    cache.get(key)
                elif action == 1:
                    cache.contains(key)
                elif action == 2:
                    cache.pop(key)
                else:
                    cache.put(key, key)
                assert len(cache) <= cache.capacity
        except Exception as exc:
            errors.append(exc)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]

    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    check_consistency(cache)

    for key, value in cache.items():
        assert key == value


def test_eviction_count_is_exact():
    cache = LRUCache(10)
    per_thread = 500

    def worker(offset):
        for i in range(per_thread):
            cache.put((offset, i), i)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(4)]

    for t in threads:
        t.start()
    for t in threads:
        t.join()

    info = cache.info()
    assert info.size == 10
    assert info.evictions == 4 * per_thread - 10


def test_lock_timeout(cache_cls):
    cache = cache_cls(2, lock_timeout=0.05)
    cache.put(1, "a")

    locked = threading.Event()
    release = threading.Event()

    def hold_lock():
        with cache._lock:
            locked.set()
            release.wait(5)

    t = threading.Thread(target=hold_lock)
    t.start()
    locked.wait(5)

    try:
        t0 = time.monotonic()
        with pytest.raises(LockTimeoutError) as exc_info:
            cache.put(2, "b")
        assert time.monotonic() - t0 < 5

        with pytest.raises(TimeoutError):
            cache.get(1)
    finally:
        release.set()
        t.join()

    assert isinstance(exc_info.value, RecencyError)
    assert cache.keys() == [1]
    assert cache.put(2, "b") is None


def test_lock_is_reentrant_for_owner(cache_cls):
    cache = cache_cls(2, lock_timeout=0.05)

    with cache._lock:
        cache.put(1, "a")
        assert cache.get(1) == "a"
