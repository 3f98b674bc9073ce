# -*- coding: utf-8 -*-

import logging

import pytest

from recency import LRUCache, OrderedLRUCache
from recency.config import main as config_main


logging.getLogger("recency").setLevel(logging.DEBUG)


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path, monkeypatch):
    """Redirects config and log locations into a temporary home directory."""
    home = tmp_path / "home"
    home.mkdir()

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(home / ".cache"))

    yield home

    config_main._config_instances.clear()


@pytest.fixture(params=[LRUCache, OrderedLRUCache], ids=["arena", "ordered"])
def cache_cls(request):
    return request.param


def assert_consistent(cache: LRUCache) -> None:
    """Checks that the key table and the recency list hold exactly the same keys."""
    list_keys = [cache._entries.key(i) for i in cache._entries]

    assert len(list_keys) == len(set(list_keys))
    assert set(list_keys) == set(cache._table)
    assert len(cache._entries) == len(cache._table) <= cache.capacity

    for key, index in cache._table.items():
        assert cache._entries.key(index) == key


@pytest.fixture
def check_consistency():
    return assert_consistent
