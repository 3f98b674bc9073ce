# -*- coding: utf-8 -*-

import logging
import os
from logging.handlers import RotatingFileHandler

import pytest

from recency import LRUCache
from recency.config import RecencyConfig
from recency.logging import setup_logging
from recency.utils.appdirs import get_log_path


@pytest.fixture
def handlers():
    created = []
    yield created

    root_logger = logging.getLogger("recency")
    for handler in created:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(logging.DEBUG)


def test_setup_logging(handlers):
    RecencyConfig("test-config").set("app", "log_level", logging.DEBUG)

    handlers.extend(setup_logging("test-config", stderr=False))

    assert len(handlers) == 1
    assert isinstance(handlers[0], RotatingFileHandler)

    cache = LRUCache(1)
    cache.put(1, "a")
    cache.put(2, "b")
    handlers[0].flush()

    logfile = get_log_path("recency", "test-config.log")
    assert os.path.isfile(logfile)

    with open(logfile) as f:
        assert "Evicted least recently used key 1" in f.read()


def test_setup_logging_level_override(handlers):
    handlers.extend(setup_logging("test-config", file=False, level=logging.WARNING))

    assert len(handlers) == 1
    assert handlers[0].level == logging.WARNING
    assert logging.getLogger("recency").level == logging.WARNING


def test_eviction_logged(caplog):
    cache = LRUCache(1)

    with caplog.at_level(logging.DEBUG, logger="recency.cache"):
        cache.put(1, "a")
        cache.put(2, "b")
        cache.clear()

    messages = [r.getMessage() for r in caplog.records]
    assert "Evicted least recently used key 1" in messages
    assert "Cache cleared" in messages
