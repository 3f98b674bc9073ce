# -*- coding: utf-8 -*-

import copy

import pytest
from packaging.version import Version

from recency.config.user import UserConfig


DEFAULTS_CONFIG = {
    "cache": {
        "capacity": 64,
        "touch_on_contains": False,
        "lock_timeout": 0.0,
        "name": "primary",
    },
    "app": {
        "log_level": 20,
    },
}

CONF_VERSION = Version("1.0.0")


@pytest.fixture
def defaults():
    return copy.deepcopy(DEFAULTS_CONFIG)


@pytest.fixture
def config(tmp_path, defaults):
    config_path = tmp_path / "test-config.ini"

    conf = UserConfig(
        str(config_path),
        defaults=defaults,
        version=CONF_VERSION,
        remove_obsolete=True,
    )

    yield conf

    conf.cleanup()
