"""
This module contains the default configuration values and a function to return existing
config instances for a specified config_name.
"""

from __future__ import annotations

import threading

from packaging.version import Version

from .user import UserConfig, _DefaultsType
from ..utils.appdirs import get_conf_path


CONFIG_DIR_NAME = "recency"


# =============================================================================
#  Defaults
# =============================================================================

DEFAULTS_CONFIG: _DefaultsType = {
    "cache": {
        "capacity": 128,  # maximum number of entries
        "touch_on_contains": False,  # whether membership tests refresh recency
        "lock_timeout": 0.0,  # max wait for the cache lock in sec (0 = indefinitely)
    },
    "app": {
        "log_level": 20,  # log level for file and stderr, default: INFO
    },
}


KEY_SECTION_MAP = {"version": "main"}

for section_name, section_values in DEFAULTS_CONFIG.items():
    for key in section_values.keys():
        KEY_SECTION_MAP[key] = section_name


# If you want to *remove* or *rename* options, do a MAJOR update of the version so
# that obsolete options are dropped from existing files. Adding options or changing
# defaults only needs a MINOR update.
CONF_VERSION = Version("1.0")


# =============================================================================
# Factories
# =============================================================================


_config_instances: dict[str, UserConfig] = {}
_config_lock = threading.Lock()


def RecencyConfig(config_name: str) -> UserConfig:
    """
    Returns an existing config instance or creates a new one.

    :param config_name: Name of the config profile. A new config file will be created
        if none exists for the given config_name.
    :return: Config instance which saves any changes to the drive.
    """
    with _config_lock:
        try:
            return _config_instances[config_name]
        except KeyError:
            pass

        config_path = get_conf_path(CONFIG_DIR_NAME, f"{config_name}.ini")

        try:
            conf = UserConfig(
                config_path,
                defaults=DEFAULTS_CONFIG,
                version=CONF_VERSION,
                remove_obsolete=True,
            )
        except OSError:
            conf = UserConfig(
                config_path,
                defaults=DEFAULTS_CONFIG,
                version=CONF_VERSION,
                load=False,
            )

        _config_instances[config_name] = conf
        return conf


def forget_config(config_name: str) -> None:
    """
    Drops a config instance from the registry. The next call to :func:`RecencyConfig`
    reloads it from the drive.

    :param config_name: Name of the config profile.
    """
    with _config_lock:
        _config_instances.pop(config_name, None)
