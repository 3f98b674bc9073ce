# -*- coding: utf-8 -*-

import os
from typing import List, TypeVar

from .main import RecencyConfig, forget_config, CONFIG_DIR_NAME
from ..utils.appdirs import get_conf_path


__all__ = [
    "RecencyConfig",
    "list_configs",
    "remove_configuration",
    "validate_config_name",
]


_C = TypeVar("_C", bound=str)


def list_configs() -> List[str]:
    """
    Lists all config profiles.

    :returns: A list of the names of all currently existing config files.
    """
    configs = []
    for file in os.listdir(get_conf_path(CONFIG_DIR_NAME)):
        if file.endswith(".ini"):
            configs.append(os.path.splitext(os.path.basename(file))[0])

    return sorted(configs)


def remove_configuration(config_name: str) -> None:
    """
    Removes the config file associated with the given profile.

    :param config_name: The configuration to remove.
    """
    RecencyConfig(config_name).cleanup()
    forget_config(config_name)


def validate_config_name(string: _C) -> _C:
    """
    Validates that the config name does not contain any whitespace.

    :param string: String to validate.
    :returns: The input value.
    :raises ValueError: if the config name contains whitespace.
    """
    if len(string.split()) != 1 or string.strip() != string:
        raise ValueError("Config name may not contain any whitespace")

    return string
