#
# Copyright © Spyder Project Contributors
# Licensed under the terms of the MIT License
# (see spyder/__init__.py for details)

"""
This module provides user configuration file management, based on the config module of
the Spyder IDE. Values are stored in ini files and cast back to the type of their
default value when read.
"""

from __future__ import annotations

import ast
import os
import os.path as osp
import copy
import logging
import configparser as cp
from threading import RLock
from typing import Any, Dict

from packaging.version import Version


logger = logging.getLogger(__name__)

_DefaultsType = Dict[str, Dict[str, Any]]


class NoDefault:
    pass


class UserConfig(cp.ConfigParser):
    """
    A ConfigParser which is backed by an ini file and populated with typed defaults.
    This class is safe to use from different threads but must not be used from
    different processes!

    :param path: Configuration file will be saved to this path.
    :param defaults: Dictionary containing sections and their default options.
    :param load: Whether to load existing values from the file.
    :param version: Version of the configuration file.
    :param remove_obsolete: If `True`, values that were removed from the defaults are
        removed from the saved configuration file on major version changes.

    .. note:: The ``get`` and ``set`` arguments number and type differ from the
        reimplemented methods.
    """

    DEFAULT_SECTION_NAME = "main"

    def __init__(
        self,
        path: str,
        defaults: _DefaultsType | None = None,
        load: bool = True,
        version: Version = Version("0.0.0"),
        remove_obsolete: bool = False,
    ) -> None:
        super().__init__(interpolation=None)

        self._path = path
        self._dirname = osp.dirname(path)
        self._lock = RLock()

        self.default_config = copy.deepcopy(defaults) if defaults else {}
        self.default_config.setdefault(self.DEFAULT_SECTION_NAME, {})
        self.default_config[self.DEFAULT_SECTION_NAME]["version"] = str(version)

        # Values from the file, if any, override the defaults.
        self.reset_to_defaults(save=False)

        if load:
            self._load_from_ini(self.config_path)

            try:
                old_version = self.get_version()
            except (cp.NoOptionError, ValueError):
                old_version = version

            if version != old_version:
                self.apply_configuration_patches(old_version)

                if remove_obsolete and version.major > old_version.major:
                    self.remove_deprecated_options(save=False)

                self.set_version(version, save=False)

            self.save()

    @property
    def config_path(self) -> str:
        """The ini file where this configuration is stored."""
        return self._path

    # --- Helpers ----------------------------------------------------------------------

    def _set(self, section: str, option: str, value: Any) -> None:
        if not self.has_section(section):
            self.add_section(section)
        if not isinstance(value, str):
            value = repr(value)

        super().set(section, option, value)

    def _load_from_ini(self, path: str) -> None:
        with self._lock:
            try:
                self.read(path, encoding="utf-8")
            except cp.MissingSectionHeaderError:
                logger.error("Config file %s contains no section headers", path)

    def save(self) -> None:
        """Save config into the associated file."""
        with self._lock:
            os.makedirs(self._dirname, exist_ok=True)

            with open(self.config_path, "w", encoding="utf-8") as configfile:
                self.write(configfile)

    def remove_deprecated_options(self, save: bool = True) -> None:
        """
        Remove options which are present in the file but not in defaults.

        :param save: Whether to save the changes to the drive.
        """
        with self._lock:
            for section in self.sections():
                for option, _ in self.items(section, raw=True):
                    if self.get_default(section, option) is NoDefault:
                        super().remove_option(section, option)
                if len(self.items(section, raw=True)) == 0:
                    super().remove_section(section)

            if save:
                self.save()

    def apply_configuration_patches(self, old_version: Version) -> None:
        """
        Apply any patch to configuration values on version changes. To be reimplemented
        if patches to configuration values are needed.

        :param old_version: Old config version to patch.
        """
        pass

    # --- Public API -------------------------------------------------------------------

    def get_version(self) -> Version:
        """
        :returns: Configuration (not application!) version.
        """
        with self._lock:
            return Version(self.get(self.DEFAULT_SECTION_NAME, "version"))

    def set_version(self, version: Version, save: bool = True) -> None:
        """
        Set configuration (not application!) version.

        :param version: New version to set.
        :param save: Whether to save changes to drive.
        """
        with self._lock:
            self.set(self.DEFAULT_SECTION_NAME, "version", str(version), save=save)

    def reset_to_defaults(self, section: str | None = None, save: bool = True) -> None:
        """
        Reset config to default values.

        :param section: The section to reset. If not given, reset all sections.
        :param save: Whether to save the changes to the drive.
        """
        with self._lock:
            for sec, options in self.default_config.items():
                if section is None or section == sec:
                    for option, value in options.items():
                        self._set(sec, option, value)
            if save:
                self.save()

    def get_default(self, section: str, option: str) -> Any:
        """
        Get default value for a given ``section`` and ``option``.

        :param section: Section to search for option.
        :param option: Config option.
        :returns: Default value or :class:`NoDefault` if section / option do not exist.
        """
        with self._lock:
            return self.default_config.get(section, {}).get(option, NoDefault)

    def get(self, section: str, option: str, default: Any = NoDefault) -> Any:  # type: ignore
        """
        Get an option, cast to the type of its default value.

        :param section: Config section to search in.
        :param option: Config option to get.
        :param default: Default value to fall back to if not present.
        :returns: Config value.
        :raises cp.NoSectionError: if the section does not exist.
        :raises cp.NoOptionError: if the option does not exist and no default is given.
        """
        with self._lock:
            if not self.has_section(section):
                if default is NoDefault:
                    raise cp.NoSectionError(section)
                self.add_section(section)

            if not self.has_option(section, option):
                if default is NoDefault:
                    raise cp.NoOptionError(option, section)
                self.set(section, option, default)
                return default

            raw_value: str = super().get(section, option, raw=True)
            default_value = self.get_default(section, option)
            value: Any

            if isinstance(default_value, str):
                value = raw_value
            else:
                try:
                    value = ast.literal_eval(raw_value)
                except (SyntaxError, ValueError):
                    value = raw_value

            if default_value is not NoDefault and type(default_value) is not type(value):
                logger.error(
                    "Inconsistent config type for [%s][%s]. Expected %s but got %s.",
                    section,
                    option,
                    type(default_value).__name__,
                    type(value).__name__,
                )

            return value

    def set(self, section: str, option: str, value: Any, save: bool = True) -> None:  # type: ignore
        """
        Set an ``option`` on a given ``section``. Options without a default take the
        type of their first value.

        :param section: Config section.
        :param option: Config option to set.
        :param value: Config value.
        :param save: Whether to save the changes to the drive.
        :raises ValueError: if the value type does not match the type of the default.
        """
        with self._lock:
            default_value = self.get_default(section, option)

            if default_value is NoDefault:
                default_value = value
                self.default_config.setdefault(section, {})[option] = value

            if isinstance(default_value, float) and type(value) is int:
                value = float(value)

            if type(default_value) is not type(value):
                raise ValueError(
                    f"Inconsistent type for config value [{section}][{option}]. "
                    f"Expected {default_value.__class__.__name__} but "
                    f"got {value.__class__.__name__}."
                )

            self._set(section, option, value)

            if save:
                self.save()

    def cleanup(self) -> None:
        """Remove the config file and reset to defaults."""
        with self._lock:
            self.reset_to_defaults(save=False)

            try:
                os.remove(self.config_path)
            except FileNotFoundError:
                pass
