"""
Platform dependent locations for config files and logs. On macOS these live in
"~/Library", elsewhere the XDG base directories are used with their standard fallbacks
in the home directory.
"""

# system imports
import os
import platform
from os import path as osp
from typing import Dict, NamedTuple, Optional


__all__ = [
    "get_home_dir",
    "get_conf_path",
    "get_cache_path",
    "get_log_path",
]


class _BaseDir(NamedTuple):
    macos: str
    xdg_var: str
    xdg_fallback: str


# Logs have no XDG location of their own and are kept with the cache.
_BASE_DIRS: Dict[str, _BaseDir] = {
    "config": _BaseDir("Library/Application Support", "XDG_CONFIG_HOME", ".config"),
    "cache": _BaseDir("Library/Caches", "XDG_CACHE_HOME", ".cache"),
    "log": _BaseDir("Library/Logs", "XDG_CACHE_HOME", ".cache"),
}


def get_home_dir() -> str:
    """
    Returns user home directory as expanded from "~".

    :raises RuntimeError: if the home directory cannot be determined.
    """
    path = osp.expanduser("~")

    if not osp.isdir(path):
        raise RuntimeError(
            "Please set the environment variable HOME to your user/home directory."
        )

    return path


def _user_path(
    kind: str, subfolder: Optional[str], filename: Optional[str], create: bool
) -> str:
    """
    Resolves a path inside one of the user base directories.

    :param kind: Key of :data:`_BASE_DIRS`.
    :param subfolder: Folder to append to the base directory.
    :param filename: File name to append after the subfolder.
    :param create: Whether to create the base directory and subfolder if missing.
    """
    base = _BASE_DIRS[kind]

    if platform.system() == "Darwin":
        folder = osp.join(get_home_dir(), *base.macos.split("/"))
    else:
        folder = os.environ.get(base.xdg_var) or osp.join(
            get_home_dir(), base.xdg_fallback
        )

    if subfolder:
        folder = osp.join(folder, subfolder)

    if create:
        os.makedirs(folder, exist_ok=True)

    return osp.join(folder, filename) if filename else folder


def get_conf_path(
    subfolder: Optional[str] = None, filename: Optional[str] = None, create: bool = True
) -> str:
    """
    Returns the user config path, "~/Library/Application Support" on macOS and
    "$XDG_CONFIG_HOME" or "~/.config" elsewhere.

    :param subfolder: The subfolder for the app.
    :param filename: The filename to append for the app.
    :param create: If ``True``, the folder ``subfolder`` will be created on-demand.
    """
    return _user_path("config", subfolder, filename, create)


def get_cache_path(
    subfolder: Optional[str] = None, filename: Optional[str] = None, create: bool = True
) -> str:
    """
    Returns the user cache path, "~/Library/Caches" on macOS and "$XDG_CACHE_HOME" or
    "~/.cache" elsewhere. Arguments as for :func:`get_conf_path`.
    """
    return _user_path("cache", subfolder, filename, create)


def get_log_path(
    subfolder: Optional[str] = None, filename: Optional[str] = None, create: bool = True
) -> str:
    """
    Returns the user log path, "~/Library/Logs" on macOS and the cache path elsewhere.
    Arguments as for :func:`get_conf_path`.
    """
    return _user_path("log", subfolder, filename, create)
