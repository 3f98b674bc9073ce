"""This module defines log formats and sets up log handlers for the command line tool."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from typing import Sequence

from .config import RecencyConfig
from .utils.appdirs import get_log_path


__all__ = [
    "LOG_FMT_LONG",
    "LOG_FMT_SHORT",
    "setup_logging",
]

LOG_FMT_LONG = logging.Formatter(
    fmt="%(asctime)s %(module)s %(levelname)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
LOG_FMT_SHORT = logging.Formatter(fmt="%(message)s")


def setup_logging(
    config_name: str,
    file: bool = True,
    stderr: bool = True,
    level: int | None = None,
) -> Sequence[logging.Handler]:
    """
    Attaches handlers to the "recency" logger. The log level is taken from the config
    profile unless given explicitly.

    :param config_name: Config name to determine the log level and log file name.
    :param file: Whether to log to a rotating file in the user log directory.
    :param stderr: Whether to log to stderr.
    :param level: Log level which overrides the configured level.
    :returns: Log handlers.
    """
    if level is None:
        level = RecencyConfig(config_name).get("app", "log_level")

    root_logger = logging.getLogger("recency")
    root_logger.setLevel(level)

    handlers: list[logging.Handler] = []

    # Log to file.
    if file:
        logfile = get_log_path("recency", f"{config_name}.log")
        log_handler_file = RotatingFileHandler(logfile, maxBytes=10**7, backupCount=1)
        log_handler_file.setFormatter(LOG_FMT_LONG)
        log_handler_file.setLevel(level)
        root_logger.addHandler(log_handler_file)
        handlers.append(log_handler_file)

    # Log to stderr if requested.
    if stderr:
        log_handler_stream = logging.StreamHandler()
        log_handler_stream.setFormatter(LOG_FMT_SHORT)
        log_handler_stream.setLevel(level)
        root_logger.addHandler(log_handler_stream)
        handlers.append(log_handler_stream)

    return handlers
