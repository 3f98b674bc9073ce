# -*- coding: utf-8 -*-
"""
This module defines the recency command line tool. Imports of the cache and config
modules are deferred to the commands that require them in order to reduce startup time.
"""

# system imports
import sys
import functools
from typing import Callable, Optional, TextIO

# external imports
import click

# local imports
from . import __version__
from .utils import cli


def convert_api_errors(func: Callable) -> Callable:
    """
    Decorator that catches a RecencyError and prints a formatted error message to
    stdout before exiting. Calls ``sys.exit(1)`` after printing the error to stdout.
    """

    from .errors import RecencyError

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except RecencyError as exc:
            cli.warn(str(exc))
            sys.exit(1)

    return wrapper


class ConfigName(click.ParamType):
    """A command line parameter representing a config profile name"""

    name = "config"

    def convert(
        self,
        value: Optional[str],
        param: Optional[click.Parameter],
        ctx: Optional[click.Context],
    ) -> Optional[str]:
        if value is None:
            return value

        from .config import validate_config_name

        try:
            return validate_config_name(value)
        except ValueError:
            raise cli.CliException("Configuration name may not contain any whitespace")


config_option = click.option(
    "-c",
    "--config-name",
    default="recency",
    type=ConfigName(),
    is_eager=True,
    expose_value=True,
    help="Run command with the given configuration.",
)


@click.group(help="Least recently used cache tools.")
@click.version_option(version=__version__, message="%(version)s")
def main() -> None:
    pass


@main.command(
    help="""
Replay an access trace against an LRU cache and print hit and eviction statistics.

Each line of TRACE is either "get KEY", "put KEY VALUE" or a bare "KEY" for a
read-through access which stores the key on a miss. Blank lines and lines starting with
"#" are ignored. Use "-" to read from stdin.
""",
)
@click.argument("trace", type=click.File("r"))
@click.option(
    "--capacity",
    "-n",
    type=int,
    default=None,
    help="Cache capacity. Defaults to the capacity of the configuration.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Print evictions to stderr.",
)
@config_option
@convert_api_errors
def replay(
    trace: TextIO, capacity: Optional[int], verbose: bool, config_name: str
) -> None:
    import logging
    from .cache import LRUCache
    from .logging import setup_logging
    from .trace import parse_trace, replay_trace

    if capacity is None:
        cache = LRUCache.from_config(config_name)
    else:
        cache = LRUCache(capacity)

    root_logger = logging.getLogger("recency")
    previous_level = root_logger.level
    handlers = []

    if verbose:
        handlers = setup_logging(config_name, file=False, level=logging.DEBUG)

    try:
        requests, info = replay_trace(cache, parse_trace(trace))
    finally:
        for handler in handlers:
            root_logger.removeHandler(handler)
        root_logger.setLevel(previous_level)

    cli.echo_fields(
        [
            ("Capacity", info.capacity),
            ("Requests", requests),
            ("Hits", info.hits),
            ("Misses", info.misses),
            ("Evictions", info.evictions),
            ("Hit ratio", f"{info.hit_ratio:.1%}"),
            ("Final size", info.size),
        ]
    )


@main.group(help="Direct access to config values.")
def config():
    pass


def _section_for_key(key: str) -> str:
    from .config.main import KEY_SECTION_MAP

    try:
        return KEY_SECTION_MAP[key]
    except KeyError:
        raise cli.CliException(f"'{key}' is not a valid configuration key.")


@config.command(name="get", help="Print the value of a given configuration key.")
@click.argument("key")
@config_option
def config_get(key: str, config_name: str) -> None:
    from .config import RecencyConfig

    section = _section_for_key(key)
    cli.echo(str(RecencyConfig(config_name).get(section, key)))


@config.command(
    name="set",
    help="""
Update configuration with a value for the given key.

Values will be cast to the type of the default value, raising an error where this is not
possible. For instance, setting the capacity to "many" will fail.
""",
)
@click.argument("key")
@click.argument("value")
@config_option
@convert_api_errors
def config_set(key: str, value: str, config_name: str) -> None:
    import ast
    from .config import RecencyConfig
    from .config.main import DEFAULTS_CONFIG
    from .core import validate_capacity

    section = _section_for_key(key)

    if key == "version":
        raise cli.CliException("The config version cannot be changed.")

    if isinstance(DEFAULTS_CONFIG[section][key], str):
        py_value = value
    else:
        try:
            py_value = ast.literal_eval(value)
        except (SyntaxError, ValueError):
            py_value = value

    if key == "capacity":
        validate_capacity(py_value)

    try:
        RecencyConfig(config_name).set(section, key, py_value)
    except ValueError as e:
        raise cli.CliException(e.args[0])

    cli.ok(f"Set {key} to {py_value!r}")


@config.command(name="show", help="Show all config keys and values")
@config_option
def config_show(config_name: str) -> None:
    import io
    from .config import RecencyConfig

    conf = RecencyConfig(config_name)

    with io.StringIO() as fp:
        conf.write(fp)
        click.echo(fp.getvalue())
