# -*- coding: utf-8 -*-

import logging

import pytest
from click.testing import CliRunner

from recency import __version__
from recency.cli import main
from recency.config import RecencyConfig, list_configs


TRACE = """\
# read-through accesses
a
b
a
c
b
"""


def test_help() -> None:
    """Test help output without args and with --help arg."""
    runner = CliRunner()

    result_no_arg = runner.invoke(main)
    result_help_arg = runner.invoke(main, ["--help"])

    assert result_help_arg.exit_code == 0, result_help_arg.output
    assert result_help_arg.output.startswith("Usage: main [OPTIONS] COMMAND [ARGS]")
    assert "replay" in result_help_arg.output
    assert "Usage: main [OPTIONS] COMMAND [ARGS]" in result_no_arg.output


def test_version() -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_replay(tmp_path) -> None:
    trace = tmp_path / "trace.txt"
    trace.write_text(TRACE)

    runner = CliRunner()
    result = runner.invoke(main, ["replay", str(trace), "--capacity", "2"])

    assert result.exit_code == 0, result.output

    lines = [line.split() for line in result.output.splitlines()]
    stats = {" ".join(parts[:-1]).rstrip(":"): parts[-1] for parts in lines}

    assert stats == {
        "Capacity": "2",
        "Requests": "5",
        "Hits": "1",
        "Misses": "4",
        "Evictions": "2",
        "Hit ratio": "20.0%",
        "Final size": "2",
    }


def test_replay_stdin() -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["replay", "-", "-n", "1"], input="a\na\nb\n")

    assert result.exit_code == 0, result.output
    assert "50.0%" not in result.output
    assert "33.3%" in result.output


def test_replay_verbose(tmp_path) -> None:
    trace = tmp_path / "trace.txt"
    trace.write_text(TRACE)

    runner = CliRunner()
    result = runner.invoke(main, ["replay", str(trace), "-n", "2", "--verbose"])

    assert result.exit_code == 0, result.output
    assert "Hit ratio" in result.output


def test_replay_verbose_restores_log_level(tmp_path) -> None:
    trace = tmp_path / "trace.txt"
    trace.write_text(TRACE)

    logger = logging.getLogger("recency")
    level = logger.level
    logger.setLevel(logging.WARNING)

    try:
        handlers = list(logger.handlers)
        result = CliRunner().invoke(main, ["replay", str(trace), "-n", "2", "-v"])

        assert result.exit_code == 0, result.output
        assert logger.level == logging.WARNING
        assert logger.handlers == handlers
    finally:
        logger.setLevel(level)


def test_replay_uses_config_capacity(tmp_path) -> None:
    RecencyConfig("small").set("cache", "capacity", 1)

    trace = tmp_path / "trace.txt"
    trace.write_text(TRACE)

    runner = CliRunner()
    result = runner.invoke(main, ["replay", str(trace), "-c", "small"])

    assert result.exit_code == 0, result.output
    assert "Evictions:" in result.output
    assert result.output.splitlines()[0].split() == ["Capacity:", "1"]


def test_replay_invalid_capacity(tmp_path) -> None:
    trace = tmp_path / "trace.txt"
    trace.write_text(TRACE)

    runner = CliRunner()
    result = runner.invoke(main, ["replay", str(trace), "-n", "0"])

    assert result.exit_code == 1
    assert "Invalid capacity" in result.output


def test_replay_malformed_trace(tmp_path) -> None:
    trace = tmp_path / "trace.txt"
    trace.write_text("a\nput b\n")

    runner = CliRunner()
    result = runner.invoke(main, ["replay", str(trace), "-n", "2"])

    assert result.exit_code == 1
    assert "line 2" in result.output


def test_invalid_config_name(tmp_path) -> None:
    trace = tmp_path / "trace.txt"
    trace.write_text(TRACE)

    runner = CliRunner()
    result = runner.invoke(main, ["replay", str(trace), "-c", "my config"])

    assert result.exit_code == 1
    assert "whitespace" in result.output


def test_config_get_set() -> None:
    runner = CliRunner()

    result = runner.invoke(main, ["config", "get", "capacity", "-c", "test-config"])
    assert result.exit_code == 0, result.output
    assert result.output == "128\n"

    result = runner.invoke(
        main, ["config", "set", "capacity", "512", "-c", "test-config"]
    )
    assert result.exit_code == 0, result.output

    result = runner.invoke(
        main, ["config", "set", "touch_on_contains", "True", "-c", "test-config"]
    )
    assert result.exit_code == 0, result.output

    conf = RecencyConfig("test-config")
    assert conf.get("cache", "capacity") == 512
    assert conf.get("cache", "touch_on_contains") is True
    assert "test-config" in list_configs()


def test_config_set_invalid() -> None:
    runner = CliRunner()

    result = runner.invoke(main, ["config", "set", "lock_timeout", "many"])
    assert result.exit_code == 1
    assert "Inconsistent type" in result.output

    result = runner.invoke(main, ["config", "set", "unknown", "1"])
    assert result.exit_code == 1
    assert "not a valid configuration key" in result.output

    result = runner.invoke(main, ["config", "set", "version", "2.0"])
    assert result.exit_code == 1


@pytest.mark.parametrize("value", ["0", "-5", "many", "True"])
def test_config_set_invalid_capacity(value) -> None:
    runner = CliRunner()

    result = runner.invoke(main, ["config", "set", "capacity", value])

    assert result.exit_code == 1
    assert "Invalid capacity" in result.output
    assert RecencyConfig("recency").get("cache", "capacity") == 128


def test_config_show() -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["config", "show"])

    assert result.exit_code == 0, result.output
    assert "[cache]" in result.output
    assert "capacity = 128" in result.output
