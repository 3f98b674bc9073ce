# -*- coding: utf-8 -*-
"""
This module parses access traces and replays them against a cache. This is used to
estimate hit ratios for a given capacity before choosing one.

A trace is a text file with one access per line:

    get KEY            look up KEY
    put KEY VALUE      store VALUE under KEY
    KEY                read-through access: look up KEY and store it on a miss

Blank lines and lines starting with "#" are ignored. A "get" or "put" on its own is
malformed, not a read-through key.
"""

from __future__ import annotations

import enum
from typing import Iterable, Iterator, NamedTuple, Optional, Protocol

from .core import MISS, CacheInfo
from .errors import TraceError


__all__ = ["Op", "TraceOp", "ReplayResult", "parse_trace", "replay_trace"]


class Op(enum.Enum):
    """Type of access in a trace"""

    Get = "get"
    Put = "put"
    ReadThrough = "read-through"


class TraceOp(NamedTuple):
    op: Op
    key: str
    value: Optional[str]
    lineno: int


class ReplayResult(NamedTuple):
    """Outcome of a replayed trace

    :param requests: Number of replayed accesses.
    :param info: Cache statistics after the replay.
    """

    requests: int
    info: CacheInfo


class _Cache(Protocol):
    def get(self, key, default=MISS): ...

    def put(self, key, value): ...

    def info(self) -> CacheInfo: ...


def parse_trace(lines: Iterable[str]) -> Iterator[TraceOp]:
    """
    Parses trace lines lazily.

    :param lines: Lines of the trace, with or without line endings.
    :returns: Iterator over parsed accesses.
    :raises TraceError: when reaching a malformed line.
    """
    for lineno, line in enumerate(lines, start=1):
        line = line.strip()

        if not line or line.startswith("#"):
            continue

        parts = line.split(maxsplit=2)
        command = parts[0].lower()

        if len(parts) == 1 and command not in ("get", "put"):
            yield TraceOp(Op.ReadThrough, parts[0], None, lineno)
        elif command == "get" and len(parts) == 2:
            yield TraceOp(Op.Get, parts[1], None, lineno)
        elif command == "put" and len(parts) == 3:
            yield TraceOp(Op.Put, parts[1], parts[2], lineno)
        else:
            raise TraceError(
                "Malformed trace",
                f"Cannot parse line {lineno}: '{line}'",
                lineno=lineno,
            )


def replay_trace(cache: _Cache, ops: Iterable[TraceOp]) -> ReplayResult:
    """
    Replays accesses against a cache. Read-through accesses store the key itself as
    value on a miss.

    :param cache: Cache to replay against. Statistics of the cache accumulate.
    :param ops: Parsed accesses.
    :returns: Number of replayed accesses and the cache statistics.
    """
    requests = 0

    for trace_op in ops:
        requests += 1

        if trace_op.op is Op.Put:
            cache.put(trace_op.key, trace_op.value)
        elif cache.get(trace_op.key) is MISS and trace_op.op is Op.ReadThrough:
            cache.put(trace_op.key, trace_op.key)

    return ReplayResult(requests, cache.info())
