# -*- coding: utf-8 -*-
"""
This module contains the recency list which backs :class:`recency.cache.LRUCache`.

Nodes live in an arena of parallel lists and are addressed by stable integer indices
instead of object references. Slots 0 and 1 are the head and tail sentinels, so linking
and unlinking never needs to special-case the ends of the list. Released slots are kept
on a free-list and reused by later insertions.

The list itself is not thread-safe. Callers must serialize access.
"""

from __future__ import annotations

from typing import Any, Iterator, Tuple


__all__ = ["RecencyList", "HEAD", "TAIL", "NIL"]


HEAD = 0
TAIL = 1
NIL = -1


class RecencyList:
    """Doubly linked list of key / value nodes, ordered from most recently used (head)
    to least recently used (tail). All operations are O(1)."""

    def __init__(self) -> None:
        self._keys: list[Any] = []
        self._values: list[Any] = []
        self._prev: list[int] = []
        self._next: list[int] = []
        self._free: list[int] = []
        self._length = 0
        self.clear()

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[int]:
        """Yields the indices of live nodes from head to tail."""
        index = self._next[HEAD]
        while index != TAIL:
            yield index
            index = self._next[index]

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(length={self._length}, slots={self.slots})>"

    @property
    def slots(self) -> int:
        """Number of allocated node slots, live or free, excluding the sentinels."""
        return len(self._keys) - 2

    # ---- structural operations -------------------------------------------------------

    def push_front(self, index: int) -> None:
        """
        Links an unlinked node directly after the head sentinel.

        :param index: Node index.
        """
        first = self._next[HEAD]
        self._prev[index] = HEAD
        self._next[index] = first
        self._prev[first] = index
        self._next[HEAD] = index
        self._length += 1

    def unlink(self, index: int) -> None:
        """
        Removes a node from its current position by joining its neighbours. The node's
        slot stays allocated.

        :param index: Node index.
        """
        prev_index = self._prev[index]
        next_index = self._next[index]
        self._next[prev_index] = next_index
        self._prev[next_index] = prev_index
        self._prev[index] = NIL
        self._next[index] = NIL
        self._length -= 1

    def move_to_front(self, index: int) -> None:
        """
        Marks a node as most recently used.

        :param index: Node index.
        """
        if self._next[HEAD] != index:
            self.unlink(index)
            self.push_front(index)

    def insert(self, key: Any, value: Any) -> int:
        """
        Stores a new node and links it at the head. Free slots are reused before the
        arena grows.

        :param key: Entry key.
        :param value: Entry value.
        :returns: Index of the new node.
        """
        if self._free:
            index = self._free.pop()
            self._keys[index] = key
            self._values[index] = value
        else:
            index = len(self._keys)
            self._keys.append(key)
            self._values.append(value)
            self._prev.append(NIL)
            self._next.append(NIL)

        self.push_front(index)
        return index

    def remove(self, index: int) -> Tuple[Any, Any]:
        """
        Unlinks a node and releases its slot. References to the key and value are
        dropped from the arena.

        :param index: Node index.
        :returns: The removed key and value.
        """
        self.unlink(index)
        key = self._keys[index]
        value = self._values[index]
        self._keys[index] = None
        self._values[index] = None
        self._free.append(index)
        return key, value

    def tail(self) -> int | None:
        """
        :returns: Index of the least recently used node or None if the list is empty.
        """
        index = self._prev[TAIL]
        return None if index == HEAD else index

    def clear(self) -> None:
        """Releases all nodes and shrinks the arena back to the two sentinels."""
        self._keys = [None, None]
        self._values = [None, None]
        self._prev = [NIL, HEAD]
        self._next = [TAIL, NIL]
        self._free = []
        self._length = 0

    # ---- node access -----------------------------------------------------------------

    def key(self, index: int) -> Any:
        return self._keys[index]

    def value(self, index: int) -> Any:
        return self._values[index]

    def set_value(self, index: int, value: Any) -> None:
        self._values[index] = value
