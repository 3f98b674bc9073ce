# -*- coding: utf-8 -*-
"""
This module defines the error classes raised by recency. It should be kept free of
heavy imports.

All errors inherit from :class:`RecencyError` which has title and message attributes
to display the error to the user. A cache miss is not an error: lookups of absent keys
return :data:`recency.core.MISS` or a caller supplied default instead.
"""


class RecencyError(Exception):
    """Base class for recency errors

    :param title: A short description of the error type. This can be used in a CLI to
        give a short error summary.
    :param message: A more verbose description which can include instructions on how to
        proceed to fix the error.
    """

    def __init__(self, title: str, message: str = "") -> None:
        super().__init__(title, message)
        self.title = title
        self.message = message

    def __str__(self) -> str:
        if self.message:
            return ". ".join([self.title, self.message])
        return self.title


class InvalidCapacityError(RecencyError, ValueError):
    """Raised when a cache is constructed with a capacity smaller than one or with a
    capacity which is not an integer."""


class LockTimeoutError(RecencyError, TimeoutError):
    """Raised when a cache with a bounded lock wait cannot acquire its lock in time.
    The cache is left unchanged."""


class TraceError(RecencyError):
    """Raised when an access trace contains a malformed line.

    :param lineno: Line number of the malformed line, starting at 1.
    """

    def __init__(self, title: str, message: str = "", lineno: int = 0) -> None:
        super().__init__(title, message)
        self.lineno = lineno
