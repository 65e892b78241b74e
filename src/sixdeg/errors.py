# src/sixdeg/errors.py

"""
Exception types shared across sixdeg.

  - IoFailure            : edge source could not be read (fatal)
  - MalformedInputError  : one edge item is not a pair of integers (skippable)
  - EmptyGraphError      : a summary was requested for a graph with no vertices
  - BfsTimeoutError      : a single BFS run exceeded its deadline

Errors raised inside pool workers travel back to the caller pickled, so the
ones with structured fields rebuild themselves from those fields.
"""

from __future__ import annotations

from typing import Optional


class SixDegError(Exception):
    """Base class for all sixdeg errors."""


class IoFailure(SixDegError, OSError):
    """The edge source is missing or unreadable."""


class MalformedInputError(SixDegError, ValueError):
    def __init__(self, line: object, reason: str, line_no: Optional[int] = None) -> None:
        self.line = line
        self.reason = reason
        self.line_no = line_no
        where = f"line {line_no}: " if line_no is not None else ""
        super().__init__(f"{where}{reason} ({line!r})")

    def __reduce__(self):
        return (type(self), (self.line, self.reason, self.line_no))


class EmptyGraphError(SixDegError, ValueError):
    """Raised when statistics are requested for a graph with zero vertices."""


class BfsTimeoutError(SixDegError, TimeoutError):
    def __init__(self, start: int, timeout: float) -> None:
        self.start = start
        self.timeout = timeout
        super().__init__(f"BFS from vertex {start} exceeded {timeout}s")

    def __reduce__(self):
        return (type(self), (self.start, self.timeout))
