"""Error types raised while parsing a single annotation line.

The parser catches every ``MapSyntaxError`` at line granularity and
records it as a ``LineError``, so none of these escape ``parse``.  The
messages are written to be shown to users verbatim.
"""
from __future__ import annotations

from typing import ClassVar

from pinmap.model.nodes import ErrorKind, LineError


class MapSyntaxError(Exception):
    """Base class for all per-line parse failures.

    Parameters
    ----------
    message:
        Human-readable description of the problem.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.FORMAT

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def at_line(self, line: int, source: str = "") -> LineError:
        """Return a ``LineError`` recording this failure at ``line``."""
        return LineError(line=line, kind=self.kind, message=self.message, source=source)


class FormatError(MapSyntaxError):
    """The outer bracket or coordinate-pair shape was not recognized."""

    kind = ErrorKind.FORMAT


class CoordinateRangeError(MapSyntaxError):
    """Coordinates are numeric but outside the valid range."""

    kind = ErrorKind.COORDINATE_RANGE


class GridCodeError(MapSyntaxError):
    """A grid code failed validation, short-code recovery or decoding.

    Parameters
    ----------
    reason:
        The underlying cause, usually the geocoding library's message.
    code:
        The offending code, when known.
    """

    kind = ErrorKind.GRID_CODE

    def __init__(self, reason: str, code: str = "") -> None:
        super().__init__(f"Invalid Plus Code: {reason}")
        self.reason = reason
        self.code = code


class AttributeSyntaxError(MapSyntaxError):
    """The trailing brace block is not a valid JSON object."""

    kind = ErrorKind.ATTRIBUTE_SYNTAX
