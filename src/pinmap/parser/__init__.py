"""Annotation parser module.

Exports the ``Parser`` class, the ``parse`` convenience function, and
the per-line error types.
"""
from __future__ import annotations

from pinmap.errors import (
    AttributeSyntaxError,
    CoordinateRangeError,
    FormatError,
    GridCodeError,
    MapSyntaxError,
)
from pinmap.parser.parser import Parser, parse

__all__ = [
    "Parser",
    "parse",
    "MapSyntaxError",
    "FormatError",
    "CoordinateRangeError",
    "GridCodeError",
    "AttributeSyntaxError",
]
