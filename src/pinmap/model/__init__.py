"""pinmap value types: pins, parse results, viewports and their serializer."""
from __future__ import annotations

from pinmap.model.nodes import ATTRIBUTE_FIELDS, ErrorKind, LineError, ParseResult, Pin, Viewport
from pinmap.model.serializer import PinSerializer

__all__ = [
    "ATTRIBUTE_FIELDS",
    "ErrorKind",
    "LineError",
    "ParseResult",
    "Pin",
    "PinSerializer",
    "Viewport",
]
