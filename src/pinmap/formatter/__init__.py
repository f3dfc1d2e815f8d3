"""Canonical formatter module."""
from __future__ import annotations

from pinmap.formatter.formatter import PinFormatter, format_pins

__all__ = ["PinFormatter", "format_pins"]
