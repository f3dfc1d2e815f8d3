"""Canonical formatter: pins → annotation text.

``PinFormatter`` renders pins back into the line syntax the parser
reads, one line per pin:

- ``[lat, lng]`` using Python's shortest round-tripping float repr, or
  ``[GRIDCODE]`` for pins decoded from a grid code
- the label, always quoted (double quotes unless the label contains one)
- a JSON attribute block with ``color``, ``icon``, ``group`` and
  ``description`` in that order, when any are present

Comments are not preserved: a description that came from a trailing
comment is written into the attribute block instead.  Parsing the output
yields pins equal to the input, provided labels do not contain unbalanced
braces or both quote characters.

Usage
-----
::

    from pinmap.formatter import PinFormatter
    from pinmap.parser import parse

    canonical = PinFormatter().format(parse(source).pins)
"""
from __future__ import annotations

import json
from collections.abc import Iterable

from pinmap.model.nodes import Pin


class PinFormatter:
    """Renders pins as canonical annotation lines."""

    def format(self, pins: Iterable[Pin]) -> str:  # noqa: A003
        """Return canonical annotation text ending with a newline.

        An empty pin list formats to an empty string.
        """
        lines = [self.format_pin(pin) for pin in pins]
        if not lines:
            return ""
        return "\n".join(lines) + "\n"

    def format_pin(self, pin: Pin) -> str:
        """Return the canonical line for a single pin."""
        parts = [self._location(pin)]
        if pin.label is not None:
            parts.append(self._quote(pin.label))
        attributes = pin.attributes()
        if attributes:
            parts.append(json.dumps(attributes, ensure_ascii=False))
        return " ".join(parts)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _location(self, pin: Pin) -> str:
        if pin.grid_code is not None:
            return f"[{pin.grid_code}]"
        return f"[{pin.lat!r}, {pin.lng!r}]"

    def _quote(self, label: str) -> str:
        quote = "'" if '"' in label and "'" not in label else '"'
        return f"{quote}{label}{quote}"


def format_pins(pins: Iterable[Pin]) -> str:
    """Format ``pins`` to canonical annotation text.

    Example
    -------
    ::

        format_pins([Pin(40.7589, -73.9851, label="Times Square")])
        # '[40.7589, -73.9851] "Times Square"\\n'
    """
    return PinFormatter().format(pins)
