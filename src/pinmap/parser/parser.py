"""Line-oriented parser for map annotation text.

Each non-blank, non-comment line describes one pin::

    [40.7589, -73.9851] Times Square {"color": "red", "icon": "star"}
    [849VCWC8+R9] Googleplex # grid code with a comment
    [CWC8+R9 "Short code"] {"group": "campus"}

Grammar (informal)::

    line         := bracket-expr trailer? comment?
    bracket-expr := '[' content ']'
    content      := coord-pair | grid-code (ws label-fragment)?
    coord-pair   := number ',' number
    grid-code    := alnum{4,} '+' alnum{2,}
    trailer      := label-text? json-object?
    comment      := '#' any-text-to-end-of-line

Error recovery
--------------
Every line is parsed in isolation.  A line that fails raises a
``MapSyntaxError`` internally; the parser records it as a ``LineError``
numbered by the line's position among the non-blank, non-comment lines
and moves on.  ``parse`` itself never raises for malformed input.
"""
from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Final

from pinmap.geocode.decoder import GRID_CODE_PATTERN, GridCodeDecoder, canonicalize
from pinmap.lexer.scanner import split_attributes, split_comment
from pinmap.model.nodes import ATTRIBUTE_FIELDS, LineError, ParseResult, Pin
from pinmap.errors import (
    AttributeSyntaxError,
    CoordinateRangeError,
    FormatError,
    MapSyntaxError,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Patterns and messages
# ---------------------------------------------------------------------------

_BRACKET: Final[re.Pattern[str]] = re.compile(r"^\[([^\]]*)\](.*)$", re.DOTALL)
_GRID_CONTENT: Final[re.Pattern[str]] = re.compile(
    rf"^\s*({GRID_CODE_PATTERN.pattern})(?:\s+(.*?))?\s*$", re.DOTALL
)

_NUMBER: Final[re.Pattern[str]] = re.compile(
    r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$"
)

_MSG_FORMAT: Final[str] = (
    "Invalid format. Use: [lat, lng] label {...} or [GridCode] label {...}"
)
_MSG_COORDINATES: Final[str] = "Invalid coordinates"
_MSG_LATITUDE: Final[str] = "Latitude must be between -90 and 90"
_MSG_LONGITUDE: Final[str] = "Longitude must be between -180 and 180"
_MSG_ATTRIBUTES: Final[str] = "Invalid JSON attributes"


def _dequote(text: str) -> str:
    """Strip one matching pair of straight quotes, if present."""
    trimmed = text.strip()
    if len(trimmed) >= 2 and trimmed[0] == trimmed[-1] and trimmed[0] in ('"', "'"):
        return trimmed[1:-1]
    return trimmed


def _reject_constant(name: str) -> Any:
    """Refuse the non-standard ``NaN`` and ``Infinity`` JSON extensions."""
    raise ValueError(f"Non-standard JSON constant {name!r}")


def _parse_float(text: str) -> float:
    stripped = text.strip()
    if _NUMBER.match(stripped) is None:
        raise FormatError(_MSG_COORDINATES)
    value = float(stripped)
    if not math.isfinite(value):
        raise FormatError(_MSG_COORDINATES)
    return value


class Parser:
    """Parses annotation text into pins and per-line errors.

    Parameters
    ----------
    decoder:
        Grid-code decoder used for ``[GridCode]`` lines.  Defaults to one
        using the built-in reference location for short codes.
    """

    def __init__(self, decoder: GridCodeDecoder | None = None) -> None:
        self._decoder: GridCodeDecoder = decoder or GridCodeDecoder()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse(self, text: str) -> ParseResult:
        """Parse a full annotation block.

        Parameters
        ----------
        text:
            Multi-line annotation source.

        Returns
        -------
        ParseResult
            Pins from every line that parsed, and one ``LineError`` for
            every line that did not.
        """
        pins: list[Pin] = []
        errors: list[LineError] = []
        for number, line in enumerate(self.significant_lines(text), start=1):
            try:
                pins.append(self.parse_line(line))
            except MapSyntaxError as exc:
                logger.debug("Line %d rejected (%s): %s", number, exc.kind.value, exc.message)
                errors.append(exc.at_line(number, line))
        return ParseResult(pins=tuple(pins), diagnostics=tuple(errors))

    @staticmethod
    def significant_lines(text: str) -> list[str]:
        """Return trimmed lines that are neither blank nor ``#`` comments.

        The position of a line in this list is the line number used in
        error messages.
        """
        lines = (line.strip() for line in text.split("\n"))
        return [line for line in lines if line and not line.startswith("#")]

    def parse_line(self, line: str) -> Pin:
        """Parse one trimmed line into a ``Pin``.

        Raises
        ------
        MapSyntaxError
            A subclass describing why the line was rejected.
        """
        split = split_comment(line)
        match = _BRACKET.match(split.body.strip())
        if match is None:
            raise FormatError(_MSG_FORMAT)
        contents, remainder = match.group(1), match.group(2)

        fields = self._parse_contents(contents)
        fields.update(self._parse_trailer(remainder))
        if split.comment:
            fields["description"] = split.comment
        return Pin(**fields)

    # ------------------------------------------------------------------
    # Bracket contents
    # ------------------------------------------------------------------

    def _parse_contents(self, contents: str) -> dict[str, Any]:
        grid = _GRID_CONTENT.match(contents)
        if grid is not None:
            return self._parse_grid_code(grid.group(1), grid.group(2))
        return self._parse_coordinates(contents)

    def _parse_coordinates(self, contents: str) -> dict[str, Any]:
        parts = contents.split(",")
        if len(parts) != 2:
            raise FormatError(_MSG_COORDINATES)
        lat = _parse_float(parts[0])
        lng = _parse_float(parts[1])
        if lat < -90 or lat > 90:
            raise CoordinateRangeError(_MSG_LATITUDE)
        if lng < -180 or lng > 180:
            raise CoordinateRangeError(_MSG_LONGITUDE)
        return {"lat": lat, "lng": lng}

    def _parse_grid_code(self, code: str, label: str | None) -> dict[str, Any]:
        canonical = canonicalize(code)
        lat, lng = self._decoder.decode(canonical)
        fields: dict[str, Any] = {"lat": lat, "lng": lng, "grid_code": canonical}
        if label:
            fields["label"] = _dequote(label)
        return fields

    # ------------------------------------------------------------------
    # Trailer: label and attribute block
    # ------------------------------------------------------------------

    def _parse_trailer(self, remainder: str) -> dict[str, Any]:
        if not remainder.strip():
            return {}
        split = split_attributes(remainder)
        fields: dict[str, Any] = {}
        if split.label:
            fields["label"] = _dequote(split.label)
        if split.block is not None:
            fields.update(self._parse_attributes(split.block))
        return fields

    @staticmethod
    def _parse_attributes(block: str) -> dict[str, str]:
        """Decode a JSON object and keep only the known string attributes."""
        try:
            data: Any = json.loads(block, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as exc:
            raise AttributeSyntaxError(_MSG_ATTRIBUTES) from exc
        if not isinstance(data, dict):
            raise AttributeSyntaxError(_MSG_ATTRIBUTES)
        attributes: dict[str, str] = {}
        for name in ATTRIBUTE_FIELDS:
            value = data.get(name)
            if isinstance(value, str):
                attributes[name] = value
        return attributes


# ---------------------------------------------------------------------------
# Module-level convenience function
# ---------------------------------------------------------------------------


def parse(text: str, decoder: GridCodeDecoder | None = None) -> ParseResult:
    """Parse annotation text and return pins and per-line errors.

    Parameters
    ----------
    text:
        Multi-line annotation source.
    decoder:
        Optional grid-code decoder, for a custom short-code reference.

    Returns
    -------
    ParseResult
        The parsed pins and line-numbered errors.

    Example
    -------
    ::

        from pinmap.parser import parse
        result = parse("[40.7589, -73.9851] Times Square")
        result.pins[0].label   # 'Times Square'
    """
    return Parser(decoder).parse(text)
