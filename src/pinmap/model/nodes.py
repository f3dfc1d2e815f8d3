"""Value types produced by the pinmap parser and viewport fitter.

Every type here is a frozen dataclass so that parse results are
immutable and can be shared freely between callers.  Optional pin
attributes default to ``None`` and are omitted from ``to_dict`` output
rather than emitted as ``null``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class ErrorKind(Enum):
    """Classification of a line that failed to parse."""

    FORMAT = "format"
    COORDINATE_RANGE = "coordinate_range"
    GRID_CODE = "grid_code"
    ATTRIBUTE_SYNTAX = "attribute_syntax"


# ---------------------------------------------------------------------------
# Pin
# ---------------------------------------------------------------------------


ATTRIBUTE_FIELDS: tuple[str, ...] = ("color", "icon", "group", "description")


@dataclass(frozen=True, slots=True)
class Pin:
    """One annotated geographic point.

    Parameters
    ----------
    lat:
        Latitude in degrees, within ``[-90, 90]``.
    lng:
        Longitude in degrees, within ``[-180, 180]``.
    label:
        Optional display text, already dequoted.
    color, icon, group, description:
        Optional free-form attributes taken from the JSON block (or, for
        ``description``, from a trailing comment).
    grid_code:
        Canonical uppercase grid code when the coordinates were decoded
        from one rather than written literally.
    """

    lat: float
    lng: float
    label: str | None = None
    color: str | None = None
    icon: str | None = None
    group: str | None = None
    description: str | None = None
    grid_code: str | None = None

    @property
    def coordinates(self) -> tuple[float, float]:
        """Return ``(lat, lng)`` in geographic order."""
        return (self.lat, self.lng)

    @property
    def display_name(self) -> str:
        """Return the label, or the coordinates when there is no label."""
        if self.label:
            return self.label
        return f"{self.lat}, {self.lng}"

    def attributes(self) -> dict[str, str]:
        """Return the attribute fields that are present, in canonical order."""
        result: dict[str, str] = {}
        for name in ATTRIBUTE_FIELDS:
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        return result

    def to_dict(self) -> dict[str, object]:
        """Serialize to a plain dict, omitting absent optional fields."""
        data: dict[str, object] = {"lat": self.lat, "lng": self.lng}
        if self.label is not None:
            data["label"] = self.label
        data.update(self.attributes())
        if self.grid_code is not None:
            data["gridCode"] = self.grid_code
        return data


# ---------------------------------------------------------------------------
# Parse results
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LineError:
    """A single line that failed to parse.

    Parameters
    ----------
    line:
        1-based position among the non-blank, non-comment lines.
    kind:
        Which class of failure occurred.
    message:
        Human-readable description, without the line prefix.
    source:
        The trimmed source line that failed.
    """

    line: int
    kind: ErrorKind
    message: str
    source: str = ""

    def __str__(self) -> str:
        return f"Line {self.line}: {self.message}"


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Output of parsing a full annotation block.

    ``errors`` holds one display string per entry in ``diagnostics``, in
    the same order.
    """

    pins: tuple[Pin, ...] = ()
    diagnostics: tuple[LineError, ...] = ()

    @property
    def errors(self) -> tuple[str, ...]:
        """Return line-numbered error messages, safe to display verbatim."""
        return tuple(str(d) for d in self.diagnostics)

    @property
    def ok(self) -> bool:
        """Return True if every line parsed."""
        return not self.diagnostics


# ---------------------------------------------------------------------------
# Viewport
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Viewport:
    """Map center and zoom that frame a set of pins.

    ``center`` is ``(lng, lat)``: longitude first, as map projections
    expect.
    """

    center: tuple[float, float] = (0.0, 0.0)
    zoom: int = 2

    @property
    def lng(self) -> float:
        return self.center[0]

    @property
    def lat(self) -> float:
        return self.center[1]

    def to_dict(self) -> dict[str, object]:
        """Serialize to ``{"center": [lng, lat], "zoom": z}``."""
        return {"center": [self.center[0], self.center[1]], "zoom": self.zoom}
