"""pinmap — map annotation toolkit: line parser, grid-code decoder, viewport fitter.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import pinmap

    # Parse annotation text into pins and per-line errors
    result = pinmap.parse('''
        # Landmarks
        [40.7589, -73.9851] Times Square {"color": "red", "icon": "star"}
        [48.8566, 2.3522] "Eiffel Tower, Paris" # iron lattice tower
        [849VCWC8+R9] Googleplex
    ''')

    # Frame the pins in a 800x600 surface
    view = pinmap.fit(result.pins, 800, 600)
    view.center, view.zoom

    # Decode a single grid code
    lat, lng = pinmap.decode("849VCWC8+R9")

    # Canonical annotation text
    text = pinmap.format(result.pins)

    pinmap.__version__
    '0.1.0'
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

__version__: str = "0.1.0"

if TYPE_CHECKING:
    from pinmap.model.nodes import ParseResult, Pin, Viewport
    from pinmap.viewport.fitter import HasCoordinates


def parse(text: str) -> "ParseResult":
    """Parse annotation text into pins and line-numbered errors.

    Never raises for malformed lines; each bad line becomes one entry in
    ``ParseResult.errors``.  Short grid codes are recovered against the
    default reference location; use ``PinMap`` or ``pinmap.parser.Parser``
    with a custom decoder to change it.
    """
    from pinmap.parser.parser import parse as _parse

    return _parse(text)


def fit(
    pins: "Sequence[HasCoordinates]", width: float = 400, height: float = 400
) -> "Viewport":
    """Compute the center ``(lng, lat)`` and zoom that frame ``pins``."""
    from pinmap.viewport.fitter import fit as _fit

    return _fit(pins, width, height)


def decode(code: str) -> tuple[float, float]:
    """Decode a short or full grid code to ``(lat, lng)``.

    Raises
    ------
    pinmap.errors.GridCodeError
        If the code cannot be decoded.
    """
    from pinmap.geocode.decoder import decode as _decode

    return _decode(code)


def format(pins: "Iterable[Pin]") -> str:  # noqa: A001
    """Format pins as canonical annotation text."""
    from pinmap.formatter.formatter import format_pins

    return format_pins(pins)


def __getattr__(name: str) -> object:
    if name == "PinMap":
        from pinmap.convenience import PinMap

        return PinMap
    raise AttributeError(f"module 'pinmap' has no attribute {name!r}")


__all__ = [
    "__version__",
    "parse",
    "fit",
    "decode",
    "format",
    "PinMap",
]
