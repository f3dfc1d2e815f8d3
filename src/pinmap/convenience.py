"""Convenience wrapper for the parse-then-fit flow.

``PinMap`` parses a block once and keeps the result, so a host can ask
for pins, errors and views without re-parsing.

Example
-------
::

    from pinmap import PinMap

    pin_map = PinMap(source)
    for error in pin_map.errors:
        print(error)
    view = pin_map.viewport(800, 600)
"""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pinmap.config import MapSettings
    from pinmap.model.nodes import ParseResult, Pin, Viewport


class PinMap:
    """A parsed annotation block with its settings.

    Parameters
    ----------
    source:
        Annotation text to parse.
    settings:
        Host settings; the defaults are used when omitted.  The settings'
        reference location is used for short grid codes.
    """

    def __init__(self, source: str, settings: "MapSettings | None" = None) -> None:
        from pinmap.config import MapSettings
        from pinmap.parser import Parser

        self._settings: MapSettings = settings or MapSettings()
        self._source = source
        self._result: ParseResult = Parser(self._settings.decoder()).parse(source)

    @property
    def result(self) -> "ParseResult":
        return self._result

    @property
    def pins(self) -> tuple["Pin", ...]:
        return self._result.pins

    @property
    def errors(self) -> tuple[str, ...]:
        return self._result.errors

    @property
    def ok(self) -> bool:
        """Return True if every line parsed."""
        return self._result.ok

    @property
    def settings(self) -> "MapSettings":
        return self._settings

    def viewport(self, width: int | None = None, height: int | None = None) -> "Viewport":
        """Fit all pins, defaulting to the configured surface size."""
        from pinmap.viewport import fit

        return fit(
            self.pins,
            width if width is not None else self._settings.width,
            height if height is not None else self._settings.height,
        )

    def initial_view(self) -> "Viewport":
        """Return the view a map should open with; see ``viewport.initial_view``."""
        from pinmap.viewport import initial_view

        return initial_view(self.pins, self._settings)

    def format(self) -> str:  # noqa: A003
        """Return the pins as canonical annotation text."""
        from pinmap.formatter import format_pins

        return format_pins(self.pins)

    def to_dict(self) -> dict[str, object]:
        """Serialize pins, errors and the initial view."""
        from pinmap.model.serializer import PinSerializer

        return PinSerializer().to_dict(self._result, self.initial_view())

    def __repr__(self) -> str:
        return f"PinMap(pins={len(self.pins)}, errors={len(self.errors)})"
