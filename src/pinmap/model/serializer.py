"""Serialization of parse results and viewports to JSON and YAML.

The serialized form is the plain dict shape that map renderers consume:
pins use the ``gridCode`` key for decoded grid codes, absent optional
fields are omitted, and viewports are ``{"center": [lng, lat], "zoom": z}``.

Usage
-----
::

    from pinmap.model.serializer import PinSerializer

    serializer = PinSerializer()
    json_text = serializer.to_json(result)
    pins = serializer.pins_from_dict(serializer.to_dict(result))
"""
from __future__ import annotations

import json
from typing import Any

import yaml

from pinmap.model.nodes import ATTRIBUTE_FIELDS, ParseResult, Pin, Viewport


class PinSerializer:
    """Converts between pinmap value types and plain Python dicts."""

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(
        self, result: ParseResult, viewport: Viewport | None = None
    ) -> dict[str, object]:
        """Serialize a ``ParseResult``, optionally with its viewport."""
        data: dict[str, object] = {
            "pins": [pin.to_dict() for pin in result.pins],
            "errors": list(result.errors),
        }
        if viewport is not None:
            data["viewport"] = viewport.to_dict()
        return data

    def to_json(
        self, result: ParseResult, viewport: Viewport | None = None, indent: int = 2
    ) -> str:
        return json.dumps(self.to_dict(result, viewport), indent=indent, ensure_ascii=False)

    def to_yaml(self, result: ParseResult, viewport: Viewport | None = None) -> str:
        return yaml.dump(
            self.to_dict(result, viewport),
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False,
        )

    def viewport_to_dict(self, viewport: Viewport) -> dict[str, object]:
        return viewport.to_dict()

    # ------------------------------------------------------------------
    # Deserialization
    # ------------------------------------------------------------------

    def pin_from_dict(self, data: dict[str, Any]) -> Pin:
        """Build a ``Pin`` from its dict form.

        Raises
        ------
        ValueError
            If ``lat`` or ``lng`` is missing or not a number.
        """
        try:
            lat = float(data["lat"])
            lng = float(data["lng"])
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Pin needs numeric 'lat' and 'lng': {data!r}") from exc
        optional: dict[str, str] = {}
        for name in ("label", *ATTRIBUTE_FIELDS):
            value = data.get(name)
            if isinstance(value, str):
                optional[name] = value
        grid_code = data.get("gridCode")
        return Pin(
            lat=lat,
            lng=lng,
            grid_code=grid_code if isinstance(grid_code, str) else None,
            **optional,
        )

    def pins_from_dict(self, data: dict[str, Any] | list[Any]) -> list[Pin]:
        """Build pins from ``{"pins": [...]}`` or a bare list of pin dicts."""
        items = data.get("pins", []) if isinstance(data, dict) else data
        return [self.pin_from_dict(item) for item in items]

    def pins_from_json(self, text: str) -> list[Pin]:
        return self.pins_from_dict(json.loads(text))

    def pins_from_yaml(self, text: str) -> list[Pin]:
        return self.pins_from_dict(yaml.safe_load(text) or [])
