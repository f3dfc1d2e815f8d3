"""Host-facing settings for map rendering and grid-code decoding.

Settings are a frozen dataclass with defaults suited to an embedded
note-taking map.  A YAML file can override any of them::

    default_zoom: 12
    pin_size: 14
    default_pin_color: "#3366ff"
    reference_latitude: 51.5074
    reference_longitude: -0.1278
    width: 800
    height: 600

The camelCase names used by stored host settings
(``defaultZoom``, ``pinSize``, ``defaultPinColor``) are accepted too.
Unknown keys are ignored.
"""
from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Final

import yaml

from pinmap.geocode.decoder import DEFAULT_REFERENCE, GridCodeDecoder

logger = logging.getLogger(__name__)

_HEX_COLOR: Final[re.Pattern[str]] = re.compile(r"^#[0-9A-Fa-f]{6}$")
_ALIASES: Final[dict[str, str]] = {
    "defaultZoom": "default_zoom",
    "pinSize": "pin_size",
    "defaultPinColor": "default_pin_color",
    "referenceLatitude": "reference_latitude",
    "referenceLongitude": "reference_longitude",
}


class SettingsError(ValueError):
    """Raised when a settings value or file is invalid."""


@dataclass(frozen=True)
class MapSettings:
    """Rendering and decoding options supplied by the host.

    Parameters
    ----------
    default_zoom:
        Zoom used when a map opens on a single pin (1–20).
    pin_size:
        Marker size in pixels (8–20).
    default_pin_color:
        ``#RRGGBB`` color for pins without a ``color`` attribute.
    reference_latitude, reference_longitude:
        Location that short grid codes are recovered against.
    width, height:
        Target surface size in pixels for viewport fitting.
    """

    default_zoom: int = 15
    pin_size: int = 12
    default_pin_color: str = "#ff4444"
    reference_latitude: float = DEFAULT_REFERENCE[0]
    reference_longitude: float = DEFAULT_REFERENCE[1]
    width: int = 400
    height: int = 400

    def __post_init__(self) -> None:
        _check_range("default_zoom", self.default_zoom, 1, 20)
        _check_range("pin_size", self.pin_size, 8, 20)
        if not isinstance(self.default_pin_color, str) or not _HEX_COLOR.match(
            self.default_pin_color
        ):
            raise SettingsError(
                f"default_pin_color must be a hex color like '#ff4444', "
                f"got {self.default_pin_color!r}"
            )
        _check_range("reference_latitude", self.reference_latitude, -90, 90, integer=False)
        _check_range("reference_longitude", self.reference_longitude, -180, 180, integer=False)
        _check_range("width", self.width, 1, None)
        _check_range("height", self.height, 1, None)

    def decoder(self) -> GridCodeDecoder:
        """Return a grid-code decoder using this reference location."""
        return GridCodeDecoder(self.reference_latitude, self.reference_longitude)

    def with_overrides(self, **changes: Any) -> "MapSettings":
        """Return a copy with ``changes`` applied, skipping ``None`` values."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _check_range(
    name: str,
    value: Any,
    low: float,
    high: float | None,
    integer: bool = True,
) -> None:
    expected = int if integer else (int, float)
    if isinstance(value, bool) or not isinstance(value, expected):
        kind = "an integer" if integer else "a number"
        raise SettingsError(f"{name} must be {kind}, got {value!r}")
    if value < low or (high is not None and value > high):
        bound = f"between {low} and {high}" if high is not None else f"at least {low}"
        raise SettingsError(f"{name} must be {bound}, got {value!r}")


def settings_from_dict(data: dict[str, Any]) -> MapSettings:
    """Build ``MapSettings`` from a mapping, accepting camelCase aliases.

    Raises
    ------
    SettingsError
        If a known key has an invalid value.
    """
    known = {f.name for f in fields(MapSettings)}
    values: dict[str, Any] = {}
    for key, value in data.items():
        name = _ALIASES.get(key, key)
        if name in known:
            values[name] = value
        else:
            logger.debug("Ignoring unknown settings key %r", key)
    return MapSettings(**values)


def load_settings(path: str | Path) -> MapSettings:
    """Load settings from a YAML file.

    An empty file yields the defaults.

    Raises
    ------
    SettingsError
        If the file cannot be read, is not a YAML mapping, or contains
        invalid values.
    """
    file_path = Path(path)
    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SettingsError(f"Cannot read settings file {file_path}: {exc}") from exc
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SettingsError(f"Invalid YAML in {file_path}: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SettingsError(f"Settings file {file_path} must contain a mapping")
    settings = settings_from_dict(data)
    logger.debug("Loaded settings from %s", file_path)
    return settings
