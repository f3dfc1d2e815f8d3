"""Unit tests for pinmap.convenience — the PinMap wrapper."""
from __future__ import annotations

import pytest

from pinmap.config import MapSettings
from pinmap.convenience import PinMap
from pinmap.model.nodes import Viewport
from pinmap.viewport import fit

_SOURCE = """\
[40.7589, -73.9851] Times Square {"color": "red"}
[40.7505, -73.9934] Empire State Building
[not, valid] Broken
"""


@pytest.fixture()
def pin_map() -> PinMap:
    return PinMap(_SOURCE)


class TestPinMap:
    def test_pins_and_errors(self, pin_map: PinMap) -> None:
        assert len(pin_map.pins) == 2
        assert pin_map.errors == ("Line 3: Invalid coordinates",)
        assert not pin_map.ok
        assert pin_map.result.pins == pin_map.pins

    def test_default_settings(self, pin_map: PinMap) -> None:
        assert pin_map.settings == MapSettings()

    def test_viewport_uses_settings_size(self) -> None:
        pin_map = PinMap(_SOURCE, MapSettings(width=1024, height=768))
        assert pin_map.viewport() == fit(pin_map.pins, 1024, 768)

    def test_viewport_explicit_size(self, pin_map: PinMap) -> None:
        assert pin_map.viewport(200, 100) == fit(pin_map.pins, 200, 100)

    def test_initial_view_single_pin(self) -> None:
        pin_map = PinMap("[1.0, 2.0] Only", MapSettings(default_zoom=7))
        assert pin_map.initial_view() == Viewport(center=(2.0, 1.0), zoom=7)

    def test_short_codes_use_settings_reference(self) -> None:
        settings = MapSettings(reference_latitude=37.4, reference_longitude=-122.1)
        pin = PinMap("[CWC8+R9] Googleplex", settings).pins[0]
        assert pin.lat == pytest.approx(37.4220625)
        assert pin.lng == pytest.approx(-122.0840625)

    def test_format(self, pin_map: PinMap) -> None:
        assert pin_map.format() == (
            '[40.7589, -73.9851] "Times Square" {"color": "red"}\n'
            '[40.7505, -73.9934] "Empire State Building"\n'
        )

    def test_to_dict_includes_initial_view(self, pin_map: PinMap) -> None:
        data = pin_map.to_dict()
        assert data["viewport"] == pin_map.initial_view().to_dict()
        assert len(data["pins"]) == 2
        assert data["errors"] == ["Line 3: Invalid coordinates"]

    def test_repr(self, pin_map: PinMap) -> None:
        assert repr(pin_map) == "PinMap(pins=2, errors=1)"

    def test_empty_source(self) -> None:
        pin_map = PinMap("")
        assert pin_map.ok
        assert pin_map.initial_view() == Viewport(center=(0.0, 0.0), zoom=2)
