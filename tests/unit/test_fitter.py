"""Unit tests for pinmap.viewport — center and zoom fitting."""
from __future__ import annotations

import math

import pytest

from pinmap.config import MapSettings
from pinmap.model.nodes import Pin, Viewport
from pinmap.viewport.fitter import (
    MAX_ZOOM,
    MIN_ZOOM,
    adaptive_padding,
    fit,
    initial_view,
    longitude_extent,
    mercator_y,
)


def pins(*coords: tuple[float, float]) -> list[Pin]:
    """Build pins from ``(lat, lng)`` pairs."""
    return [Pin(lat=lat, lng=lng) for lat, lng in coords]


# ---------------------------------------------------------------------------
# Degenerate inputs
# ---------------------------------------------------------------------------


class TestFewPins:
    def test_no_pins_gives_world_view(self) -> None:
        assert fit([]) == Viewport(center=(0.0, 0.0), zoom=2)

    def test_single_pin_is_centered_close_up(self) -> None:
        view = fit(pins((10, 20)))
        assert view.center == (20, 10)
        assert view.zoom == 15

    @pytest.mark.parametrize("width, height", [(1, 1), (400, 400), (4000, 300)])
    def test_single_pin_ignores_surface_size(self, width: int, height: int) -> None:
        view = fit(pins((40.7589, -73.9851)), width, height)
        assert view == Viewport(center=(-73.9851, 40.7589), zoom=15)

    def test_center_is_longitude_first(self) -> None:
        view = fit(pins((10, 20)))
        assert view.lng == 20
        assert view.lat == 10
        assert view.to_dict() == {"center": [20, 10], "zoom": 15}


# ---------------------------------------------------------------------------
# Real-world sets
# ---------------------------------------------------------------------------


class TestRealWorld:
    def test_close_points_get_high_zoom(self) -> None:
        view = fit(pins((40.7589, -73.9851), (40.7505, -73.9934)))
        assert view.lng == pytest.approx(-73.98925, abs=1e-4)
        assert view.lat == pytest.approx(40.7547, abs=1e-4)
        assert view.zoom > 10

    def test_european_capitals_get_medium_zoom(self) -> None:
        view = fit(
            pins((51.5074, -0.1278), (48.8566, 2.3522), (52.52, 13.405), (41.9028, 12.4964))
        )
        assert view.lng == pytest.approx(6.6386, abs=5e-4)
        assert view.lat == pytest.approx(47.2114, abs=5e-4)
        assert view.zoom < 8

    def test_pacific_crossing_centers_over_ocean(self) -> None:
        view = fit(pins((21.3099, -157.8581), (35.6762, 139.6503), (-36.8485, 174.7633)))
        assert abs(view.lng) > 140
        assert view.lat == pytest.approx(-0.58615, abs=5e-4)
        assert view.zoom < 5

    def test_extreme_latitudes_get_global_zoom(self) -> None:
        view = fit(pins((71.0308, -8.0267), (-77.8419, 166.6863)))
        assert view.zoom < 3
        assert view.lat == pytest.approx(-3.4055, abs=5e-4)

    def test_new_york_to_melbourne_does_not_wrap(self) -> None:
        view = fit(pins((40.7128, -74.0060), (-37.8136, 144.9631)))
        assert view.lng == pytest.approx((-74.0060 + 144.9631) / 2)

    @pytest.mark.parametrize(
        "coords, low, high",
        [
            (((40.7589, -73.9851), (40.759, -73.9852)), 11, MAX_ZOOM),
            (((40.7589, -73.9851), (40.8089, -73.9351)), 9, 14),
            (((40.7589, -73.9851), (41.7589, -72.9851)), 4, 9),
            (((80, 0), (-80, 0)), MIN_ZOOM, 2),
        ],
    )
    def test_zoom_bands(self, coords: tuple, low: int, high: int) -> None:
        assert low <= fit(pins(*coords)).zoom <= high


# ---------------------------------------------------------------------------
# Antimeridian
# ---------------------------------------------------------------------------


class TestAntimeridian:
    def test_date_line_pair_centers_near_180(self) -> None:
        view = fit(pins((60, 179), (50, -179)))
        assert abs(abs(view.lng) - 180) < 10
        assert view.lat == 55
        assert view.zoom < 8

    def test_wrapped_span_is_short_way_round(self) -> None:
        center, span = longitude_extent(-179, 179)
        assert span == pytest.approx(2)
        assert center == pytest.approx(180)

    def test_wrapped_center_normalized(self) -> None:
        center, span = longitude_extent(-170, 160)
        assert span == pytest.approx(30)
        assert center == pytest.approx(175)

    def test_wide_span_without_both_extremes_near_date_line(self) -> None:
        center, span = longitude_extent(-140, 170)
        assert span == pytest.approx(310)
        assert center == pytest.approx(15)

    def test_narrow_span_is_direct(self) -> None:
        assert longitude_extent(-10, 30) == (10, 40)

    def test_wrapped_span_zooms_like_direct_span(self) -> None:
        wrapped = fit(pins((0, 179), (0, -179)))
        direct = fit(pins((0, 1), (0, -1)))
        assert wrapped.zoom == direct.zoom


# ---------------------------------------------------------------------------
# Zoom arithmetic
# ---------------------------------------------------------------------------


class TestZoom:
    @pytest.mark.parametrize(
        "span, expected",
        [
            (0.0, 0.0001),
            (0.0005, 0.0001),
            (0.002, 0.0005),
            (0.009, 0.009 * 0.08),
            (0.5, 0.02),
            (10.0, 0.3),
        ],
    )
    def test_adaptive_padding(self, span: float, expected: float) -> None:
        assert adaptive_padding(span) == pytest.approx(expected)

    def test_mercator_equator_is_zero(self) -> None:
        assert mercator_y(0) == pytest.approx(0.0, abs=1e-12)
        assert mercator_y(45) == pytest.approx(-mercator_y(-45))

    def test_longitude_limited_zoom(self) -> None:
        # padded span 10.6 degrees -> log2(400 * 360 / (10.6 * 256)) ~ 5.73
        view = fit(pins((0, 0), (0, 10)))
        assert view.center == (5, 0)
        assert view.zoom == 5

    def test_doubling_width_adds_one_level(self) -> None:
        narrow = fit(pins((0, 0), (0, 10)), 400, 400)
        wide = fit(pins((0, 0), (0, 10)), 800, 400)
        assert wide.zoom == narrow.zoom + 1

    def test_latitude_limited_zoom(self) -> None:
        expected_span = mercator_y(10.6) - mercator_y(-10.6)
        world = mercator_y(85) - mercator_y(-85)
        expected = math.floor(math.log2(400 * world / (expected_span * 256)))
        assert fit(pins((-10, 0), (10, 0))).zoom == expected == 4

    def test_most_restrictive_axis_wins(self) -> None:
        view = fit(pins((-10, 0), (10, 10)))
        assert view.zoom == min(
            fit(pins((-10, 0), (10, 0))).zoom,
            fit(pins((0, 0), (0, 10))).zoom,
        )

    def test_identical_pins_clamp_to_max(self) -> None:
        assert fit(pins((1, 1), (1, 1))).zoom == MAX_ZOOM

    def test_polar_pins_do_not_fail(self) -> None:
        view = fit(pins((89, 0), (89.5, 0)))
        assert MIN_ZOOM <= view.zoom <= MAX_ZOOM
        assert view.lat == pytest.approx(89.25)

    def test_pole_to_pole_clamps_to_min(self) -> None:
        assert fit(pins((90, -180), (-90, 180))).zoom == MIN_ZOOM

    @pytest.mark.parametrize("axis", ["lat", "lng"])
    def test_zoom_never_increases_as_span_grows(self, axis: str) -> None:
        spans = [0.0005, 0.005, 0.05, 0.5, 5.0, 50.0, 150.0]
        zooms = []
        for span in spans:
            far = (min(span, 80.0), 0.0) if axis == "lat" else (0.0, span)
            zooms.append(fit(pins((0, 0), far), 600, 300).zoom)
        assert zooms == sorted(zooms, reverse=True)

    @pytest.mark.parametrize("width, height", [(0, 0), (0, 400), (400, 0), (-5, -5)])
    def test_empty_surface_clamps_to_min(self, width: int, height: int) -> None:
        view = fit(pins((0, 0), (1, 1)), width, height)
        assert view.zoom == MIN_ZOOM
        assert view.center == (0.5, 0.5)

    def test_zoom_is_int(self) -> None:
        assert isinstance(fit(pins((0, 0), (1, 1))).zoom, int)


# ---------------------------------------------------------------------------
# Initial view
# ---------------------------------------------------------------------------


class TestInitialView:
    def test_no_pins(self) -> None:
        assert initial_view([]) == fit([])

    def test_single_pin_uses_default_zoom(self) -> None:
        settings = MapSettings(default_zoom=9)
        view = initial_view(pins((10, 20)), settings)
        assert view == Viewport(center=(20, 10), zoom=9)

    def test_single_pin_default_settings(self) -> None:
        assert initial_view(pins((10, 20))).zoom == 15

    def test_many_pins_fit_configured_surface(self) -> None:
        settings = MapSettings(width=800, height=400)
        coords = pins((0, 0), (0, 10))
        assert initial_view(coords, settings) == fit(coords, 800, 400)
