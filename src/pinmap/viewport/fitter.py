"""Viewport fitting: center and zoom that frame a set of pins.

The fit works on a Web Mercator tile pyramid with 256-pixel tiles: at
zoom ``z`` the world is ``256 * 2**z`` pixels wide and spans 360 degrees
of longitude.  Each axis yields the largest zoom at which its padded span
still fits the surface; the smaller of the two, floored and clamped to
``[1, 18]``, wins.

Longitude spans that cross the antimeridian (Honolulu to Tokyo) are
measured the short way around, but only when both extremes lie near the
date line.  Wide direct spans such as New York to Melbourne are left
alone.
"""
from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from typing import TYPE_CHECKING, Final, Protocol

from pinmap.model.nodes import Viewport

if TYPE_CHECKING:
    from pinmap.config import MapSettings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

TILE_SIZE: Final[int] = 256
MIN_ZOOM: Final[int] = 1
MAX_ZOOM: Final[int] = 18
EMPTY_ZOOM: Final[int] = 2
SINGLE_PIN_ZOOM: Final[int] = 15
MERCATOR_LIMIT: Final[float] = 85.0
DATE_LINE_THRESHOLD: Final[float] = 150.0

WORLD_VIEW: Final[Viewport] = Viewport(center=(0.0, 0.0), zoom=EMPTY_ZOOM)


class HasCoordinates(Protocol):
    """Anything with ``lat`` and ``lng`` attributes, such as ``Pin``."""

    @property
    def lat(self) -> float: ...

    @property
    def lng(self) -> float: ...


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def adaptive_padding(span: float) -> float:
    """Return the padding added to each side of an axis span.

    Very close pins get a small fixed margin; wider spans get a shrinking
    percentage of the span.
    """
    if span < 0.001:
        return 0.0001
    if span < 0.01:
        return max(span * 0.08, 0.0005)
    if span < 1:
        return span * 0.04
    return span * 0.03


def mercator_y(lat: float) -> float:
    """Project a latitude onto the Mercator y axis."""
    return math.log(math.tan((90 + lat) * math.pi / 360))


_WORLD_MERCATOR_HEIGHT: Final[float] = mercator_y(MERCATOR_LIMIT) - mercator_y(-MERCATOR_LIMIT)


def _clamp_lat(lat: float) -> float:
    return max(-MERCATOR_LIMIT, min(MERCATOR_LIMIT, lat))


def longitude_extent(min_lng: float, max_lng: float) -> tuple[float, float]:
    """Return ``(center, span)`` of a longitude range.

    The range is measured across the antimeridian only when the direct
    span exceeds 180 degrees, both extremes lie beyond
    ``DATE_LINE_THRESHOLD``, and the wrapped span is the shorter one.
    """
    direct = max_lng - min_lng
    center = (min_lng + max_lng) / 2
    near_date_line = min_lng < -DATE_LINE_THRESHOLD and max_lng > DATE_LINE_THRESHOLD
    if direct > 180 and near_date_line:
        wrapped = 360 - direct
        if wrapped < direct:
            center = (min_lng + 360 + max_lng) / 2
            if center > 180:
                center -= 360
            logger.debug("Longitude range %s..%s wraps the antimeridian", min_lng, max_lng)
            return center, wrapped
    return center, direct


def _zoom_for_longitude(padded_span: float, width: float) -> float:
    if width <= 0:
        return -math.inf
    return math.log2((width * 360) / (padded_span * TILE_SIZE))


def _zoom_for_latitude(center_lat: float, padded_span: float, height: float) -> float:
    if height <= 0:
        return -math.inf
    low = _clamp_lat(center_lat - padded_span / 2)
    high = _clamp_lat(center_lat + padded_span / 2)
    span = mercator_y(high) - mercator_y(low)
    if span <= 0:
        # Both bounds collapsed onto the same Mercator limit.
        return math.inf
    return math.log2((height * _WORLD_MERCATOR_HEIGHT) / (span * TILE_SIZE))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def fit(
    pins: Sequence[HasCoordinates],
    width: float = 400,
    height: float = 400,
) -> Viewport:
    """Compute the center and zoom that frame ``pins`` in a pixel surface.

    Parameters
    ----------
    pins:
        Points to frame; any objects with ``lat`` and ``lng``.
    width:
        Surface width in pixels.
    height:
        Surface height in pixels.

    Returns
    -------
    Viewport
        ``center`` as ``(lng, lat)`` and an integer ``zoom``.  No pins
        gives the world view at zoom 2; one pin is centered at zoom 15.
    """
    if not pins:
        return WORLD_VIEW
    if len(pins) == 1:
        only = pins[0]
        return Viewport(center=(only.lng, only.lat), zoom=SINGLE_PIN_ZOOM)

    lats = [p.lat for p in pins]
    lngs = [p.lng for p in pins]
    min_lat, max_lat = min(lats), max(lats)

    center_lng, lng_span = longitude_extent(min(lngs), max(lngs))
    lat_span = max_lat - min_lat
    center_lat = (min_lat + max_lat) / 2

    padded_lat = lat_span + 2 * adaptive_padding(lat_span)
    padded_lng = lng_span + 2 * adaptive_padding(lng_span)

    zoom_lng = _zoom_for_longitude(padded_lng, width)
    zoom_lat = _zoom_for_latitude(center_lat, padded_lat, height)
    # Clamp before flooring; a zero-size surface yields -inf.
    zoom = math.floor(max(MIN_ZOOM, min(MAX_ZOOM, zoom_lng, zoom_lat)))

    logger.debug(
        "Fitted %d pins: lng span %.6f, lat span %.6f -> zoom %d",
        len(pins),
        lng_span,
        lat_span,
        zoom,
    )
    return Viewport(center=(center_lng, center_lat), zoom=zoom)


def initial_view(
    pins: Sequence[HasCoordinates],
    settings: "MapSettings | None" = None,
) -> Viewport:
    """Return the view a map should open with.

    Two or more pins are fitted to the configured surface size.  A single
    pin is centered at the configured default zoom rather than the
    fitter's fixed close-up, and no pins gives the world view.
    """
    from pinmap.config import MapSettings

    active = settings or MapSettings()
    if len(pins) > 1:
        return fit(pins, active.width, active.height)
    if len(pins) == 1:
        return Viewport(center=(pins[0].lng, pins[0].lat), zoom=active.default_zoom)
    return WORLD_VIEW
