"""Open Location Code ("Plus Code") decoding.

Grid codes are decoded with the ``openlocationcode`` reference library;
this module only adds canonicalization, short-code recovery against a
reference location, and a single error type.

A code is *short* when fewer than eight characters precede the ``+``
separator.  Short codes identify a cell only relative to a nearby point,
so they are first recovered to the nearest matching full code around the
decoder's reference location.
"""
from __future__ import annotations

import logging
import re
from typing import Final

from openlocationcode import openlocationcode as olc

from pinmap.errors import GridCodeError

logger = logging.getLogger(__name__)

# New York City.  Hosts override this through ``MapSettings``.
DEFAULT_REFERENCE: Final[tuple[float, float]] = (40.7128, -74.0060)

_SEPARATOR: Final[str] = "+"
_FULL_PREFIX_LENGTH: Final[int] = 8

GRID_CODE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"[A-Za-z0-9]{4,}\+[A-Za-z0-9]{2,}"
)


def canonicalize(code: str) -> str:
    """Return ``code`` trimmed and uppercased."""
    return code.strip().upper()


def is_short(code: str) -> bool:
    """Return True if fewer than eight characters precede the separator."""
    head, sep, _ = code.partition(_SEPARATOR)
    return bool(sep) and len(head) < _FULL_PREFIX_LENGTH


class GridCodeDecoder:
    """Decodes full and short grid codes to cell-center coordinates.

    Parameters
    ----------
    reference_latitude:
        Latitude used to recover short codes.
    reference_longitude:
        Longitude used to recover short codes.

    Example
    -------
    ::

        decoder = GridCodeDecoder(37.4, -122.1)
        decoder.decode("CWC8+R9")   # (37.4220625, -122.0840625)
    """

    __slots__ = ("_reference",)

    def __init__(
        self,
        reference_latitude: float = DEFAULT_REFERENCE[0],
        reference_longitude: float = DEFAULT_REFERENCE[1],
    ) -> None:
        self._reference: tuple[float, float] = (
            float(reference_latitude),
            float(reference_longitude),
        )

    @property
    def reference(self) -> tuple[float, float]:
        """The ``(lat, lng)`` used to recover short codes."""
        return self._reference

    def recover(self, code: str) -> str:
        """Return the full code for ``code``, recovering it if short.

        Raises
        ------
        GridCodeError
            If ``code`` is not a valid short or full code.
        """
        canonical = canonicalize(code)
        if not is_short(canonical):
            return canonical
        try:
            full = olc.recoverNearest(canonical, *self._reference)
        except ValueError as exc:
            raise GridCodeError(str(exc), canonical) from exc
        logger.debug("Recovered short code %s -> %s near %s", canonical, full, self._reference)
        return full.upper()

    def decode(self, code: str) -> tuple[float, float]:
        """Decode ``code`` to the ``(lat, lng)`` center of its cell.

        Parameters
        ----------
        code:
            A short or full grid code, in any letter case.

        Returns
        -------
        tuple[float, float]
            Latitude and longitude of the decoded cell's center.

        Raises
        ------
        GridCodeError
            If the code cannot be recovered or decoded.
        """
        full = self.recover(code)
        try:
            area = olc.decode(full)
        except ValueError as exc:
            raise GridCodeError(str(exc), full) from exc
        return (area.latitudeCenter, area.longitudeCenter)


_default_decoder = GridCodeDecoder()


def decode(code: str) -> tuple[float, float]:
    """Decode ``code`` using the default reference location.

    Raises
    ------
    GridCodeError
        If the code cannot be recovered or decoded.
    """
    return _default_decoder.decode(code)
