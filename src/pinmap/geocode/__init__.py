"""Grid-code (Open Location Code) decoding."""
from __future__ import annotations

from pinmap.geocode.decoder import DEFAULT_REFERENCE, GridCodeDecoder, decode, is_short

__all__ = ["DEFAULT_REFERENCE", "GridCodeDecoder", "decode", "is_short"]
