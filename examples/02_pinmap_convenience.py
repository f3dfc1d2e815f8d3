#!/usr/bin/env python3
"""Example: PinMap convenience wrapper with custom settings

Short grid codes are recovered against the settings' reference
location; here the reference is Mountain View so ``CWC8+R9`` resolves to
the Googleplex.

Usage:
    python examples/02_pinmap_convenience.py
"""
from __future__ import annotations

from pinmap import PinMap
from pinmap.config import MapSettings

SOURCE = '''
[CWC8+R9 "Googleplex"] {"color": "green"}
[37.3349, -122.0090] Apple Park
'''


def main() -> None:
    settings = MapSettings(
        reference_latitude=37.4,
        reference_longitude=-122.1,
        width=1024,
        height=768,
    )
    pin_map = PinMap(SOURCE, settings)
    print(pin_map)
    for pin in pin_map.pins:
        print(f"  {pin.display_name}: {pin.to_dict()}")
    print(f"Initial view: {pin_map.initial_view().to_dict()}")


if __name__ == "__main__":
    main()
