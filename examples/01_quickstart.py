#!/usr/bin/env python3
"""Example: Quickstart — pinmap

Minimal working example: parse an annotation block, report the lines
that failed, and frame the surviving pins.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install pinmap
"""
from __future__ import annotations

import pinmap

SOURCE = '''
# Landmarks
[40.7589, -73.9851] Times Square {"color": "red", "icon": "star"}
[48.8566, 2.3522] "Eiffel Tower, Paris" {"group": "landmarks"}
[51.5074, -0.1278] London # capital of the UK
[849VCWC8+R9] Googleplex
[95, 10] Nowhere
'''


def main() -> None:
    print(f"pinmap version: {pinmap.__version__}")

    # Step 1: Parse annotation text into pins
    result = pinmap.parse(SOURCE)
    print(f"Parsed {len(result.pins)} pin(s), {len(result.errors)} error(s)")
    for pin in result.pins:
        print(f"  {pin.display_name}: ({pin.lat}, {pin.lng}) {pin.attributes()}")

    # Step 2: Show the per-line errors verbatim
    for error in result.errors:
        print(f"  ! {error}")

    # Step 3: Frame the pins in an 800x600 surface
    view = pinmap.fit(result.pins, 800, 600)
    print(f"Viewport: center={view.center}, zoom={view.zoom}")

    # Step 4: Canonical annotation text
    print(pinmap.format(result.pins))


if __name__ == "__main__":
    main()
