"""Shared test fixtures for pinmap.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

import pytest


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "pinmap"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def landmarks_source() -> str:
    """Return a small annotation block mixing coordinates and grid codes."""
    return (
        "# Landmarks\n"
        '[40.7589, -73.9851] Times Square {"color": "red", "icon": "star"}\n'
        '[48.8566, 2.3522] "Eiffel Tower, Paris" # iron lattice tower\n'
        "\n"
        "[849VCWC8+R9] Googleplex\n"
    )
