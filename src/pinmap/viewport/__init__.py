"""Viewport fitting module.

Exports ``fit`` for framing a set of pins and ``initial_view`` for the
view a host map should open with.
"""
from __future__ import annotations

from pinmap.viewport.fitter import adaptive_padding, fit, initial_view, mercator_y

__all__ = ["fit", "initial_view", "adaptive_padding", "mercator_y"]
