"""Easing curves and interpolation helpers for pose synthesis."""

from __future__ import annotations

import math


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def ease_in_out_sine(u: float) -> float:
    return 0.5 - 0.5 * math.cos(math.pi * u)


def ease_out_back(x: float) -> float:
    """Overshoots past 1 before settling; used for the fall."""
    c1 = 1.70158
    c3 = c1 + 1
    return 1 + c3 * (x - 1) ** 3 + c1 * (x - 1) ** 2
