"""Analytic two-bone inverse kinematics in the plane."""

from __future__ import annotations

import math
from typing import NamedTuple

from ascent.models.pose import Point

# Minimum root-to-target distance; keeps the law of cosines finite.
EPSILON = 1e-5


class IKSolution(NamedTuple):
    """Joint angles for a two-segment chain.

    ``angle1`` is the absolute bearing of the first segment.  ``angle2`` is the
    signed turn at the middle joint, so the second segment points along
    ``angle1 + angle2``.
    """

    angle1: float
    angle2: float

    def joint(self, root: Point, len1: float) -> Point:
        return (
            root[0] + math.cos(self.angle1) * len1,
            root[1] + math.sin(self.angle1) * len1,
        )

    def end_effector(self, root: Point, len1: float, len2: float) -> Point:
        jx, jy = self.joint(root, len1)
        heading = self.angle1 + self.angle2
        return (jx + math.cos(heading) * len2, jy + math.sin(heading) * len2)


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def solve_two_bone(
    root: Point,
    target: Point,
    len1: float,
    len2: float,
    bend: int = 1,
) -> IKSolution:
    """Solve a two-segment chain from *root* toward *target*.

    Targets out of reach (farther than ``len1 + len2`` or closer than
    ``|len1 - len2|``) are not an error: the cosine ratios are clamped, which
    yields a fully extended or fully folded limb pointing at the target.
    *bend* (+1 or -1) picks which way the middle joint bends.
    """
    if len1 <= 0 or len2 <= 0:
        msg = f"segment lengths must be positive (got {len1}, {len2})"
        raise ValueError(msg)

    dx = target[0] - root[0]
    dy = target[1] - root[1]
    d = max(EPSILON, math.hypot(dx, dy))

    offset = math.acos(clamp((len1 * len1 + d * d - len2 * len2) / (2 * len1 * d), -1.0, 1.0))
    bearing = math.atan2(dy, dx)
    interior = math.acos(clamp((len1 * len1 + len2 * len2 - d * d) / (2 * len1 * len2), -1.0, 1.0))

    return IKSolution(
        angle1=bearing - bend * offset,
        angle2=bend * (math.pi - interior),
    )
