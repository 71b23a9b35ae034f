"""Procedural climber rig: two-bone IK, easing curves and pose synthesis."""

from ascent.rig.ik import IKSolution, solve_two_bone
from ascent.rig.synth import PoseSynthesizer, Rig, sample_clip

__all__ = [
    "IKSolution",
    "PoseSynthesizer",
    "Rig",
    "sample_clip",
    "solve_two_bone",
]
