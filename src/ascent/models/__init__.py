"""Ascent data models - pure Pydantic, no I/O."""

from ascent.models.clip import ClipDef, ClipTable, FrameCell, ManifestError, normalize_clip_name
from ascent.models.enums import (
    ClipName,
    ClipScheme,
    EndReason,
    HoldShape,
    HoldSize,
    RoundEvent,
    RoundPhase,
    Side,
)
from ascent.models.hold import BestScore, Hold
from ascent.models.pose import ArmPose, LegPose, Point, Pose, TorsoTransform

__all__ = [
    "ArmPose",
    "BestScore",
    "ClipDef",
    "ClipName",
    "ClipScheme",
    "ClipTable",
    "EndReason",
    "FrameCell",
    "Hold",
    "HoldShape",
    "HoldSize",
    "LegPose",
    "ManifestError",
    "Point",
    "Pose",
    "RoundEvent",
    "RoundPhase",
    "Side",
    "TorsoTransform",
    "normalize_clip_name",
]
