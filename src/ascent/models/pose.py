"""Resolved skeleton snapshot produced by the pose synthesizer."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

# Torso-local coordinates: 1.0 == frame size, origin at the hip line, y down.
Point = tuple[float, float]


class TorsoTransform(BaseModel):
    """Placement of the torso frame inside the cell."""

    model_config = ConfigDict(frozen=True)

    lean: float = 0.0
    rotation: float = 0.0
    drop: float = 0.0
    stretch: float = 1.0


class ArmPose(BaseModel):
    model_config = ConfigDict(frozen=True)

    shoulder: Point
    elbow: Point
    hand: Point


class LegPose(BaseModel):
    model_config = ConfigDict(frozen=True)

    hip: Point
    knee: Point
    ankle: Point
    foot: Point


class Pose(BaseModel):
    """A fully resolved skeleton for one (clip, normalized time) sample."""

    model_config = ConfigDict(frozen=True)

    clip: str
    t: float
    torso: TorsoTransform
    torso_top: Point
    neck_top: Point
    head: Point
    head_radius: float
    left_arm: ArmPose
    right_arm: ArmPose
    left_leg: LegPose
    right_leg: LegPose

    def points(self) -> dict[str, Point]:
        """Flat name -> point mapping of every joint, in torso-local space."""
        result: dict[str, Point] = {
            "torso_top": self.torso_top,
            "neck_top": self.neck_top,
            "head": self.head,
        }
        for prefix, arm in (("left", self.left_arm), ("right", self.right_arm)):
            result[f"{prefix}_shoulder"] = arm.shoulder
            result[f"{prefix}_elbow"] = arm.elbow
            result[f"{prefix}_hand"] = arm.hand
        for prefix, leg in (("left", self.left_leg), ("right", self.right_leg)):
            result[f"{prefix}_hip"] = leg.hip
            result[f"{prefix}_knee"] = leg.knee
            result[f"{prefix}_ankle"] = leg.ankle
            result[f"{prefix}_foot"] = leg.foot
        return result
