"""Pose synthesis for the procedural climber.

Every clip is a function of normalized time ``t`` in ``[0, 1]``.  Limb goals
are laid out per clip with eased curves and then resolved with two-bone IK:
arms once (shoulder -> elbow -> hand), legs twice (hip -> knee, then
knee -> ankle).  The only random input is the fall direction, which is passed
in explicitly so that a clip instance samples it once and every frame of that
instance agrees.
"""

from __future__ import annotations

import logging
import math
import random
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from ascent.models.enums import ClipName
from ascent.models.pose import ArmPose, LegPose, Pose, TorsoTransform
from ascent.rig.easing import ease_in_out_sine, ease_out_back, lerp
from ascent.rig.ik import clamp, solve_two_bone

if TYPE_CHECKING:
    from ascent.models.pose import Point

logger = logging.getLogger(__name__)

# Motion curve used for each clip name.  The matching-input layout draws its
# single reach clip facing left; the renderer mirrors it for the right side.
_MOTIONS: dict[ClipName, str] = {
    ClipName.IDLE: "idle",
    ClipName.IDLE_HANG: "idle",
    ClipName.REACH_LEFT: "reach_left",
    ClipName.REACH: "reach_left",
    ClipName.REACH_RIGHT: "reach_right",
    ClipName.PULL_UP: "pull_up",
    ClipName.SLIP: "slip",
    ClipName.FALL: "fall",
}

# Lean amplitudes were authored in pixels on a 256px cell.
_PX = 1.0 / 256.0


class Rig(BaseModel):
    """Biped proportions as fractions of the frame size."""

    model_config = ConfigDict(frozen=True)

    torso: float = Field(default=0.22, gt=0)
    neck: float = Field(default=0.05, gt=0)
    head_radius: float = Field(default=0.07, gt=0)
    upper_arm: float = Field(default=0.13, gt=0)
    forearm: float = Field(default=0.12, gt=0)
    upper_leg: float = Field(default=0.16, gt=0)
    lower_leg: float = Field(default=0.15, gt=0)
    foot: float = Field(default=0.07, gt=0)
    base_reach: float = Field(default=0.28, gt=0)


class PoseSynthesizer:
    """Build :class:`Pose` snapshots for named clips."""

    def __init__(self, rig: Rig | None = None) -> None:
        self.rig = rig or Rig()

    def synthesize(self, clip: ClipName | str, t: float, *, fall_direction: int = 1) -> Pose:
        """Resolve the skeleton of *clip* at normalized time *t*.

        The result depends only on the arguments.  *fall_direction* (+1 or -1)
        picks which way the body topples during ``fall``.
        """
        name = ClipName(clip)
        motion = _MOTIONS[name]
        t = clamp(t, 0.0, 1.0)
        ease = ease_in_out_sine(t)
        rig = self.rig

        torso = self._torso(motion, t, ease, 1 if fall_direction >= 0 else -1)
        torso_len = rig.torso * torso.stretch

        shoulder_l = (-0.06, -torso_len + 0.02)
        shoulder_r = (0.06, -torso_len + 0.02)
        hip_l = (-0.05, -0.004)
        hip_r = (0.05, -0.004)

        goal_l, goal_r = self._hand_goals(motion, t, ease, torso_len, shoulder_l, shoulder_r)

        left_arm = self._arm(shoulder_l, goal_l, bend=1)
        right_arm = self._arm(shoulder_r, goal_r, bend=-1)
        left_leg = self._leg(hip_l, -1, motion, t, ease)
        right_leg = self._leg(hip_r, 1, motion, t, ease)

        torso_top = (0.0, -torso_len)
        neck_top = (0.0, -torso_len - rig.neck)
        head = (0.0, neck_top[1] - rig.head_radius * 0.4)

        return Pose(
            clip=name.value,
            t=t,
            torso=torso,
            torso_top=torso_top,
            neck_top=neck_top,
            head=head,
            head_radius=rig.head_radius,
            left_arm=left_arm,
            right_arm=right_arm,
            left_leg=left_leg,
            right_leg=right_leg,
        )

    # ------------------------------------------------------------------

    @staticmethod
    def _torso(motion: str, t: float, ease: float, fall_direction: int) -> TorsoTransform:
        lean = 0.0
        if motion == "reach_left":
            lean = -math.sin(t * math.pi) * 14 * _PX
        elif motion == "reach_right":
            lean = math.sin(t * math.pi) * 14 * _PX
        elif motion == "slip":
            lean = math.sin(t * 10) * 10 * _PX
        elif motion == "fall":
            lean = math.sin(t * 1.2 * math.pi) * 30 * _PX

        stretch = 1.0
        if motion in ("reach_left", "reach_right"):
            stretch = 0.98 + 0.06 * math.sin(t * math.pi)
        elif motion == "pull_up":
            stretch = 1.0 + 0.04 * math.sin(t * math.pi)

        rotation = 0.0
        drop = 0.0
        if motion == "fall":
            rotation = lerp(0.0, (math.pi / 2) * fall_direction, ease)
            drop = t * 0.25
        elif motion == "slip":
            rotation = math.sin(t * 20) * 0.08
        elif motion == "reach_left":
            rotation = lerp(0.0, -0.12, ease)
        elif motion == "reach_right":
            rotation = lerp(0.0, 0.12, ease)
        elif motion == "pull_up":
            drop = -ease * 0.12

        return TorsoTransform(lean=lean, rotation=rotation, drop=drop, stretch=stretch)

    def _hand_goals(
        self,
        motion: str,
        t: float,
        ease: float,
        torso_len: float,
        shoulder_l: Point,
        shoulder_r: Point,
    ) -> tuple[Point, Point]:
        reach = self.rig.base_reach
        hold_l = (-0.22, -torso_len - reach)
        hold_r = (0.22, -torso_len - reach * 0.96)
        lx, ly = hold_l
        rx, ry = hold_r

        if motion == "idle":
            sway = math.sin(t * math.pi * 2) * 0.02
            ly += sway
            ry -= sway
        elif motion == "reach_left":
            lx = lerp(shoulder_l[0] - 0.02, hold_l[0], ease)
            ly = lerp(shoulder_l[1] - 0.1, hold_l[1], ease)
            ry = lerp(hold_r[1] + 0.08, hold_r[1], ease)
        elif motion == "reach_right":
            rx = lerp(shoulder_r[0] + 0.02, hold_r[0], ease)
            ry = lerp(shoulder_r[1] - 0.1, hold_r[1], ease)
            ly = lerp(hold_l[1] + 0.08, hold_l[1], ease)
        elif motion == "pull_up":
            # Hands stay on the holds while the body rises past them.
            ly += ease * 0.12
            ry += ease * 0.12
        elif motion == "slip":
            lx += _jitter(t, 0)
            ly += _jitter(t, 1)
            rx += _jitter(t, 2)
            ry += _jitter(t, 3)
        elif motion == "fall":
            drop = ease_out_back(t)
            ly += drop * 0.3
            ry += drop * 0.35

        return (lx, ly), (rx, ry)

    def _arm(self, shoulder: Point, goal: Point, *, bend: int) -> ArmPose:
        rig = self.rig
        ik = solve_two_bone(shoulder, goal, rig.upper_arm, rig.forearm, bend)
        return ArmPose(
            shoulder=shoulder,
            elbow=ik.joint(shoulder, rig.upper_arm),
            hand=ik.end_effector(shoulder, rig.upper_arm, rig.forearm),
        )

    def _leg(self, hip: Point, direction: int, motion: str, t: float, ease: float) -> LegPose:
        rig = self.rig
        knee_x, knee_y = hip[0] + direction * 0.06, hip[1] + 0.18
        foot_x, foot_y = hip[0] + direction * 0.14, hip[1] + 0.28

        if (motion == "reach_left" and direction == -1) or (
            motion == "reach_right" and direction == 1
        ):
            knee_x += direction * 0.04
            foot_x += direction * 0.06
        elif motion in ("slip", "fall"):
            knee_x += direction * math.sin(t * 18) * 0.05
            foot_y += t * 0.2
        elif motion == "pull_up":
            knee_y -= ease * 0.04
            foot_y -= ease * 0.06

        upper = solve_two_bone(hip, (knee_x, knee_y), rig.upper_leg, rig.lower_leg, direction)
        knee = upper.joint(hip, rig.upper_leg)
        lower = solve_two_bone(knee, (foot_x, foot_y), rig.lower_leg, rig.foot, direction)
        ankle = lower.joint(knee, rig.lower_leg)
        foot = (ankle[0] + rig.foot * direction, ankle[1] + 0.005)
        return LegPose(hip=hip, knee=knee, ankle=ankle, foot=foot)


def _jitter(t: float, n: int) -> float:
    return math.sin(t * 50 + n) * 0.05


def sample_clip(
    synth: PoseSynthesizer,
    clip: ClipName | str,
    frames: int,
    rng: random.Random | None = None,
) -> list[Pose]:
    """Sample *frames* evenly spaced poses across one instance of *clip*.

    The fall direction is drawn once here and shared by every frame.
    """
    if frames <= 0:
        msg = "frames must be positive"
        raise ValueError(msg)
    rng = rng or random.Random()
    fall_direction = rng.choice((-1, 1))
    logger.debug("Sampling clip '%s' (%d frames, fall_direction=%d)", clip, frames, fall_direction)
    return [
        synth.synthesize(clip, i / max(frames - 1, 1), fall_direction=fall_direction)
        for i in range(frames)
    ]
