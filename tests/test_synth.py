"""Tests for the pose synthesizer and easing curves."""

import math
import random

import pytest

from ascent.models.enums import ClipName
from ascent.rig.easing import ease_in_out_sine, ease_out_back, lerp
from ascent.rig.synth import PoseSynthesizer, Rig, sample_clip


def _dist(a: tuple[float, float], b: tuple[float, float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


# ── Easing ──────────────────────────────────────────────────────


def test_easing_endpoints():
    assert ease_in_out_sine(0.0) == pytest.approx(0.0)
    assert ease_in_out_sine(1.0) == pytest.approx(1.0)
    assert ease_in_out_sine(0.5) == pytest.approx(0.5)
    assert ease_out_back(0.0) == pytest.approx(0.0)
    assert ease_out_back(1.0) == pytest.approx(1.0)


def test_ease_out_back_overshoots():
    assert max(ease_out_back(i / 100) for i in range(101)) > 1.0


def test_lerp():
    assert lerp(2.0, 4.0, 0.25) == pytest.approx(2.5)


# ── Synthesis ───────────────────────────────────────────────────


@pytest.mark.parametrize("clip", list(ClipName))
def test_every_clip_synthesizes(clip: ClipName) -> None:
    synth = PoseSynthesizer()
    for t in (0.0, 0.5, 1.0):
        pose = synth.synthesize(clip, t)
        assert pose.clip == clip.value
        assert all(math.isfinite(c) for p in pose.points().values() for c in p)


def test_synthesis_is_deterministic():
    synth = PoseSynthesizer()
    assert synth.synthesize(ClipName.SLIP, 0.37) == synth.synthesize(ClipName.SLIP, 0.37)


def test_time_is_clamped():
    synth = PoseSynthesizer()
    assert synth.synthesize(ClipName.IDLE, -1.0) == synth.synthesize(ClipName.IDLE, 0.0)
    assert synth.synthesize(ClipName.IDLE, 2.0) == synth.synthesize(ClipName.IDLE, 1.0)


def test_bone_lengths_are_preserved():
    rig = Rig()
    pose = PoseSynthesizer(rig).synthesize(ClipName.REACH_LEFT, 0.6)
    for arm in (pose.left_arm, pose.right_arm):
        assert _dist(arm.shoulder, arm.elbow) == pytest.approx(rig.upper_arm)
        assert _dist(arm.elbow, arm.hand) == pytest.approx(rig.forearm)
    for leg in (pose.left_leg, pose.right_leg):
        assert _dist(leg.hip, leg.knee) == pytest.approx(rig.upper_leg)
        assert _dist(leg.knee, leg.ankle) == pytest.approx(rig.lower_leg)


def test_reach_left_raises_left_hand_over_time():
    synth = PoseSynthesizer()
    start = synth.synthesize(ClipName.REACH_LEFT, 0.0).left_arm.hand
    end = synth.synthesize(ClipName.REACH_LEFT, 1.0).left_arm.hand
    # y grows downward: a higher hand has a smaller y.
    assert end[1] < start[1]


def test_reach_sides_mirror_lean():
    synth = PoseSynthesizer()
    left = synth.synthesize(ClipName.REACH_LEFT, 0.5).torso
    right = synth.synthesize(ClipName.REACH_RIGHT, 0.5).torso
    assert left.lean < 0 < right.lean
    assert left.lean == pytest.approx(-right.lean)
    assert left.rotation == pytest.approx(-right.rotation)


def test_fall_direction_sets_rotation_sign():
    synth = PoseSynthesizer()
    right = synth.synthesize(ClipName.FALL, 1.0, fall_direction=1).torso
    left = synth.synthesize(ClipName.FALL, 1.0, fall_direction=-1).torso
    assert right.rotation == pytest.approx(math.pi / 2)
    assert left.rotation == pytest.approx(-math.pi / 2)
    assert right.drop == pytest.approx(0.25)


def test_pull_up_raises_body():
    synth = PoseSynthesizer()
    assert synth.synthesize(ClipName.PULL_UP, 1.0).torso.drop < 0


def test_matching_reach_draws_like_reach_left():
    synth = PoseSynthesizer()
    a = synth.synthesize(ClipName.REACH, 0.4)
    b = synth.synthesize(ClipName.REACH_LEFT, 0.4)
    assert a.points() == b.points()
    assert a.torso == b.torso


# ── Clip sampling ───────────────────────────────────────────────


def test_sample_clip_spans_zero_to_one():
    poses = sample_clip(PoseSynthesizer(), ClipName.IDLE, 5, random.Random(0))
    assert [p.t for p in poses] == pytest.approx([0.0, 0.25, 0.5, 0.75, 1.0])


def test_sample_clip_single_frame():
    poses = sample_clip(PoseSynthesizer(), ClipName.IDLE, 1, random.Random(0))
    assert len(poses) == 1
    assert poses[0].t == 0.0


def test_sample_clip_fall_direction_is_shared():
    poses = sample_clip(PoseSynthesizer(), ClipName.FALL, 12, random.Random(3))
    signs = {math.copysign(1, p.torso.rotation) for p in poses[1:]}
    assert len(signs) == 1


def test_sample_clip_rejects_zero_frames():
    with pytest.raises(ValueError, match="positive"):
        sample_clip(PoseSynthesizer(), ClipName.IDLE, 0)
