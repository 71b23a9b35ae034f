"""Tests for the animation clip player."""

import logging

import pytest

from ascent.engine.player import AnimationPlayer, UnknownClipError
from ascent.models import ClipDef, ClipTable
from ascent.models.enums import ClipName, ClipScheme, Side

FRAME = 1 / 24


def _tick_frames(player: AnimationPlayer, n: int) -> None:
    for _ in range(n):
        player.tick(FRAME)


def test_starts_on_rest_clip(short_table):
    player = AnimationPlayer(short_table)
    assert player.clip is ClipName.IDLE
    assert player.frame == 0
    assert player.facing is Side.LEFT
    assert not player.busy


def test_rejects_bad_fps(short_table):
    with pytest.raises(ValueError, match="fps"):
        AnimationPlayer(short_table, fps=0)


def test_looping_clip_wraps(short_table):
    player = AnimationPlayer(short_table)
    _tick_frames(player, 5)
    assert player.clip is ClipName.IDLE
    assert player.frame == 1


def test_large_dt_advances_several_frames(short_table):
    player = AnimationPlayer(short_table)
    player.tick(FRAME * 3 + FRAME / 2)
    assert player.frame == 3
    assert player.elapsed == pytest.approx(FRAME / 2)


def test_negative_dt_is_ignored(short_table):
    player = AnimationPlayer(short_table)
    player.tick(-1.0)
    assert player.frame == 0
    assert player.elapsed == 0.0


def test_set_clip_same_clip_is_noop(short_table):
    player = AnimationPlayer(short_table)
    _tick_frames(player, 2)
    player.set_clip("idle")
    assert player.frame == 2


def test_set_clip_restarts_from_zero(short_table):
    player = AnimationPlayer(short_table)
    _tick_frames(player, 2)
    player.set_clip(ClipName.REACH_LEFT)
    assert player.clip is ClipName.REACH_LEFT
    assert player.frame == 0
    assert player.busy


def test_unknown_clip_raises(short_table):
    player = AnimationPlayer(short_table)
    with pytest.raises(UnknownClipError):
        player.set_clip("cartwheel")
    with pytest.raises(UnknownClipError):
        player.set_clip(ClipName.PULL_UP)


def test_one_shot_returns_to_rest(short_table):
    player = AnimationPlayer(short_table)
    player.set_clip(ClipName.REACH_RIGHT)
    _tick_frames(player, 4)
    assert player.clip is ClipName.IDLE
    assert player.frame == 0
    assert not player.busy


def test_slip_chains_to_fall_and_holds_last_frame(short_table):
    player = AnimationPlayer(short_table)
    player.set_clip(ClipName.SLIP)
    _tick_frames(player, 4)
    assert player.clip is ClipName.FALL
    _tick_frames(player, 10)
    assert player.clip is ClipName.FALL
    assert player.finished
    assert player.frame == 3


def test_sequence_plays_in_order_and_completes_once(short_table):
    calls: list[str] = []
    player = AnimationPlayer(short_table)
    player.play_sequence(["slip", "fall"], on_complete=lambda: calls.append("done"))
    assert player.clip is ClipName.SLIP
    assert player.pending == (ClipName.FALL,)
    _tick_frames(player, 4)
    assert player.clip is ClipName.FALL
    assert calls == []
    _tick_frames(player, 4)
    assert calls == ["done"]
    _tick_frames(player, 8)
    assert calls == ["done"]
    assert player.frame == 3


def test_sequence_ending_in_loop_completes_on_entry(short_table):
    calls: list[int] = []
    player = AnimationPlayer(short_table)
    player.play_sequence([ClipName.REACH_LEFT, ClipName.IDLE], on_complete=lambda: calls.append(1))
    _tick_frames(player, 3)
    assert calls == []
    _tick_frames(player, 1)
    assert player.clip is ClipName.IDLE
    assert calls == [1]


def test_set_clip_drops_sequence_and_callback(short_table):
    calls: list[int] = []
    player = AnimationPlayer(short_table)
    player.play_sequence(["reach_left", "idle"], on_complete=lambda: calls.append(1))
    player.set_clip(ClipName.SLIP)
    assert player.pending == ()
    _tick_frames(player, 20)
    assert calls == []


def test_reset_restores_rest_state(short_table):
    player = AnimationPlayer(short_table)
    player.facing = Side.RIGHT
    player.play_sequence(["slip", "fall"])
    _tick_frames(player, 2)
    player.reset()
    assert player.clip is ClipName.IDLE
    assert player.frame == 0
    assert player.facing is Side.LEFT
    assert player.pending == ()


def test_zero_frame_clip_pauses_and_warns_once(caplog):
    table = ClipTable(
        scheme=ClipScheme.CLASSIC,
        frame_width=16,
        frame_height=16,
        rows=5,
        cols=4,
        clips={
            ClipName.IDLE: ClipDef(name=ClipName.IDLE, frames=(), loop=True),
            ClipName.REACH_LEFT: ClipDef.row(ClipName.REACH_LEFT, 1, 4),
            ClipName.REACH_RIGHT: ClipDef.row(ClipName.REACH_RIGHT, 2, 4),
            ClipName.SLIP: ClipDef.row(ClipName.SLIP, 3, 4),
            ClipName.FALL: ClipDef.row(ClipName.FALL, 4, 4),
        },
    )
    player = AnimationPlayer(table)
    with caplog.at_level(logging.WARNING, logger="ascent.engine.player"):
        _tick_frames(player, 3)
    assert player.frame == 0
    assert sum("no frames" in r.message for r in caplog.records) == 1


def test_matching_scheme_rests_on_idle_hang(matching_table):
    player = AnimationPlayer(matching_table)
    assert player.clip is ClipName.IDLE_HANG
    player.play_sequence(ClipScheme.MATCHING.success_chain(Side.RIGHT))
    assert player.clip is ClipName.REACH
    _tick_frames(player, 24)
    assert player.clip is ClipName.PULL_UP
    _tick_frames(player, 24)
    assert player.clip is ClipName.IDLE_HANG


def test_empty_sequence_completes_immediately(short_table):
    calls: list[int] = []
    player = AnimationPlayer(short_table)
    player.play_sequence([], on_complete=lambda: calls.append(1))
    assert calls == [1]
    assert player.clip is ClipName.IDLE
