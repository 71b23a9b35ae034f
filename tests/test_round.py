"""Tests for the round coordinator (timer, scoring, failure chain)."""

import logging
import random

import pytest

from ascent.config import GameplaySettings
from ascent.engine.round import RoundCoordinator
from ascent.engine.scoreboard import MemoryScoreboard
from ascent.models.enums import ClipName, EndReason, RoundEvent, RoundPhase, Side

STEP = 0.05


def _run(coord: RoundCoordinator, seconds: float) -> list[RoundEvent]:
    events: list[RoundEvent] = []
    for _ in range(round(seconds / STEP)):
        coord.tick(STEP)
        events.extend(coord.drain_events())
    return events


def _press(coord: RoundCoordinator, side: Side) -> list[RoundEvent]:
    coord.submit(side)
    coord.tick(0.0)
    return coord.drain_events()


def _grab(coord: RoundCoordinator) -> None:
    """Press the due side, then let the reach clip finish."""
    _press(coord, coord.holds.peek_due())
    _run(coord, 1.05)


# ── Lifecycle ───────────────────────────────────────────────────


def test_ready_until_started(coordinator):
    snap = coordinator.snapshot()
    assert snap.phase is RoundPhase.READY
    assert snap.score == 0
    assert snap.time_remaining == pytest.approx(3.0)
    assert snap.clip is ClipName.IDLE


def test_input_ignored_before_start(coordinator):
    _press(coordinator, coordinator.holds.peek_due())
    assert coordinator.score == 0
    assert coordinator.phase is RoundPhase.READY


def test_timer_does_not_run_before_start(coordinator):
    _run(coordinator, 1.0)
    assert coordinator.time_remaining == pytest.approx(3.0)


def test_start_resets_round(coordinator):
    coordinator.start()
    assert coordinator.running
    assert coordinator.score == 0
    assert len(coordinator.holds) == 12
    assert coordinator.end_reason is None


# ── Success ─────────────────────────────────────────────────────


def test_correct_side_scores_and_grabs(coordinator):
    coordinator.start()
    due = coordinator.holds.peek_due()
    events = _press(coordinator, due)
    assert events == [RoundEvent.GRAB]
    assert coordinator.score == 1
    assert coordinator.player.facing is due
    expected = ClipName.REACH_LEFT if due is Side.LEFT else ClipName.REACH_RIGHT
    assert coordinator.player.clip is expected


def test_success_advances_holds(coordinator):
    coordinator.start()
    second = coordinator.holds.holds[1]
    _press(coordinator, coordinator.holds.peek_due())
    assert coordinator.holds.holds[0] == second
    assert len(coordinator.holds) == 12


def test_bonus_refills_timer_up_to_max(coordinator):
    coordinator.start()
    _run(coordinator, 1.0)
    assert coordinator.time_remaining == pytest.approx(2.0)
    _press(coordinator, coordinator.holds.peek_due())
    assert coordinator.time_remaining == pytest.approx(3.0)


def test_bonus_adds_when_below_cap(coordinator):
    coordinator.start()
    _run(coordinator, 2.0)
    _press(coordinator, coordinator.holds.peek_due())
    assert coordinator.time_remaining == pytest.approx(2.5)


def test_input_locked_during_reach(coordinator):
    coordinator.start()
    _press(coordinator, coordinator.holds.peek_due())
    # Wrong or right, nothing is accepted until the reach finishes.
    _press(coordinator, coordinator.holds.peek_due().opposite)
    assert coordinator.running
    assert coordinator.score == 1
    _run(coordinator, 1.05)
    assert coordinator.player.clip is ClipName.IDLE
    _press(coordinator, coordinator.holds.peek_due())
    assert coordinator.score == 2


def test_player_can_keep_climbing(coordinator):
    coordinator.start()
    for _ in range(10):
        _grab(coordinator)
    assert coordinator.running
    assert coordinator.score == 10


def test_success_triggers_scroll_burst(coordinator):
    settings = coordinator.settings
    coordinator.start()
    assert coordinator.scroll_speed == pytest.approx(settings.scroll_base)
    _press(coordinator, coordinator.holds.peek_due())
    assert coordinator.scroll_speed == pytest.approx(settings.scroll_base + settings.scroll_burst)
    _run(coordinator, 0.15)
    assert coordinator.scroll_speed == pytest.approx(settings.scroll_base)
    assert coordinator.scroll > 0


# ── Failure ─────────────────────────────────────────────────────


def test_wrong_side_empties_timer_and_slips(coordinator):
    coordinator.start()
    events = _press(coordinator, coordinator.holds.peek_due().opposite)
    assert events == [RoundEvent.SLIP]
    assert coordinator.time_remaining == 0.0
    assert coordinator.player.clip is ClipName.SLIP
    assert coordinator.end_reason is EndReason.WRONG_SIDE
    # Still running until the fall finishes.
    assert coordinator.phase is RoundPhase.RUNNING


def test_wrong_side_round_ends_after_fall(coordinator, scoreboard):
    coordinator.start()
    _grab(coordinator)
    _grab(coordinator)
    _press(coordinator, coordinator.holds.peek_due().opposite)
    events = _run(coordinator, 2.5)
    assert events == [RoundEvent.FALL, RoundEvent.ENDED]
    snap = coordinator.snapshot()
    assert snap.phase is RoundPhase.ENDED
    assert snap.end_reason is EndReason.WRONG_SIDE
    assert snap.clip is ClipName.FALL
    assert snap.score == 2
    assert scoreboard.best() == 2
    assert snap.best == 2


def test_timeout_fails_round(coordinator):
    coordinator.start()
    events = _run(coordinator, 3.05)
    assert RoundEvent.SLIP in events
    assert coordinator.end_reason is EndReason.TIMEOUT
    assert coordinator.player.clip is ClipName.SLIP
    events = _run(coordinator, 2.5)
    assert events == [RoundEvent.FALL, RoundEvent.ENDED]
    assert coordinator.phase is RoundPhase.ENDED


def test_input_ignored_while_failing(coordinator):
    coordinator.start()
    _run(coordinator, 3.05)
    _press(coordinator, coordinator.holds.peek_due())
    assert coordinator.score == 0
    _run(coordinator, 2.5)
    _press(coordinator, coordinator.holds.peek_due())
    assert coordinator.score == 0


def test_ended_event_fires_once(coordinator):
    coordinator.start()
    events = _run(coordinator, 8.0)
    assert events.count(RoundEvent.ENDED) == 1


def test_restart_after_end(coordinator):
    coordinator.start()
    _grab(coordinator)
    _press(coordinator, coordinator.holds.peek_due().opposite)
    _run(coordinator, 2.5)
    coordinator.start()
    snap = coordinator.snapshot()
    assert snap.phase is RoundPhase.RUNNING
    assert snap.score == 0
    assert snap.best == 1
    assert snap.clip is ClipName.IDLE
    assert snap.facing is Side.LEFT
    assert snap.time_remaining == pytest.approx(3.0)


def test_best_keeps_highest(coordinator, scoreboard):
    scoreboard.submit(5)
    coordinator.start()
    _grab(coordinator)
    _press(coordinator, coordinator.holds.peek_due().opposite)
    _run(coordinator, 2.5)
    assert coordinator.best == 5


# ── Inputs and time ─────────────────────────────────────────────


@pytest.mark.parametrize("bad", ["up", "", None, 3])
def test_unknown_side_ignored(coordinator, bad: object) -> None:
    coordinator.start()
    assert coordinator.choose_side(bad) is False
    assert coordinator.running
    assert coordinator.score == 0


def test_choose_side_accepts_strings(coordinator):
    coordinator.start()
    assert coordinator.choose_side(coordinator.holds.peek_due().value) is True
    assert coordinator.score == 1


def test_dt_is_clamped(coordinator):
    coordinator.start()
    coordinator.tick(10.0)
    assert coordinator.time_remaining == pytest.approx(3.0 - coordinator.settings.max_dt)
    coordinator.tick(-1.0)
    assert coordinator.time_remaining == pytest.approx(3.0 - coordinator.settings.max_dt)


def test_snapshot_time_fraction(coordinator):
    coordinator.start()
    _run(coordinator, 1.5)
    snap = coordinator.snapshot()
    assert snap.time_fraction == pytest.approx(0.5)
    assert snap.due_side is coordinator.holds.peek_due()
    assert snap.holds == coordinator.holds.holds


def test_drain_events_clears(coordinator):
    coordinator.start()
    coordinator.submit(coordinator.holds.peek_due())
    coordinator.tick(0.0)
    assert coordinator.drain_events() == [RoundEvent.GRAB]
    assert coordinator.drain_events() == []


def test_custom_settings(classic_table):
    settings = GameplaySettings(time_max=5.0, success_bonus=1.0, window_size=4)
    coord = RoundCoordinator(
        classic_table, settings, scoreboard=MemoryScoreboard(), rng=random.Random(1)
    )
    coord.start()
    assert coord.time_remaining == pytest.approx(5.0)
    assert len(coord.holds) == 4


# ── Matching scheme ─────────────────────────────────────────────


def test_matching_scheme_success_chain(matching_table):
    coord = RoundCoordinator(matching_table, rng=random.Random(2))
    coord.start()
    assert coord.player.clip is ClipName.IDLE_HANG
    _press(coord, coord.holds.peek_due())
    assert coord.player.clip is ClipName.REACH
    assert coord.reaching
    _run(coord, 1.05)
    assert coord.player.clip is ClipName.PULL_UP
    assert not coord.reaching
    _run(coord, 1.1)
    assert coord.player.clip is ClipName.IDLE_HANG


def test_matching_grab_interrupts_pull_up(matching_table):
    coord = RoundCoordinator(matching_table, rng=random.Random(2))
    coord.start()
    _press(coord, coord.holds.peek_due())
    _run(coord, 1.05)
    assert coord.player.clip is ClipName.PULL_UP
    assert _press(coord, coord.holds.peek_due()) == [RoundEvent.GRAB]
    assert coord.score == 2
    assert coord.player.clip is ClipName.REACH
    assert coord.player.frame == 0


def test_matching_player_can_keep_climbing(matching_table):
    coord = RoundCoordinator(matching_table, rng=random.Random(4))
    coord.start()
    for _ in range(10):
        _press(coord, coord.holds.peek_due())
        while coord.reaching:
            coord.tick(STEP)
    assert coord.running
    assert coord.end_reason is None
    assert coord.score == 10


@pytest.mark.parametrize("scheme_table", ["classic_table", "matching_table"])
def test_default_bonus_covers_reach_lock(scheme_table: str, request: pytest.FixtureRequest) -> None:
    coord = RoundCoordinator(request.getfixturevalue(scheme_table))
    assert coord.input_lock == pytest.approx(1.0)
    assert coord.settings.success_bonus > coord.input_lock


def test_short_bonus_is_warned(classic_table, caplog):
    settings = GameplaySettings(success_bonus=0.5)
    with caplog.at_level(logging.WARNING, logger="ascent.engine.round"):
        RoundCoordinator(classic_table, settings)
    assert "reach lock" in caplog.text
