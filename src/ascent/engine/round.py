"""Round coordinator: timer, score, holds and climber animation for one game."""

from __future__ import annotations

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ascent.config import GameplaySettings
from ascent.engine.holds import HoldSequence
from ascent.engine.player import AnimationPlayer
from ascent.engine.scoreboard import MemoryScoreboard
from ascent.models.enums import ClipName, EndReason, RoundEvent, RoundPhase, Side

if TYPE_CHECKING:
    from ascent.engine.scoreboard import Scoreboard
    from ascent.models.clip import ClipTable
    from ascent.models.hold import Hold

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundSnapshot:
    """Read-only view of the round handed to renderers once per tick."""

    phase: RoundPhase
    score: int
    best: int
    time_remaining: float
    time_fraction: float
    due_side: Side | None
    holds: tuple[Hold, ...]
    clip: ClipName
    frame: int
    facing: Side
    scroll: float
    scroll_speed: float
    end_reason: EndReason | None


class RoundCoordinator:
    """Owns the round state and the objects that make up one game.

    All mutation happens inside :meth:`tick`, in order: timer, animation,
    then any input queued with :meth:`submit` since the previous tick.
    """

    def __init__(
        self,
        clips: ClipTable,
        settings: GameplaySettings | None = None,
        *,
        fps: int = 24,
        scoreboard: Scoreboard | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or GameplaySettings()
        self.scheme = clips.scheme
        self.scoreboard = scoreboard or MemoryScoreboard()
        self.player = AnimationPlayer(clips, fps=fps)
        self.holds = HoldSequence(
            size=self.settings.window_size,
            max_run=self.settings.max_run,
            rng=rng,
        )
        self.phase = RoundPhase.READY
        self.score = 0
        self.time_remaining = self.settings.time_max
        self.end_reason: EndReason | None = None
        self.scroll = 0.0
        self._burst_left = 0.0
        self._failing = False
        self._inputs: deque[object] = deque()
        self._events: list[RoundEvent] = []
        self.holds.reset()
        if self.settings.success_bonus < self.input_lock:
            logger.warning(
                "success_bonus %.2fs is shorter than the %.2fs reach lock; "
                "a perfect climber will still run out of time",
                self.settings.success_bonus, self.input_lock,
            )

    # -- lifecycle ----------------------------------------------------------

    def start(self) -> None:
        """Begin a fresh round (from ready or ended)."""
        self.score = 0
        self.time_remaining = self.settings.time_max
        self.end_reason = None
        self.scroll = 0.0
        self._burst_left = 0.0
        self._failing = False
        self._inputs.clear()
        self._events.clear()
        self.holds.reset()
        self.player.reset()
        self.phase = RoundPhase.RUNNING
        logger.info("Round started (due side %s)", self.holds.peek_due())

    @property
    def running(self) -> bool:
        return self.phase is RoundPhase.RUNNING

    @property
    def best(self) -> int:
        return self.scoreboard.best()

    @property
    def reaching(self) -> bool:
        """True while the reach of the last grab is still playing."""
        return self.player.busy and self.player.clip in self.scheme.reach_clips

    @property
    def input_lock(self) -> float:
        """Longest time in seconds a reach clip holds off the next choice."""
        lengths = [self.player.clips[c].length for c in self.scheme.reach_clips if c in self.player.clips]
        return max(lengths, default=0) * self.player.frame_duration

    # -- input --------------------------------------------------------------

    def submit(self, side: object) -> None:
        """Queue a side choice to be applied on the next tick."""
        self._inputs.append(side)

    def choose_side(self, side: object) -> bool:
        """Apply a side choice now.  Returns True if it was accepted.

        Choices are ignored outside a running round, during the failure
        chain, while a reach clip is playing, or when *side* is not a side.
        The clips that follow a reach (``pull_up``, the return to rest) can
        be interrupted by the next grab.
        """
        try:
            chosen = Side(side)
        except ValueError:
            logger.debug("Ignoring unknown side %r", side)
            return False
        if not self.running or self._failing or self.reaching:
            logger.debug("Ignoring %s: round not accepting input", chosen)
            return False

        due = self.holds.peek_due()
        self.player.facing = chosen
        if chosen == due:
            self._succeed(chosen)
        else:
            self.time_remaining = 0.0
            self._fail(EndReason.WRONG_SIDE)
        return True

    # -- time ---------------------------------------------------------------

    def tick(self, dt: float) -> None:
        """Advance the round by *dt* seconds (clamped to ``[0, max_dt]``)."""
        dt = min(max(0.0, dt), self.settings.max_dt)

        if self.running:
            self.time_remaining = max(0.0, self.time_remaining - dt)
            if self.time_remaining <= 0.0 and not self._failing:
                self._fail(EndReason.TIMEOUT)

        self.scroll += self.scroll_speed * dt
        self._burst_left = max(0.0, self._burst_left - dt)

        clip_before = self.player.clip
        self.player.tick(dt)
        if self._failing and clip_before != ClipName.FALL and self.player.clip == ClipName.FALL:
            self._events.append(RoundEvent.FALL)

        while self._inputs:
            self.choose_side(self._inputs.popleft())

    @property
    def scroll_speed(self) -> float:
        speed = self.settings.scroll_base
        if self._burst_left > 0.0:
            speed += self.settings.scroll_burst
        return speed

    # -- outputs ------------------------------------------------------------

    def snapshot(self) -> RoundSnapshot:
        time_max = self.settings.time_max
        return RoundSnapshot(
            phase=self.phase,
            score=self.score,
            best=self.best,
            time_remaining=self.time_remaining,
            time_fraction=max(0.0, min(1.0, self.time_remaining / time_max)),
            due_side=self.holds.peek_due(),
            holds=self.holds.holds,
            clip=self.player.clip,
            frame=self.player.frame,
            facing=self.player.facing,
            scroll=self.scroll,
            scroll_speed=self.scroll_speed,
            end_reason=self.end_reason,
        )

    def drain_events(self) -> list[RoundEvent]:
        """Return feedback events raised since the last call."""
        events, self._events = self._events, []
        return events

    # -- internals ----------------------------------------------------------

    def _succeed(self, side: Side) -> None:
        self.score += 1
        self.holds.advance()
        self.time_remaining = min(
            self.settings.time_max,
            self.time_remaining + self.settings.success_bonus,
        )
        self._burst_left = self.settings.burst_seconds
        self.player.play_sequence(self.scheme.success_chain(side))
        self._events.append(RoundEvent.GRAB)
        logger.debug("Grabbed %s hold, score %d", side, self.score)

    def _fail(self, reason: EndReason) -> None:
        self._failing = True
        self.end_reason = reason
        self.player.play_sequence(self.scheme.failure_chain(), on_complete=self._end)
        self._events.append(RoundEvent.SLIP)
        logger.debug("Failure chain started (%s)", reason)

    def _end(self) -> None:
        self.phase = RoundPhase.ENDED
        best = self.scoreboard.submit(self.score)
        self._events.append(RoundEvent.ENDED)
        logger.info("Round over (%s): score %d, best %d", self.end_reason, self.score, best)
