"""Endless hold window with a fairness limit on same-side runs."""

from __future__ import annotations

import logging
import random
from collections import deque
from itertools import islice
from typing import TYPE_CHECKING

from ascent.models.enums import HoldShape, HoldSize, Side
from ascent.models.hold import Hold

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

_HUES = (160, 180, 200, 220, 260, 300)


def trailing_run(sides: Sequence[Side], limit: int) -> int:
    """Count identical sides at the end of *sides*, looking back at most *limit*."""
    if not sides:
        return 0
    last = sides[-1]
    run = 0
    for side in reversed(sides[-limit:]):
        if side != last:
            break
        run += 1
    return run


def choose_side(run: int, last: Side | None, rng: random.Random, max_run: int) -> Side:
    """Fair coin, unless one more *last* would complete a run of *max_run*."""
    side = Side.LEFT if rng.random() < 0.5 else Side.RIGHT
    if last is not None and run >= max_run - 1:
        side = last.opposite
    return side


def random_muted_color(rng: random.Random) -> str:
    hue = rng.choice(_HUES)
    saturation = 28 + rng.randrange(12)
    lightness = 58 + rng.randrange(10)
    return f"hsl({hue} {saturation}% {lightness}%)"


def random_hold_look(rng: random.Random) -> tuple[HoldSize, HoldShape]:
    size = rng.choice(list(HoldSize))
    if size is HoldSize.CIRCLE:
        return size, HoldShape.CIRCLE
    return size, rng.choice(list(HoldShape))


class HoldSequence:
    """Window of upcoming holds; the oldest entry is the due hold.

    Usage::

        holds = HoldSequence(size=12, max_run=3)
        holds.reset()
        if choice == holds.peek_due():
            holds.advance()
    """

    def __init__(
        self,
        size: int = 12,
        max_run: int = 3,
        rng: random.Random | None = None,
    ) -> None:
        if size < 1:
            msg = "window size must be at least 1"
            raise ValueError(msg)
        if max_run < 2:
            msg = "max_run must be at least 2"
            raise ValueError(msg)
        self.size = size
        self.max_run = max_run
        self.rng = rng or random.Random()
        self._window: deque[Hold] = deque()

    def __len__(self) -> int:
        return len(self._window)

    @property
    def holds(self) -> tuple[Hold, ...]:
        """Holds in order, due hold first."""
        return tuple(self._window)

    def reset(self) -> None:
        """Tear down the window and fill it with fresh holds."""
        self._window.clear()
        while len(self._window) < self.size:
            self.append_next()
        logger.debug("Hold window rebuilt: %s", " ".join(h.side.value[0] for h in self._window))

    def peek_due(self) -> Side | None:
        if not self._window:
            return None
        return self._window[0].side

    def consume_due(self) -> Hold:
        """Remove and return the due hold; call :meth:`append_next` afterwards."""
        if not self._window:
            msg = "hold window is empty"
            raise IndexError(msg)
        return self._window.popleft()

    def append_next(self) -> Hold:
        """Add one hold at the far end of the window."""
        recent = [h.side for h in islice(reversed(self._window), self.max_run)][::-1]
        run = trailing_run(recent, self.max_run)
        last = recent[-1] if recent else None
        size, shape = random_hold_look(self.rng)
        hold = Hold(
            side=choose_side(run, last, self.rng, self.max_run),
            size=size,
            shape=shape,
            color=random_muted_color(self.rng),
        )
        self._window.append(hold)
        return hold

    def advance(self) -> Hold:
        """Consume the due hold and top the window back up."""
        consumed = self.consume_due()
        while len(self._window) < self.size:
            self.append_next()
        return consumed
