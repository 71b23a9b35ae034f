"""Fixed-rate clip player driving the climber's animation state."""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

from ascent.models.enums import ClipName, Side

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from ascent.models.clip import ClipTable

logger = logging.getLogger(__name__)

# One-shot clips that hand over to another clip when nothing else is queued.
CHAIN_SUCCESSORS: dict[ClipName, ClipName] = {ClipName.SLIP: ClipName.FALL}

# One-shot clips that end the sequence in place instead of returning to rest.
TERMINAL_CLIPS: frozenset[ClipName] = frozenset({ClipName.FALL})


class UnknownClipError(KeyError):
    """Raised when asked to play a clip the table does not define."""


class AnimationPlayer:
    """Advance frames of the current clip at a fixed rate.

    A one-shot clip that runs out of frames hands over, in order of
    preference, to the head of the queued sequence, to its chain successor
    (``slip`` -> ``fall``), or finishes: it holds its last frame and fires the
    completion callback.  With no callback, a finished non-terminal clip
    returns to the rest clip.
    """

    def __init__(self, clips: ClipTable, *, fps: int = 24) -> None:
        if fps <= 0:
            msg = "fps must be positive"
            raise ValueError(msg)
        self.clips = clips
        self.frame_duration = 1.0 / fps
        self.rest_clip = clips.scheme.rest_clip
        self.clip: ClipName = self.rest_clip
        self.frame = 0
        self.elapsed = 0.0
        self.one_shot = not self._loops(self.rest_clip)
        self.finished = False
        self.facing = Side.LEFT
        self._queue: deque[ClipName] = deque()
        self._on_complete: Callable[[], None] | None = None
        self._warned: set[ClipName] = set()

    # -- control ----------------------------------------------------------

    def set_clip(self, name: ClipName | str) -> None:
        """Switch to *name*, dropping any queued sequence.  Same clip is a no-op."""
        clip = self._resolve(name)
        if clip == self.clip:
            return
        self._queue.clear()
        self._on_complete = None
        self._start(clip)

    def play_sequence(
        self,
        names: Iterable[ClipName | str],
        on_complete: Callable[[], None] | None = None,
    ) -> None:
        """Play *names* back to back, then call *on_complete* once."""
        clips = [self._resolve(n) for n in names]
        self._queue = deque(clips)
        self._on_complete = on_complete
        self._advance()

    def reset(self) -> None:
        """Return to the rest clip facing left with nothing queued."""
        self._queue.clear()
        self._on_complete = None
        self.facing = Side.LEFT
        self._start(self.rest_clip)

    @property
    def busy(self) -> bool:
        """True while a one-shot sequence is still running."""
        return self.one_shot and not self.finished

    @property
    def pending(self) -> tuple[ClipName, ...]:
        return tuple(self._queue)

    # -- time -------------------------------------------------------------

    def tick(self, dt: float) -> None:
        """Accumulate *dt* seconds and advance one frame per elapsed frame duration."""
        clip = self.clips[self.clip]
        if clip.length == 0:
            if self.clip not in self._warned:
                self._warned.add(self.clip)
                logger.warning("Clip '%s' has no frames; animation paused", self.clip)
            return
        if self.finished:
            return

        self.elapsed += max(0.0, dt)
        while self.elapsed >= self.frame_duration:
            self.elapsed -= self.frame_duration
            self.frame += 1
            clip = self.clips[self.clip]
            if self.frame >= clip.length:
                self._on_clip_end(clip.loop)
                if self.finished or self.clips[self.clip].length == 0:
                    self.elapsed = 0.0
                    break

    # -- internals --------------------------------------------------------

    def _resolve(self, name: ClipName | str) -> ClipName:
        try:
            clip = ClipName(name)
        except ValueError:
            raise UnknownClipError(name) from None
        if clip not in self.clips:
            raise UnknownClipError(clip)
        return clip

    def _loops(self, clip: ClipName) -> bool:
        return self.clips[clip].loop

    def _start(self, clip: ClipName) -> None:
        self.clip = clip
        self.frame = 0
        self.elapsed = 0.0
        self.finished = False
        self.one_shot = not self._loops(clip)

    def _advance(self) -> None:
        """Start the next queued clip, or complete the sequence."""
        if self._queue:
            self._start(self._queue.popleft())
            if not self._queue and not self.one_shot:
                # A looping clip never ends, so reaching it drains the sequence.
                self._complete()
            return
        self._complete()

    def _on_clip_end(self, loop: bool) -> None:
        if loop:
            self.frame = 0
            return
        if self._queue:
            self._advance()
            return
        successor = CHAIN_SUCCESSORS.get(self.clip)
        if successor is not None and successor in self.clips:
            self._start(successor)
            return

        self.frame = max(0, self.clips[self.clip].length - 1)
        self.finished = True
        if self._on_complete is not None:
            self._complete()
        elif self.clip not in TERMINAL_CLIPS:
            self._start(self.rest_clip)

    def _complete(self) -> None:
        callback, self._on_complete = self._on_complete, None
        if callback is not None:
            callback()
