"""Enumerations used throughout Ascent."""

from enum import StrEnum


class Side(StrEnum):
    LEFT = "left"
    RIGHT = "right"

    @property
    def opposite(self) -> "Side":
        return Side.RIGHT if self is Side.LEFT else Side.LEFT

    @property
    def sign(self) -> int:
        return -1 if self is Side.LEFT else 1


class ClipName(StrEnum):
    IDLE = "idle"
    REACH_LEFT = "reach_left"
    REACH_RIGHT = "reach_right"
    SLIP = "slip"
    FALL = "fall"
    # Names used by the matching-input sheet layout.
    IDLE_HANG = "idle_hang"
    REACH = "reach"
    PULL_UP = "pull_up"


class ClipScheme(StrEnum):
    CLASSIC = "classic"
    MATCHING = "matching"

    @property
    def clips(self) -> tuple[ClipName, ...]:
        """Clip names in sheet row order."""
        if self is ClipScheme.MATCHING:
            return (ClipName.IDLE_HANG, ClipName.REACH, ClipName.PULL_UP, ClipName.SLIP, ClipName.FALL)
        return (ClipName.IDLE, ClipName.REACH_LEFT, ClipName.REACH_RIGHT, ClipName.SLIP, ClipName.FALL)

    @property
    def rest_clip(self) -> ClipName:
        return self.clips[0]

    @property
    def reach_clips(self) -> frozenset[ClipName]:
        """Clips that hold off the next side choice while they play."""
        if self is ClipScheme.MATCHING:
            return frozenset({ClipName.REACH})
        return frozenset({ClipName.REACH_LEFT, ClipName.REACH_RIGHT})

    def success_chain(self, side: Side) -> list[ClipName]:
        if self is ClipScheme.MATCHING:
            return [ClipName.REACH, ClipName.PULL_UP, ClipName.IDLE_HANG]
        reach = ClipName.REACH_LEFT if side is Side.LEFT else ClipName.REACH_RIGHT
        return [reach, ClipName.IDLE]

    def failure_chain(self) -> list[ClipName]:
        return [ClipName.SLIP, ClipName.FALL]


class HoldSize(StrEnum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    CIRCLE = "circle"


class HoldShape(StrEnum):
    ROUNDED = "rounded"
    PILL = "pill"
    CIRCLE = "circle"


class RoundPhase(StrEnum):
    READY = "ready"
    RUNNING = "running"
    ENDED = "ended"


class EndReason(StrEnum):
    TIMEOUT = "timeout"
    WRONG_SIDE = "wrong_side"


class RoundEvent(StrEnum):
    GRAB = "grab"
    SLIP = "slip"
    FALL = "fall"
    ENDED = "ended"
