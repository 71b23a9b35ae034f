"""Game engine: clip player, hold generator, round coordinator and scoreboard."""

from ascent.engine.holds import HoldSequence, choose_side, trailing_run
from ascent.engine.player import AnimationPlayer, UnknownClipError
from ascent.engine.round import RoundCoordinator, RoundSnapshot
from ascent.engine.scoreboard import FileScoreboard, MemoryScoreboard, Scoreboard

__all__ = [
    "AnimationPlayer",
    "FileScoreboard",
    "HoldSequence",
    "MemoryScoreboard",
    "RoundCoordinator",
    "RoundSnapshot",
    "Scoreboard",
    "UnknownClipError",
    "choose_side",
    "trailing_run",
]
