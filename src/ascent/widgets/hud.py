"""Heads-up display - score, best, timer bar and the side to press."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.widgets import Static

from ascent.models.enums import RoundPhase, Side

if TYPE_CHECKING:
    from ascent.engine.round import RoundSnapshot


class Hud(Static):
    """One-line-per-field status panel driven by :class:`RoundSnapshot`."""

    DEFAULT_CSS = """
    Hud {
        height: auto;
        background: #0f172a;
        color: #e2e8f0;
        padding: 0 1;
    }
    """

    BAR_WIDTH = 30

    def show(self, snap: RoundSnapshot) -> None:
        self.update(self.render_hud(snap, self.BAR_WIDTH))

    @staticmethod
    def render_hud(snap: RoundSnapshot, bar_width: int = 30) -> str:
        filled = round(snap.time_fraction * bar_width)
        colour = "#e05a5a" if snap.time_fraction < 0.2 else "#5bc4a8"
        bar = f"[{colour}]{'█' * filled}[/][dim]{'░' * (bar_width - filled)}[/dim]"
        cue = ""
        if snap.phase is RoundPhase.RUNNING and snap.due_side is not None:
            cue = "◀ LEFT" if snap.due_side is Side.LEFT else "RIGHT ▶"
        return (
            f"[bold]SCORE[/bold] {snap.score}   [bold]BEST[/bold] {snap.best}   {cue}\n"
            f"{bar} {snap.time_remaining:4.1f}s"
        )
