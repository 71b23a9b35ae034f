"""Ascent - Textual TUI front end for the climbing game."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, ClassVar

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Header, Static

from ascent.models.enums import EndReason, RoundEvent, RoundPhase, Side
from ascent.widgets.climber_view import ClimberView
from ascent.widgets.hold_wall import HoldWall
from ascent.widgets.hud import Hud

if TYPE_CHECKING:
    from textual.binding import BindingType

    from ascent.engine.round import RoundCoordinator
    from ascent.pipeline.assets import SpriteAssets

TICK_HZ = 60

_TITLE = "Mountain Climber"
_INTRO = "Press LEFT or RIGHT to grab the next hold. Match the side, refill the timer, climb forever."


class AscentApp(App[None]):
    """Main Ascent TUI application.

    The app owns only the clock and the key bindings; every game decision is
    made by the :class:`RoundCoordinator` it is given.
    """

    TITLE = "Ascent"
    SUB_TITLE = "Reflex Climbing"

    CSS = """
    Screen {
        background: #0b1320;
        align: center middle;
    }

    Header {
        background: #3b82f6;
        color: #f8fafc;
        dock: top;
        height: 1;
    }

    Footer {
        background: #0f172a;
        color: #93c5fd;
    }

    #stage {
        width: auto;
        height: auto;
    }

    #play-area {
        width: auto;
        height: auto;
    }

    #overlay {
        width: 68;
        height: auto;
        margin: 1 0 0 0;
        padding: 0 1;
        background: #1e293b;
        color: #f8fafc;
        border: round #3b82f6;
        text-align: center;
    }

    #overlay.hidden {
        display: none;
    }
    """

    BINDINGS: ClassVar[list[BindingType]] = [
        Binding("left", "choose('left')", "Left", show=True),
        Binding("right", "choose('right')", "Right", show=True),
        Binding("a,h", "choose('left')", "Left", show=False),
        Binding("d,l", "choose('right')", "Right", show=False),
        Binding("space,r", "restart", "Start", show=True),
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(self, coordinator: RoundCoordinator, *, sprites: SpriteAssets | None = None) -> None:
        super().__init__()
        self.coordinator = coordinator
        self.sprites = sprites
        self._last_tick: float | None = None
        self._hud: Hud | None = None
        self._wall: HoldWall | None = None
        self._climber: ClimberView | None = None
        self._overlay: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="stage"):
            yield Hud(id="hud")
            with Horizontal(id="play-area"):
                yield HoldWall(id="holds")
                yield ClimberView(self.coordinator.player.clips, sprites=self.sprites, id="climber")
            yield Static(f"[b]{_TITLE}[/b]\n{_INTRO}\n[dim]space to start[/dim]", id="overlay")
        yield Footer()

    def on_mount(self) -> None:
        # The tick updates these even while another screen is on top.
        self._hud = self.query_one(Hud)
        self._wall = self.query_one(HoldWall)
        self._climber = self.query_one(ClimberView)
        self._overlay = self.query_one("#overlay", Static)
        self._last_tick = time.monotonic()
        self.set_interval(1 / TICK_HZ, self._on_tick)
        self._refresh_view()

    # ── Actions ──────────────────────────────────────────────
    def action_choose(self, side: str) -> None:
        """Funnel a side choice into the next tick."""
        self.coordinator.submit(Side(side))

    def action_restart(self) -> None:
        if self.coordinator.phase is not RoundPhase.RUNNING:
            self.coordinator.start()
            if self._overlay is not None:
                self._overlay.add_class("hidden")

    # ── Loop ─────────────────────────────────────────────────
    def _on_tick(self) -> None:
        now = time.monotonic()
        dt = now - (self._last_tick or now)
        self._last_tick = now
        self.coordinator.tick(dt)
        for event in self.coordinator.drain_events():
            if event is RoundEvent.ENDED:
                self._show_game_over()
        self._refresh_view()

    def _refresh_view(self) -> None:
        if self._hud is None or self._wall is None or self._climber is None:
            return
        if not self._hud.is_mounted:
            return
        snap = self.coordinator.snapshot()
        self._hud.show(snap)
        self._wall.set_holds(snap.holds)
        self._climber.show(snap.clip, snap.frame, snap.facing)

    def _show_game_over(self) -> None:
        snap = self.coordinator.snapshot()
        title = "Out of time!" if snap.end_reason is EndReason.TIMEOUT else "Wrong side!"
        overlay = self._overlay
        if overlay is None:
            return
        overlay.update(
            f"[b]Fell! {title}[/b]\nScore: {snap.score}   Best: {snap.best}\n"
            "[dim]space to climb again[/dim]"
        )
        overlay.remove_class("hidden")
        self.bell()
