"""Custom Textual widgets for the Ascent TUI."""

from ascent.widgets.climber_view import ClimberView
from ascent.widgets.hold_wall import HoldWall
from ascent.widgets.hud import Hud

__all__ = ["ClimberView", "HoldWall", "Hud"]
