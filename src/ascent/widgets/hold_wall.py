"""Hold wall widget - the upcoming hold window as two columns."""

from __future__ import annotations

from typing import TYPE_CHECKING

from textual.widgets import Static

from ascent.models.enums import Side

if TYPE_CHECKING:
    from ascent.models.hold import Hold

SIDE_COLOURS: dict[Side, str] = {
    Side.LEFT: "#7dd3fc",
    Side.RIGHT: "#fb7185",
}

_GLYPHS = {
    "small": "▬▬",
    "medium": "▬▬▬",
    "large": "▬▬▬▬",
    "circle": "●",
}


class HoldWall(Static):
    """Draw the hold window with the due hold at the bottom."""

    DEFAULT_CSS = """
    HoldWall {
        width: 30;
        height: auto;
        min-height: 14;
        background: #1e293b;
        border: round #475569;
        padding: 0 1;
    }
    """

    def __init__(self, *, id: str | None = None) -> None:
        super().__init__("", id=id)
        self._holds: tuple[Hold, ...] = ()

    def set_holds(self, holds: tuple[Hold, ...]) -> None:
        if holds == self._holds:
            return
        self._holds = holds
        self.update(self.render_wall(holds))

    @staticmethod
    def render_wall(holds: tuple[Hold, ...], column_width: int = 12) -> str:
        """Rich markup for *holds*, far end first and due hold last."""
        if not holds:
            return "[dim]No holds[/dim]"
        lines: list[str] = []
        for idx in range(len(holds) - 1, -1, -1):
            hold = holds[idx]
            glyph = _GLYPHS.get(hold.size.value, "▬▬")
            colour = SIDE_COLOURS[hold.side]
            style = f"bold reverse {colour}" if idx == 0 else colour
            cell = f"[{style}]{glyph}[/]"
            pad = " " * max(0, column_width - len(glyph))
            if hold.side is Side.LEFT:
                lines.append(f"{cell}{pad}")
            else:
                lines.append(f"{' ' * column_width}{pad}{cell}")
        return "\n".join(lines)
