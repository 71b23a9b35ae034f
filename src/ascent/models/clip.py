"""Clip and clip-table models describing a character sprite sheet."""

from __future__ import annotations

import logging
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ascent.models.enums import ClipName, ClipScheme

logger = logging.getLogger(__name__)

# Spellings found in hand-written manifests.
_ALIASES: dict[str, ClipName] = {
    "reachl": ClipName.REACH_LEFT,
    "reachr": ClipName.REACH_RIGHT,
}

_CELL_KEY = re.compile(r"^(\d+)-(\d+)$")


class ManifestError(ValueError):
    """Raised when a sprite manifest cannot be turned into a clip table."""


class FrameCell(BaseModel):
    """Position of one frame on the sprite sheet grid."""

    model_config = ConfigDict(frozen=True)

    row: int = Field(ge=0)
    col: int = Field(ge=0)


class ClipDef(BaseModel):
    """A named, ordered sequence of frames with a loop flag."""

    model_config = ConfigDict(frozen=True)

    name: ClipName
    frames: tuple[FrameCell, ...] = ()
    loop: bool = False

    @property
    def length(self) -> int:
        return len(self.frames)

    @classmethod
    def row(cls, name: ClipName, row: int, length: int, *, loop: bool = False) -> ClipDef:
        """Build a clip that occupies the first *length* cells of a sheet row."""
        return cls(
            name=name,
            frames=tuple(FrameCell(row=row, col=c) for c in range(length)),
            loop=loop,
        )


class ClipTable(BaseModel):
    """Mapping of clip name to frames, plus the sheet geometry."""

    model_config = ConfigDict(frozen=True)

    scheme: ClipScheme = ClipScheme.CLASSIC
    frame_width: int = Field(gt=0)
    frame_height: int = Field(gt=0)
    rows: int = Field(gt=0)
    cols: int = Field(gt=0)
    clips: dict[ClipName, ClipDef]

    def __contains__(self, name: object) -> bool:
        return name in self.clips

    def __getitem__(self, name: ClipName | str) -> ClipDef:
        return self.clips[ClipName(name)]

    def source_box(self, name: ClipName | str, frame: int) -> tuple[int, int, int, int]:
        """Pixel box ``(left, top, right, bottom)`` of *frame* of clip *name*."""
        clip = self[name]
        if clip.length == 0:
            msg = f"clip '{clip.name}' has no frames"
            raise ValueError(msg)
        cell = clip.frames[min(clip.length - 1, max(0, frame))]
        left = cell.col * self.frame_width
        top = cell.row * self.frame_height
        return (left, top, left + self.frame_width, top + self.frame_height)

    @classmethod
    def uniform(
        cls,
        scheme: ClipScheme,
        frame_size: int,
        frames_per_clip: int,
    ) -> ClipTable:
        """One clip per row, every row the same length; the rest clip loops."""
        clips = {
            name: ClipDef.row(name, row, frames_per_clip, loop=name == scheme.rest_clip)
            for row, name in enumerate(scheme.clips)
        }
        return cls(
            scheme=scheme,
            frame_width=frame_size,
            frame_height=frame_size,
            rows=len(scheme.clips),
            cols=frames_per_clip,
            clips=clips,
        )

    @classmethod
    def from_manifest(
        cls,
        data: dict[str, Any],
        *,
        image_size: tuple[int, int] | None = None,
        default_cols: int = 24,
    ) -> ClipTable:
        """Parse either supported manifest layout.

        The *clip* layout carries ``frameSize``/``rows``/``cols``/``clips``.
        The *cell* layout maps ``"<row>-<col>"`` keys to ``{"action",
        "frame_index"}`` and needs *image_size* to derive the frame size.
        """
        if "clips" in data:
            return cls._from_clip_layout(data)
        return cls._from_cell_layout(data, image_size=image_size, default_cols=default_cols)

    # ------------------------------------------------------------------

    @classmethod
    def _from_clip_layout(cls, data: dict[str, Any]) -> ClipTable:
        clips: dict[ClipName, ClipDef] = {}
        for raw_name, entry in data["clips"].items():
            name = normalize_clip_name(raw_name)
            if name is None:
                logger.warning("Ignoring unknown clip '%s' in manifest", raw_name)
                continue
            clips[name] = ClipDef.row(
                name, int(entry["row"]), int(entry["length"]), loop=bool(entry.get("loop", False)),
            )

        scheme = _detect_scheme(clips)
        missing = [n for n in scheme.clips if n not in clips]
        if missing:
            msg = f"manifest is missing clips: {', '.join(missing)}"
            raise ManifestError(msg)

        size = int(data["frameSize"])
        return cls(
            scheme=scheme,
            frame_width=size,
            frame_height=size,
            rows=int(data["rows"]),
            cols=int(data["cols"]),
            clips=clips,
        )

    @classmethod
    def _from_cell_layout(
        cls,
        data: dict[str, Any],
        *,
        image_size: tuple[int, int] | None,
        default_cols: int,
    ) -> ClipTable:
        if image_size is None:
            msg = "cell-layout manifest needs the sprite image size"
            raise ManifestError(msg)

        buckets: dict[ClipName, list[tuple[int, FrameCell]]] = {}
        for key, entry in data.items():
            match = _CELL_KEY.match(key)
            if match is None:
                msg = f"bad cell key '{key}' (expected '<row>-<col>')"
                raise ManifestError(msg)
            name = normalize_clip_name(str(entry.get("action", "")))
            if name is None:
                logger.warning("Ignoring unknown action '%s' at cell %s", entry.get("action"), key)
                continue
            row, col = int(match.group(1)), int(match.group(2))
            order = entry.get("frame_index")
            if not isinstance(order, int):
                order = col
            buckets.setdefault(name, []).append((order, FrameCell(row=row, col=col)))

        scheme = _detect_scheme(buckets, default=ClipScheme.MATCHING)
        clips: dict[ClipName, ClipDef] = {}
        for row, name in enumerate(scheme.clips):
            loop = name == scheme.rest_clip
            cells = buckets.get(name)
            if cells:
                ordered = tuple(cell for _, cell in sorted(cells, key=lambda item: item[0]))
                clips[name] = ClipDef(name=name, frames=ordered, loop=loop)
            else:
                logger.warning("Manifest has no frames for '%s'; using row %d", name, row)
                clips[name] = ClipDef.row(name, row, default_cols, loop=loop)

        rows = max([len(scheme.clips)] + [c.row + 1 for d in clips.values() for c in d.frames])
        cols = max(c.col + 1 for d in clips.values() for c in d.frames)
        width, height = image_size
        return cls(
            scheme=scheme,
            frame_width=max(1, width // cols),
            frame_height=max(1, height // rows),
            rows=rows,
            cols=cols,
            clips=clips,
        )


def normalize_clip_name(raw: str) -> ClipName | None:
    """Map manifest spellings (``reachL``, ``idle-hang``...) to a :class:`ClipName`."""
    key = raw.strip()
    alias = _ALIASES.get(key.lower())
    if alias is not None:
        return alias
    key = re.sub(r"(?<=[a-z])(?=[A-Z])", "_", key).lower().replace("-", "_")
    try:
        return ClipName(key)
    except ValueError:
        return None


def _detect_scheme(
    names: dict[ClipName, Any],
    default: ClipScheme = ClipScheme.CLASSIC,
) -> ClipScheme:
    for scheme in ClipScheme:
        if names.keys() >= set(scheme.clips):
            return scheme
    if ClipName.IDLE_HANG in names or ClipName.PULL_UP in names:
        return ClipScheme.MATCHING
    if ClipName.IDLE in names or ClipName.REACH_LEFT in names:
        return ClipScheme.CLASSIC
    return default
