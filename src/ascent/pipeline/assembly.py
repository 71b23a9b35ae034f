"""Frame sheet assembly and procedural sheet generation with Pillow."""

from __future__ import annotations

import json
import logging
import random
from typing import TYPE_CHECKING

from PIL import Image

from ascent.models.clip import ClipTable
from ascent.models.enums import ClipScheme
from ascent.pipeline.render import render_pose
from ascent.rig.synth import PoseSynthesizer, sample_clip

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def assemble_frame_sheet(
    rows: list[list[Image.Image]],
    frame_size: tuple[int, int],
    *,
    padding: int = 0,
) -> Image.Image:
    """Combine rows of frame images into a single grid sheet.

    Parameters
    ----------
    rows:
        One list of frames per clip, in sheet row order.  Rows may differ in
        length; the sheet is as wide as the longest row.
    frame_size:
        ``(width, height)`` of each cell.  Frames are resized to this size if
        they do not already match.
    padding:
        Extra transparent pixels between cells.

    Returns
    -------
    Image.Image
        The assembled RGBA sheet.
    """
    if not rows or not any(rows):
        msg = "No frames provided for sheet assembly"
        raise ValueError(msg)

    fw, fh = frame_size
    n_rows = len(rows)
    n_cols = max(len(r) for r in rows)
    sheet_w = fw * n_cols + padding * max(n_cols - 1, 0)
    sheet_h = fh * n_rows + padding * max(n_rows - 1, 0)

    sheet = Image.new("RGBA", (sheet_w, sheet_h), (0, 0, 0, 0))

    for r, frames in enumerate(rows):
        for c, frame in enumerate(frames):
            img = frame.convert("RGBA")
            if img.size != (fw, fh):
                img = img.resize((fw, fh), Image.LANCZOS)
            sheet.paste(img, (c * (fw + padding), r * (fh + padding)), img)

    logger.info(
        "Assembled frame sheet (%d rows x %d cols, %dx%d)",
        n_rows, n_cols, sheet_w, sheet_h,
    )
    return sheet


def generate_frame_sheet(
    scheme: ClipScheme = ClipScheme.CLASSIC,
    *,
    frame_size: int = 256,
    frames_per_clip: int = 24,
    synth: PoseSynthesizer | None = None,
    rng: random.Random | None = None,
) -> tuple[Image.Image, ClipTable]:
    """Render every clip of *scheme* with the pose synthesizer.

    Each row samples one clip instance at evenly spaced normalized times, so
    clip-level random choices stay fixed across the row.
    """
    synth = synth or PoseSynthesizer()
    rng = rng or random.Random()

    rows: list[list[Image.Image]] = []
    for name in scheme.clips:
        poses = sample_clip(synth, name, frames_per_clip, rng)
        rows.append([render_pose(p, frame_size) for p in poses])
        logger.debug("Rendered clip '%s' (%d frames)", name, len(poses))

    sheet = assemble_frame_sheet(rows, (frame_size, frame_size))
    table = ClipTable.uniform(scheme, frame_size, frames_per_clip)
    return sheet, table


def manifest_for(table: ClipTable) -> dict[str, object]:
    """Clip-layout manifest describing *table*."""
    return {
        "frameSize": table.frame_width,
        "rows": table.rows,
        "cols": table.cols,
        "clips": {
            name.value: {
                "row": clip.frames[0].row if clip.frames else 0,
                "length": clip.length,
                "loop": clip.loop,
            }
            for name, clip in table.clips.items()
        },
    }


def write_sheet(
    sheet: Image.Image,
    table: ClipTable,
    image_path: Path,
    manifest_path: Path | None = None,
) -> tuple[Path, Path]:
    """Save the sheet PNG and its JSON manifest; returns both paths."""
    manifest_path = manifest_path or image_path.with_suffix(".json")
    image_path.parent.mkdir(parents=True, exist_ok=True)
    manifest_path.parent.mkdir(parents=True, exist_ok=True)
    sheet.save(image_path, "PNG")
    manifest_path.write_text(json.dumps(manifest_for(table), indent=2))
    logger.info("Wrote %s and %s", image_path, manifest_path)
    return image_path, manifest_path
