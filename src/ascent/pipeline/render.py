"""Rasterizers: a flat-vector climber for sprite sheets, plus text and half-block views for terminals."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from PIL import Image, ImageDraw, ImageOps

if TYPE_CHECKING:
    from ascent.models.pose import Point, Pose

logger = logging.getLogger(__name__)

# Where the hip line sits inside a cell, as fractions of the cell size.
BODY_ANCHOR: tuple[float, float] = (0.5, 0.66)

PALETTE: dict[str, str] = {
    "background": "#dbeafe",
    "cliff": "#94a3b8",
    "skin": "#ffd7b3",
    "suit": "#2dd4bf",
    "suit_dark": "#14b8a6",
    "harness": "#ef4444",
    "boots": "#475569",
    "helmet": "#3b82f6",
}

# Segments drawn for the text rasterizer, back to front.
TEXT_BONES: list[tuple[str, str]] = [
    ("left_hip", "left_knee"),
    ("left_knee", "left_ankle"),
    ("left_ankle", "left_foot"),
    ("right_hip", "right_knee"),
    ("right_knee", "right_ankle"),
    ("right_ankle", "right_foot"),
    ("hip_centre", "torso_top"),
    ("torso_top", "neck_top"),
    ("left_shoulder", "left_elbow"),
    ("left_elbow", "left_hand"),
    ("right_shoulder", "right_elbow"),
    ("right_elbow", "right_hand"),
]


def pose_to_cell(pose: Pose, point: Point) -> tuple[float, float]:
    """Map a torso-local point to cell coordinates (0..1 on both axes)."""
    torso = pose.torso
    x, y = point[0], point[1] + torso.drop
    cos_r, sin_r = math.cos(torso.rotation), math.sin(torso.rotation)
    return (
        BODY_ANCHOR[0] + torso.lean + x * cos_r - y * sin_r,
        BODY_ANCHOR[1] + x * sin_r + y * cos_r,
    )


# ---------------------------------------------------------------------------
# Pillow rasterizer
# ---------------------------------------------------------------------------


def render_pose(
    pose: Pose,
    size: int,
    *,
    background: bool = True,
    mirror: bool = False,
) -> Image.Image:
    """Draw *pose* as a flat-vector climber into a ``size`` x ``size`` RGBA image."""
    fill = PALETTE["background"] if background else (0, 0, 0, 0)
    img = Image.new("RGBA", (size, size), fill)
    draw = ImageDraw.Draw(img)

    if background:
        draw.rectangle([size * 0.75, 0, size, size], fill=PALETTE["cliff"])

    def px(point: Point) -> tuple[float, float]:
        cx, cy = pose_to_cell(pose, point)
        return (cx * size, cy * size)

    def limb(a: Point, b: Point, thickness: float, colour: str) -> None:
        _capsule(draw, px(a), px(b), thickness * size, colour)

    def dot(p: Point, radius: float, colour: str) -> None:
        x, y = px(p)
        r = radius * size
        draw.ellipse([x - r, y - r, x + r, y + r], fill=colour)

    # Torso and harness.
    limb((0.0, 0.0), pose.torso_top, 0.08, PALETTE["suit"])
    limb((0.0, -0.02), (0.0, 0.02), 0.09, PALETTE["harness"])

    # Arms.
    arm = 0.035
    for side in (pose.left_arm, pose.right_arm):
        limb(side.shoulder, side.elbow, arm, PALETTE["suit_dark"])
        limb(side.elbow, side.hand, arm * 0.94, PALETTE["suit"])
        dot(side.hand, 0.018, PALETTE["skin"])

    # Legs.
    leg = 0.045
    for side in (pose.left_leg, pose.right_leg):
        limb(side.hip, side.knee, leg, PALETTE["boots"])
        limb(side.knee, side.ankle, leg * 0.92, PALETTE["boots"])
        limb(side.ankle, side.foot, leg * 0.6, PALETTE["boots"])

    # Neck, head and helmet.
    limb(pose.torso_top, pose.neck_top, 0.028, PALETTE["suit_dark"])
    hx, hy = px(pose.head)
    r = pose.head_radius * size
    box = [hx - r, hy - r, hx + r, hy + r]
    draw.ellipse(box, fill=PALETTE["skin"])
    turn = math.degrees(pose.torso.rotation)
    draw.chord(box, 162 + turn, 378 + turn, fill=PALETTE["helmet"])

    if mirror:
        img = ImageOps.mirror(img)
    return img


def _capsule(
    draw: ImageDraw.ImageDraw,
    a: tuple[float, float],
    b: tuple[float, float],
    width: float,
    colour: str,
) -> None:
    """Thick line with round end caps."""
    w = max(1, round(width))
    r = w / 2
    draw.line([a, b], fill=colour, width=w)
    for x, y in (a, b):
        draw.ellipse([x - r, y - r, x + r, y + r], fill=colour)


# ---------------------------------------------------------------------------
# Text rasterizer
# ---------------------------------------------------------------------------


def render_pose_text(pose: Pose, width: int = 24, height: int = 12, *, mirror: bool = False) -> list[str]:
    """Draw *pose* as a stick figure on a ``width`` x ``height`` character grid.

    Terminal cells are roughly twice as tall as they are wide, so a square
    pose cell wants ``width == 2 * height``.
    """
    grid = [[" "] * width for _ in range(height)]
    points = pose.points()
    points["hip_centre"] = (0.0, 0.0)

    def cell(name: str) -> tuple[int, int]:
        cx, cy = pose_to_cell(pose, points[name])
        if mirror:
            cx = 1.0 - cx
        return (round(cx * (width - 1)), round(cy * (height - 1)))

    for a, b in TEXT_BONES:
        _plot_line(grid, cell(a), cell(b))

    for name in ("left_hand", "right_hand"):
        _plot(grid, cell(name), "*")
    _plot(grid, cell("head"), "O")

    return ["".join(row) for row in grid]


def _plot(grid: list[list[str]], at: tuple[int, int], char: str) -> None:
    x, y = at
    if 0 <= y < len(grid) and 0 <= x < len(grid[0]):
        grid[y][x] = char


def _plot_line(grid: list[list[str]], a: tuple[int, int], b: tuple[int, int]) -> None:
    """Bresenham line using a stroke character that follows the slope."""
    (x0, y0), (x1, y1) = a, b
    dx, dy = x1 - x0, y1 - y0
    if dx == 0 and dy == 0:
        _plot(grid, a, ".")
        return
    if abs(dx) >= 2 * abs(dy):
        char = "-"
    elif abs(dy) >= 2 * abs(dx):
        char = "|"
    else:
        char = "\\" if (dx > 0) == (dy > 0) else "/"

    sx = 1 if dx > 0 else -1
    sy = 1 if dy > 0 else -1
    adx, ady = abs(dx), -abs(dy)
    err = adx + ady
    x, y = x0, y0
    while True:
        _plot(grid, (x, y), char)
        if x == x1 and y == y1:
            break
        e2 = 2 * err
        if e2 >= ady:
            err += ady
            x += sx
        if e2 <= adx:
            err += adx
            y += sy


# ---------------------------------------------------------------------------
# Sprite frames as terminal half-blocks
# ---------------------------------------------------------------------------


def _hex(rgba: tuple[int, int, int, int]) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgba[:3])


def render_image_blocks(image: Image.Image, width: int, height: int, *, mirror: bool = False) -> list[str]:
    """Draw *image* as ``height`` lines of Rich markup, two pixels per character.

    Each character is an upper half block coloured with the top pixel over
    the bottom one.  Fully transparent pixels are left blank.
    """
    img = image.convert("RGBA").resize((width, height * 2), Image.Resampling.BOX)
    if mirror:
        img = ImageOps.mirror(img)
    px = img.load()

    lines: list[str] = []
    for row in range(height):
        out: list[str] = []
        for col in range(width):
            top, bottom = px[col, row * 2], px[col, row * 2 + 1]
            if top[3] == 0 and bottom[3] == 0:
                out.append(" ")
            elif bottom[3] == 0:
                out.append(f"[{_hex(top)}]▀[/]")
            elif top[3] == 0:
                out.append(f"[{_hex(bottom)}]▄[/]")
            else:
                out.append(f"[{_hex(top)} on {_hex(bottom)}]▀[/]")
        lines.append("".join(out))
    return lines
