"""Climber view - live rendering of the current clip frame."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from textual.widgets import Static

from ascent.models.enums import ClipName, ClipScheme, Side
from ascent.pipeline.render import render_image_blocks, render_pose_text
from ascent.rig.synth import PoseSynthesizer, sample_clip

if TYPE_CHECKING:
    from ascent.models.clip import ClipTable
    from ascent.models.pose import Pose
    from ascent.pipeline.assets import SpriteAssets

VIEW_WIDTH = 32
VIEW_HEIGHT = 16


def should_mirror(scheme: ClipScheme, facing: Side) -> bool:
    """Matching sheets are drawn facing left; every clip flips when facing right."""
    return scheme is ClipScheme.MATCHING and facing is Side.RIGHT


class ClimberView(Static):
    """Render ``(clip, frame)`` from the loaded sprite sheet.

    Procedural sheets and clips without frames fall back to the text
    stick figure.  Poses for a clip are sampled once each time the clip
    starts, so the random fall direction holds for the whole clip instance.
    """

    DEFAULT_CSS = """
    ClimberView {
        width: 36;
        height: 18;
        background: #dbeafe;
        color: #0f172a;
        border: round #3b82f6;
    }
    """

    def __init__(
        self,
        clips: ClipTable,
        *,
        sprites: SpriteAssets | None = None,
        synth: PoseSynthesizer | None = None,
        rng: random.Random | None = None,
        id: str | None = None,
    ) -> None:
        super().__init__("", markup=True, id=id)
        self._clips = clips
        self._sprites = sprites
        self._synth = synth or PoseSynthesizer()
        self._rng = rng or random.Random()
        self._clip: ClipName | None = None
        self._poses: list[Pose] = []

    @property
    def uses_sprites(self) -> bool:
        return self._sprites is not None and not self._sprites.procedural

    def frame_lines(self, clip: ClipName, frame: int, facing: Side) -> list[str]:
        mirror = should_mirror(self._clips.scheme, facing)
        if self.uses_sprites and self._clips[clip].length > 0:
            index = min(self._clips[clip].length - 1, max(0, frame))
            image = self._sprites.frame(clip, index)
            return render_image_blocks(image, VIEW_WIDTH, VIEW_HEIGHT, mirror=mirror)

        if clip != self._clip:
            self._clip = clip
            length = max(1, self._clips[clip].length)
            self._poses = sample_clip(self._synth, clip, length, self._rng)
        pose = self._poses[min(len(self._poses) - 1, max(0, frame))]
        return render_pose_text(pose, VIEW_WIDTH, VIEW_HEIGHT, mirror=mirror)

    def show(self, clip: ClipName, frame: int, facing: Side) -> None:
        self.update("\n".join(self.frame_lines(clip, frame, facing)))
