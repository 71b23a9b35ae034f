"""Asset providers: where the climber sprite sheet and its clip table come from.

Loading happens once, before the first tick.  Any failure is fatal and is
raised as :class:`AssetLoadError`; there is no retry and no silent fallback
once external assets have been asked for.
"""

from __future__ import annotations

import asyncio
import io
import json
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import httpx
from jsonschema import ValidationError as SchemaValidationError
from PIL import Image, UnidentifiedImageError
from pydantic import ValidationError as PydanticValidationError

from ascent.models.clip import ClipTable, ManifestError
from ascent.models.enums import ClipScheme
from ascent.pipeline.assembly import generate_frame_sheet
from ascent.validation import manifest_errors, validate_manifest_json

if TYPE_CHECKING:
    from ascent.config import AnimationSettings, AssetSettings
    from ascent.rig.synth import PoseSynthesizer

logger = logging.getLogger(__name__)


class AssetLoadError(RuntimeError):
    """Raised when the sprite sheet or manifest cannot be loaded."""


@dataclass
class SpriteAssets:
    """A decoded sprite sheet and the clip table that indexes it."""

    image: Image.Image
    clips: ClipTable
    procedural: bool = False

    def frame(self, clip: str, index: int) -> Image.Image:
        """Crop one frame out of the sheet."""
        return self.image.crop(self.clips.source_box(clip, index))


@runtime_checkable
class AssetProvider(Protocol):
    """Protocol for sprite sheet sources."""

    async def load(self) -> SpriteAssets:
        """Load (or build) the sprite sheet and its clip table."""
        ...


class ProceduralAssets:
    """Render the sheet from the pose synthesizer; needs no files."""

    def __init__(
        self,
        scheme: ClipScheme = ClipScheme.CLASSIC,
        *,
        frame_size: int = 256,
        frames_per_clip: int = 24,
        synth: PoseSynthesizer | None = None,
        seed: int | None = None,
    ) -> None:
        self.scheme = scheme
        self.frame_size = frame_size
        self.frames_per_clip = frames_per_clip
        self.synth = synth
        self.seed = seed

    async def load(self) -> SpriteAssets:
        logger.info(
            "Generating procedural climber sheet (%s, %dpx, %d frames/clip)",
            self.scheme, self.frame_size, self.frames_per_clip,
        )
        sheet, table = await asyncio.to_thread(
            generate_frame_sheet,
            self.scheme,
            frame_size=self.frame_size,
            frames_per_clip=self.frames_per_clip,
            synth=self.synth,
            rng=random.Random(self.seed),
        )
        return SpriteAssets(image=sheet, clips=table, procedural=True)


class FileAssets:
    """Sprite PNG and JSON manifest on the local filesystem."""

    def __init__(self, sprite: Path, manifest: Path) -> None:
        self.sprite = sprite
        self.manifest = manifest

    async def load(self) -> SpriteAssets:
        image_bytes, manifest_text = await asyncio.gather(
            asyncio.to_thread(_read_bytes, self.sprite),
            asyncio.to_thread(_read_text, self.manifest),
        )
        return build_assets(image_bytes, manifest_text, source=str(self.sprite))


class HttpAssets:
    """Sprite PNG and JSON manifest fetched over HTTP(S)."""

    def __init__(
        self,
        sprite_url: str,
        manifest_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.sprite_url = sprite_url
        self.manifest_url = manifest_url
        self.timeout = timeout
        self._transport = transport

    async def load(self) -> SpriteAssets:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                image_resp, manifest_resp = await asyncio.gather(
                    client.get(self.sprite_url),
                    client.get(self.manifest_url, headers={"Cache-Control": "no-store"}),
                )
                image_resp.raise_for_status()
                manifest_resp.raise_for_status()
        except httpx.HTTPError as exc:
            msg = f"failed to fetch climber assets: {exc}"
            raise AssetLoadError(msg) from None
        logger.info("Fetched %s (%d bytes)", self.sprite_url, len(image_resp.content))
        return build_assets(image_resp.content, manifest_resp.text, source=self.sprite_url)


def build_assets(image_bytes: bytes, manifest_text: str, *, source: str = "<memory>") -> SpriteAssets:
    """Decode the sheet, validate the manifest and build the clip table."""
    try:
        image = Image.open(io.BytesIO(image_bytes))
        image.load()
    except (UnidentifiedImageError, OSError) as exc:
        msg = f"sprite sheet {source} is not a readable image: {exc}"
        raise AssetLoadError(msg) from None

    try:
        data: Any = json.loads(manifest_text)
    except json.JSONDecodeError as exc:
        msg = f"manifest contains invalid JSON: {exc}"
        raise AssetLoadError(msg) from None

    try:
        validate_manifest_json(data)
        table = ClipTable.from_manifest(data, image_size=image.size)
    except SchemaValidationError as exc:
        for problem in manifest_errors(data):
            logger.debug("Manifest schema violation %s", problem)
        msg = f"manifest has invalid structure: {exc.message}"
        raise AssetLoadError(msg) from None
    except (ManifestError, PydanticValidationError) as exc:
        msg = f"manifest is unusable: {exc}"
        raise AssetLoadError(msg) from None

    needed = (table.cols * table.frame_width, table.rows * table.frame_height)
    if image.width < needed[0] or image.height < needed[1]:
        logger.warning(
            "Sprite sheet %s is %dx%d but the manifest expects at least %dx%d",
            source, image.width, image.height, *needed,
        )
    for name, clip in table.clips.items():
        if clip.length == 0:
            logger.warning("Clip '%s' has no frames in %s", name, source)

    return SpriteAssets(image=image.convert("RGBA"), clips=table)


def resolve_provider(
    assets: AssetSettings,
    animation: AnimationSettings,
    *,
    seed: int | None = None,
) -> AssetProvider:
    """Pick URL, file or procedural assets from configuration."""
    if not assets.external:
        return ProceduralAssets(
            animation.scheme,
            frame_size=animation.frame_size,
            frames_per_clip=animation.frames_per_clip,
            seed=seed,
        )
    sprite, manifest = str(assets.sprite), str(assets.manifest)
    if _is_url(sprite) or _is_url(manifest):
        return HttpAssets(sprite, manifest, timeout=assets.timeout)
    return FileAssets(Path(sprite).expanduser(), Path(manifest).expanduser())


def load_assets(provider: AssetProvider) -> SpriteAssets:
    """Run the one-time asset load to completion (boot path)."""
    return asyncio.run(provider.load())


def _is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        msg = f"cannot read sprite sheet {path}: {exc}"
        raise AssetLoadError(msg) from None


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"cannot read manifest {path}: {exc}"
        raise AssetLoadError(msg) from None
