"""Ascent art pipeline - pose rasterizing, frame sheets and asset loading."""

from ascent.pipeline.assembly import (
    assemble_frame_sheet,
    generate_frame_sheet,
    manifest_for,
    write_sheet,
)
from ascent.pipeline.assets import (
    AssetLoadError,
    AssetProvider,
    FileAssets,
    HttpAssets,
    ProceduralAssets,
    SpriteAssets,
    build_assets,
    load_assets,
    resolve_provider,
)
from ascent.pipeline.render import pose_to_cell, render_pose, render_pose_text

__all__ = [
    "AssetLoadError",
    "AssetProvider",
    "FileAssets",
    "HttpAssets",
    "ProceduralAssets",
    "SpriteAssets",
    "assemble_frame_sheet",
    "build_assets",
    "generate_frame_sheet",
    "load_assets",
    "manifest_for",
    "pose_to_cell",
    "render_pose",
    "render_pose_text",
    "resolve_provider",
    "write_sheet",
]
