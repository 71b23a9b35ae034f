"""CLI entry point using Typer."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from ascent.models.enums import ClipScheme

app = typer.Typer(
    name="ascent",
    help="Endless reflex climbing game for the terminal.",
    no_args_is_help=False,
)


def _run_game(scheme: ClipScheme | None, seed: int | None) -> None:
    import random

    from ascent.app import AscentApp
    from ascent.config import load_config
    from ascent.engine.round import RoundCoordinator
    from ascent.engine.scoreboard import FileScoreboard
    from ascent.pipeline.assets import AssetLoadError, load_assets, resolve_provider

    config = load_config()
    if scheme is not None:
        config.animation.scheme = scheme

    provider = resolve_provider(config.assets, config.animation, seed=seed)
    try:
        assets = load_assets(provider)
    except AssetLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None

    coordinator = RoundCoordinator(
        assets.clips,
        config.gameplay,
        fps=config.animation.fps,
        scoreboard=FileScoreboard(config.best_score_path),
        rng=random.Random(seed),
    )
    AscentApp(coordinator, sprites=assets).run()


@app.command()
def play(
    scheme: Annotated[
        ClipScheme | None,
        typer.Option("--scheme", "-s", help="Clip scheme: classic or matching"),
    ] = None,
    seed: Annotated[
        int | None,
        typer.Option("--seed", help="Seed for holds and procedural art"),
    ] = None,
) -> None:
    """Play the game in the terminal."""
    _run_game(scheme, seed)


@app.command()
def sheet(
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="PNG path; the manifest goes next to it"),
    ] = Path("climber.png"),
    scheme: Annotated[
        ClipScheme,
        typer.Option("--scheme", "-s", help="Clip scheme: classic or matching"),
    ] = ClipScheme.CLASSIC,
    frame_size: Annotated[int, typer.Option("--size", help="Frame size in pixels")] = 256,
    frames: Annotated[int, typer.Option("--frames", "-f", help="Frames per clip")] = 24,
    seed: Annotated[int | None, typer.Option("--seed", help="Random seed")] = None,
) -> None:
    """Render the procedural climber sprite sheet and its manifest."""
    import random

    from ascent.pipeline.assembly import generate_frame_sheet, write_sheet

    if frames < 2:
        typer.echo("Error: --frames must be at least 2", err=True)
        raise typer.Exit(1)
    if frame_size < 32:
        typer.echo("Error: --size must be at least 32", err=True)
        raise typer.Exit(1)

    image, table = generate_frame_sheet(
        scheme,
        frame_size=frame_size,
        frames_per_clip=frames,
        rng=random.Random(seed),
    )
    image_path, manifest_path = write_sheet(image, table, output)
    typer.echo(f"Sheet: {image_path} ({image.width}x{image.height})")
    typer.echo(f"Manifest: {manifest_path}")


@app.command()
def holds(
    count: Annotated[int, typer.Option("--count", "-n", help="Number of holds")] = 20,
    max_run: Annotated[int, typer.Option("--max-run", help="Longest same-side run + 1")] = 3,
    seed: Annotated[int | None, typer.Option("--seed", help="Random seed")] = None,
) -> None:
    """Print a sample hold sequence, due hold first."""
    import random

    from ascent.engine.holds import HoldSequence

    try:
        sequence = HoldSequence(size=max(count, 1), max_run=max_run, rng=random.Random(seed))
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    sequence.reset()
    for i, hold in enumerate(sequence.holds[:count]):
        arrow = "<" if hold.side == "left" else ">"
        typer.echo(f"{i:3d} {arrow} {hold.side:<5} {hold.size:<6} {hold.shape}")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool, typer.Option("--version", "-v", help="Show version")
    ] = False,
) -> None:
    """Ascent - endless reflex climbing game."""
    if version:
        from ascent import __version__

        typer.echo(f"ascent {__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        _run_game(None, None)
