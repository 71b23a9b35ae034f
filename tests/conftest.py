"""Shared fixtures for Ascent tests."""

import random

import pytest

from ascent.config import GameplaySettings
from ascent.engine.round import RoundCoordinator
from ascent.engine.scoreboard import MemoryScoreboard
from ascent.models import ClipTable
from ascent.models.enums import ClipScheme


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def classic_table() -> ClipTable:
    """Classic layout with 24 frames per clip at 24 fps (1 s per one-shot)."""
    return ClipTable.uniform(ClipScheme.CLASSIC, 64, 24)


@pytest.fixture
def matching_table() -> ClipTable:
    return ClipTable.uniform(ClipScheme.MATCHING, 64, 24)


@pytest.fixture
def short_table() -> ClipTable:
    """Four frames per clip so one-shots finish in a handful of ticks."""
    return ClipTable.uniform(ClipScheme.CLASSIC, 32, 4)


@pytest.fixture
def scoreboard() -> MemoryScoreboard:
    return MemoryScoreboard()


@pytest.fixture
def coordinator(classic_table: ClipTable, scoreboard: MemoryScoreboard) -> RoundCoordinator:
    return RoundCoordinator(
        classic_table,
        GameplaySettings(),
        fps=24,
        scoreboard=scoreboard,
        rng=random.Random(7),
    )
