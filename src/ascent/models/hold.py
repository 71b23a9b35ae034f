"""Hold and score models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ascent.models.enums import HoldShape, HoldSize, Side


class Hold(BaseModel):
    """A single climbing hold; only ``side`` matters to gameplay."""

    model_config = ConfigDict(frozen=True)

    side: Side
    size: HoldSize = HoldSize.MEDIUM
    shape: HoldShape = HoldShape.ROUNDED
    color: str = "hsl(200 32% 62%)"


class BestScore(BaseModel):
    """On-disk record of the best score."""

    best: int = Field(default=0, ge=0)
