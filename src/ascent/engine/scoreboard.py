"""Best-score persistence."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pydantic import ValidationError as PydanticValidationError

from ascent.models.hold import BestScore

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


@runtime_checkable
class Scoreboard(Protocol):
    """Stores the best score across rounds."""

    def best(self) -> int:
        """Return the stored best score."""
        ...

    def submit(self, score: int) -> int:
        """Record *score* if it beats the best; return the (possibly new) best."""
        ...


class MemoryScoreboard:
    """Scoreboard that lives only as long as the process."""

    def __init__(self, best: int = 0) -> None:
        self._best = max(0, best)

    def best(self) -> int:
        return self._best

    def submit(self, score: int) -> int:
        self._best = max(self._best, score)
        return self._best


class FileScoreboard:
    """Scoreboard backed by a small JSON file (``{"best": N}``).

    A missing or unreadable file counts as a best of 0; the problem is logged
    and the file is rewritten on the next new best.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._best = self._read()

    def best(self) -> int:
        return self._best

    def submit(self, score: int) -> int:
        if score <= self._best:
            return self._best
        self._best = score
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(BestScore(best=score).model_dump_json())
        logger.info("New best score %d saved to %s", score, self.path)
        return self._best

    def _read(self) -> int:
        try:
            text = self.path.read_text()
        except FileNotFoundError:
            return 0
        except OSError as exc:
            logger.warning("Cannot read best score from %s: %s", self.path, exc)
            return 0
        try:
            return BestScore.model_validate(json.loads(text)).best
        except (json.JSONDecodeError, PydanticValidationError) as exc:
            logger.warning("Ignoring malformed best score file %s: %s", self.path, exc)
            return 0
