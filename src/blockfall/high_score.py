"""Persistence for the single high-score value."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Protocol, Union


LOGGER = logging.getLogger(__name__)

HIGH_SCORE_ENV = "BLOCKFALL_HIGH_SCORE_FILE"
DEFAULT_HIGH_SCORE_PATH = Path.home() / ".blockfall" / "high_score.json"


class HighScoreStore(Protocol):
    """Read/write collaborator for the persisted high score."""

    def load(self) -> int:
        ...

    def save(self, value: int) -> None:
        ...


def _check(value: int) -> int:
    value = int(value)
    if value < 0:
        raise ValueError("High score cannot be negative")
    return value


class MemoryHighScoreStore:
    """Keep the high score in memory only; handy for tests and demos."""

    def __init__(self, initial: int = 0) -> None:
        self.value = _check(initial)
        self.saves = 0

    def load(self) -> int:
        return self.value

    def save(self, value: int) -> None:
        self.value = _check(value)
        self.saves += 1


class JsonHighScoreStore:
    """Store the high score as ``{"high_score": n}`` in a JSON file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> int:
        """Return the stored score, or ``0`` when none can be read.

        A missing file is a normal first run.  Unreadable or malformed files
        are reported and treated as empty so a broken file never prevents the
        game from starting.
        """

        if not self.path.exists():
            return 0
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return _check(data["high_score"])
        except (OSError, ValueError, TypeError, KeyError) as exc:
            LOGGER.warning("Ignoring unreadable high score file %s: %s", self.path, exc)
            return 0

    def save(self, value: int) -> None:
        value = _check(value)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"high_score": value}), encoding="utf-8")
        LOGGER.debug("Saved high score %d to %s", value, self.path)


def default_store(path: Optional[Union[str, Path]] = None) -> JsonHighScoreStore:
    """Return the file-backed store at ``path``, the env override or the default."""

    if path is None:
        path = os.environ.get(HIGH_SCORE_ENV) or DEFAULT_HIGH_SCORE_PATH
    return JsonHighScoreStore(path)
