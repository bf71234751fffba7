"""High level game state container."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional
import random

from .board import Board, COLUMNS
from .shapes import PLAYABLE_KINDS
from .tetromino import Tetromino, spawn
from .utils import BASE_SPEED, MIN_SPEED


class GamePhase(str, Enum):
    PLAYING = "playing"
    GAME_OVER = "game_over"


def random_tetromino(rng: Optional[Any] = None) -> Tetromino:
    """Return a freshly spawned piece of a uniformly random kind.

    ``rng`` only needs a ``choice`` method; pass a seeded
    :class:`random.Random` for reproducible games.
    """

    chooser = rng if rng is not None else random
    return spawn(chooser.choice(PLAYABLE_KINDS), COLUMNS)


@dataclass(frozen=True)
class GameState:
    """Snapshot of a game session.

    Instances are never modified; the engine derives a new state from the
    previous one on every tick.
    """

    board: Board = field(default_factory=Board)
    current: Tetromino = field(default_factory=random_tetromino)
    preview: Tetromino = field(default_factory=random_tetromino)
    score: int = 0
    speed: int = BASE_SPEED
    game_ended: bool = False
    high_score: int = 0

    def __post_init__(self) -> None:
        if self.score < 0:
            raise ValueError("score cannot be negative")
        if self.high_score < 0:
            raise ValueError("high_score cannot be negative")
        if self.speed < MIN_SPEED:
            raise ValueError(f"speed cannot drop below {MIN_SPEED}")

    @property
    def phase(self) -> GamePhase:
        return GamePhase.GAME_OVER if self.game_ended else GamePhase.PLAYING


def new_game(high_score: int = 0, rng: Optional[Any] = None) -> GameState:
    """Return the state of a fresh game carrying over ``high_score``."""

    current = random_tetromino(rng)
    preview = random_tetromino(rng)
    return GameState(
        board=Board(),
        current=current,
        preview=preview,
        score=0,
        speed=BASE_SPEED,
        game_ended=False,
        high_score=high_score,
    )
