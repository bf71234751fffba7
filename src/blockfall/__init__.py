"""Deterministic falling-block puzzle engine."""

from .shapes import PieceKind, ShapeCatalogError, SHAPES, shape_blocks
from .tetromino import Tetromino
from .board import Board, ROWS, COLUMNS
from .game_state import GamePhase, GameState, new_game, random_tetromino
from .controller import InputNormalizer, InputSymbol
from .engine import tick
from .high_score import JsonHighScoreStore, MemoryHighScoreStore
from .session import GameSession
from .utils import descent_interval, is_legal, render_grid

__all__ = [
    "Board",
    "ROWS",
    "COLUMNS",
    "PieceKind",
    "ShapeCatalogError",
    "SHAPES",
    "Tetromino",
    "GamePhase",
    "GameState",
    "InputNormalizer",
    "InputSymbol",
    "GameSession",
    "JsonHighScoreStore",
    "MemoryHighScoreStore",
    "new_game",
    "random_tetromino",
    "tick",
    "is_legal",
    "descent_interval",
    "render_grid",
    "shape_blocks",
]
