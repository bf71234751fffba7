"""Per-tick state transition.

:func:`tick` is the whole game: given the previous :class:`GameState`, the
caller's tick counter and the normalised input for this tick it returns the
next state.  It never raises for a reachable state; wall, floor and stack
collisions as well as a blocked spawn are all resolved into ordinary state
values.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Dict, Optional

from .controller import InputSymbol
from .game_state import GameState, new_game, random_tetromino
from .tetromino import Tetromino
from .utils import descent_interval, is_legal


_MOVES: Dict[InputSymbol, Callable[[Tetromino], Tetromino]] = {
    InputSymbol.LEFT: lambda piece: piece.translate(-1, 0),
    InputSymbol.RIGHT: lambda piece: piece.translate(1, 0),
    InputSymbol.SOFT_DROP: lambda piece: piece.translate(0, 1),
    InputSymbol.ROTATE: lambda piece: piece.rotate(),
    InputSymbol.NONE: lambda piece: piece,
}


def apply_input(piece: Tetromino, symbol: InputSymbol) -> Tetromino:
    """Return ``piece`` transformed by the player's ``symbol``."""

    return _MOVES[InputSymbol(symbol)](piece)


def tick(
    state: GameState,
    tick_count: int,
    symbol: InputSymbol = InputSymbol.NONE,
    rng: Optional[Any] = None,
) -> GameState:
    """Advance ``state`` by one tick.

    Parameters
    ----------
    state:
        The previous state.  It is never modified.
    tick_count:
        Monotonic counter supplied by the clock.  Only ``tick_count % speed``
        matters: the piece descends automatically on ticks where it is ``0``.
    symbol:
        Player intent for this tick.
    rng:
        Source of randomness for new pieces; see
        :func:`~blockfall.game_state.random_tetromino`.
    """

    symbol = InputSymbol(symbol)

    if state.game_ended:
        if symbol is InputSymbol.NONE:
            return state
        return new_game(state.high_score, rng)

    current = state.current
    descended = current.translate(0, 1) if tick_count % state.speed == 0 else current
    moved = apply_input(descended, symbol)

    board = state.board
    if is_legal(board, moved):
        resolved = replace(state, current=moved)
    elif is_legal(board, descended):
        resolved = replace(state, current=descended)
    elif current.y == 0:
        resolved = replace(
            state, game_ended=True, high_score=max(state.high_score, state.score)
        )
    else:
        resolved = replace(
            state,
            board=board.place(current),
            current=state.preview,
            preview=random_tetromino(rng),
        )

    board, cleared = resolved.board.clear_full_rows()
    score = resolved.score + cleared
    return replace(resolved, board=board, score=score, speed=descent_interval(score))
