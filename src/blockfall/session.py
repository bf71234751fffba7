"""Game session driving the engine from a clock and an input source."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from .controller import InputNormalizer, InputSymbol
from .engine import tick
from .game_state import GameState, new_game
from .high_score import HighScoreStore


LOGGER = logging.getLogger(__name__)


class GameSession:
    """Own the tick counter and thread game states through :func:`tick`.

    The session is the clock: every :meth:`step` uses the current counter
    value and then increments it.  Input is sampled from ``normalizer`` once
    per step unless the caller passes a symbol explicitly.  The high score is
    read from ``store`` on construction and written back only when a game
    ends.
    """

    def __init__(
        self,
        store: Optional[HighScoreStore] = None,
        normalizer: Optional[InputNormalizer] = None,
        rng: Optional[Any] = None,
        start_tick: int = 0,
    ) -> None:
        self.store = store
        self.normalizer = normalizer or InputNormalizer()
        self._rng = rng
        self.tick_count = start_tick
        high_score = store.load() if store is not None else 0
        self.state: GameState = new_game(high_score, rng)
        self.games_played = 1
        LOGGER.info("Game started (high score %d)", high_score)

    def step(self, symbol: Optional[InputSymbol] = None) -> GameState:
        """Advance the game by one tick and return the new state."""

        if symbol is None:
            symbol = self.normalizer.current()
        previous = self.state
        self.state = tick(previous, self.tick_count, symbol, self._rng)
        self.tick_count += 1

        if self.state is previous:
            return self.state
        if self.state.game_ended and not previous.game_ended:
            self._game_over(previous)
        elif previous.game_ended:
            self.games_played += 1
            LOGGER.info("Game restarted (game %d)", self.games_played)
        elif self.state.score > previous.score:
            LOGGER.debug(
                "Cleared %d row(s). Score: %d",
                self.state.score - previous.score,
                self.state.score,
            )
        return self.state

    def run(self, ticks: int, inputs: Optional[Iterable[InputSymbol]] = None) -> GameState:
        """Run ``ticks`` steps, taking symbols from ``inputs`` when given."""

        symbols = iter(inputs) if inputs is not None else None
        for _ in range(ticks):
            symbol = next(symbols, InputSymbol.NONE) if symbols is not None else None
            self.step(symbol)
        return self.state

    def _game_over(self, previous: GameState) -> None:
        LOGGER.info("Game over. Score: %d, high score: %d", self.state.score, self.state.high_score)
        if self.store is not None and self.state.high_score != previous.high_score:
            self.store.save(self.state.high_score)
