"""Command line entry point.

Run with: `python -m blockfall`

Without ``--play`` a headless session is driven with random input for a
number of ticks and the final frame is printed, which doubles as a smoke test
for the engine.  ``--play`` opens the pygame window instead.
"""

from __future__ import annotations

import argparse
import logging
import random

from .controller import InputSymbol
from .high_score import HighScoreStore, MemoryHighScoreStore, default_store
from .session import GameSession
from .utils import format_grid, render_grid


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="blockfall", description=__doc__)
    parser.add_argument("--ticks", type=int, default=500, help="Ticks to simulate headless.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for pieces and inputs.")
    parser.add_argument(
        "--high-score-file",
        default=None,
        help="JSON file holding the high score (defaults to $BLOCKFALL_HIGH_SCORE_FILE "
        "or ~/.blockfall/high_score.json).",
    )
    parser.add_argument(
        "--no-persist",
        dest="persist",
        action="store_false",
        help="Keep the high score in memory only.",
    )
    parser.add_argument("--play", action="store_true", help="Open the pygame window.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def simulate(ticks: int, store: HighScoreStore, seed: int | None = None) -> GameSession:
    """Play ``ticks`` ticks with uniformly random input."""

    rng = random.Random(seed)
    session = GameSession(store=store, rng=rng)
    symbols = list(InputSymbol)
    session.run(ticks, (rng.choice(symbols) for _ in range(ticks)))
    return session


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s"
    )
    store = default_store(args.high_score_file) if args.persist else MemoryHighScoreStore()

    if args.play:
        from .run_pygame import main as play

        play(store=store, seed=args.seed)
        return

    session = simulate(args.ticks, store, args.seed)
    state = session.state
    print(format_grid(render_grid(state.board, None if state.game_ended else state.current)))
    print(f"Lines: {state.score}  High score: {state.high_score}  Ended: {state.game_ended}")


if __name__ == "__main__":
    main()
