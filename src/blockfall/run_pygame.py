"""Simple pygame front-end for the engine.

This module provides a playable version of the game.  It is intentionally
thin: pygame key events are fed into an :class:`InputNormalizer`, a fixed
rate accumulator drives :class:`GameSession.step` and every frame redraws the
whole state (board, falling piece, preview, scores and the game-over overlay).
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Optional

import pygame

from .board import Board
from .controller import InputNormalizer
from .game_state import GameState
from .high_score import HighScoreStore
from .session import GameSession
from .shapes import CELL_VALUES, PieceKind, shape_blocks
from .tetromino import Tetromino

# Size of a single board cell in pixels
CELL_SIZE = 30
# Width of the side panel holding the preview and scores
PANEL_WIDTH = 6 * CELL_SIZE
# Milliseconds per engine tick; descent happens every ``speed`` ticks
TICK_RATE_MS = 100
# Frames per second to run the game loop at
FPS = 60

BOARD_PX = Board.width * CELL_SIZE
BOARD_PY = Board.height * CELL_SIZE
SCREEN_SIZE = (BOARD_PX + PANEL_WIDTH, BOARD_PY)

BACKGROUND = (0, 0, 0)
GRID_LINE = (50, 50, 50)
TEXT_COLOR = (230, 230, 230)

# Shown over the board once the game has ended; any bound key starts over
OVERLAY_LINES = ("GAME OVER", "press a move key to restart")

# Colours for each piece kind
SHAPE_COLORS = {
    PieceKind.I: (0, 255, 255),
    PieceKind.O: (255, 255, 0),
    PieceKind.T: (128, 0, 128),
    PieceKind.S: (0, 255, 0),
    PieceKind.Z: (255, 0, 0),
    PieceKind.J: (0, 0, 255),
    PieceKind.L: (255, 165, 0),
}

# Mapping from the integer stored in the board grid to a colour
CELL_COLORS = {0: BACKGROUND}
for kind, color in SHAPE_COLORS.items():
    CELL_COLORS[CELL_VALUES[kind]] = color

# pygame key codes translated to the names used by the input bindings
KEY_NAMES = {
    pygame.K_a: "a",
    pygame.K_d: "d",
    pygame.K_s: "s",
    pygame.K_SPACE: "space",
    pygame.K_LEFT: "left",
    pygame.K_RIGHT: "right",
    pygame.K_DOWN: "down",
    pygame.K_UP: "up",
}

LOGGER = logging.getLogger(__name__)


def _cell_rect(col: int, row: int, origin: tuple[int, int] = (0, 0)) -> pygame.Rect:
    return pygame.Rect(
        origin[0] + col * CELL_SIZE, origin[1] + row * CELL_SIZE, CELL_SIZE, CELL_SIZE
    )


def draw_board(screen: pygame.Surface, board: Board) -> None:
    """Render the locked cells."""

    for r in range(board.height):
        for c in range(board.width):
            rect = _cell_rect(c, r)
            pygame.draw.rect(screen, CELL_COLORS[board.get_cell(r, c)], rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_tetromino(screen: pygame.Surface, piece: Tetromino) -> None:
    """Render the falling piece, skipping blocks outside the board."""

    color = SHAPE_COLORS[piece.kind]
    for r, c in piece.blocks():
        if 0 <= r < Board.height and 0 <= c < Board.width:
            rect = _cell_rect(c, r)
            pygame.draw.rect(screen, color, rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_preview(screen: pygame.Surface, piece: Tetromino) -> None:
    """Render the next piece in the side panel."""

    origin = (BOARD_PX + CELL_SIZE, 2 * CELL_SIZE)
    color = SHAPE_COLORS[piece.kind]
    for dr, dc in shape_blocks(piece.kind, piece.rotation):
        rect = _cell_rect(dc, dr, origin)
        pygame.draw.rect(screen, color, rect)
        pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_scores(screen: pygame.Surface, state: GameState, font: pygame.font.Font) -> None:
    x = BOARD_PX + CELL_SIZE // 2
    screen.blit(font.render("Next", True, TEXT_COLOR), (x, CELL_SIZE // 2))
    # Scores go below the preview, which is at most four cells tall.
    lines = (f"Lines: {state.score}", f"Speed: {state.speed}", f"High: {state.high_score}")
    for i, text in enumerate(lines):
        screen.blit(font.render(text, True, TEXT_COLOR), (x, (7 + i) * CELL_SIZE))


def draw_overlay(screen: pygame.Surface, font: Optional[pygame.font.Font] = None) -> None:
    """Dim the board and show the game-over message."""

    shade = pygame.Surface((BOARD_PX, BOARD_PY), pygame.SRCALPHA)
    shade.fill((0, 0, 0, 170))
    screen.blit(shade, (0, 0))
    if font is not None:
        for i, text in enumerate(OVERLAY_LINES):
            label = font.render(text, True, TEXT_COLOR)
            rect = label.get_rect(center=(BOARD_PX // 2, BOARD_PY // 2 + i * CELL_SIZE))
            screen.blit(label, rect)


def draw_state(
    screen: pygame.Surface, state: GameState, font: Optional[pygame.font.Font] = None
) -> None:
    """Redraw everything the player sees for ``state``."""

    screen.fill(BACKGROUND)
    draw_board(screen, state.board)
    if not state.game_ended:
        draw_tetromino(screen, state.current)
    draw_preview(screen, state.preview)
    if font is not None:
        draw_scores(screen, state, font)
    if state.game_ended:
        draw_overlay(screen, font)


def handle_event(event: pygame.event.Event, normalizer: InputNormalizer) -> bool:
    """Feed a pygame event into ``normalizer``.

    Returns ``False`` when the event asks the game to quit.
    """

    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return False
        name = KEY_NAMES.get(event.key)
        if name is not None:
            normalizer.press(name)
    elif event.type == pygame.KEYUP:
        name = KEY_NAMES.get(event.key)
        if name is not None:
            normalizer.release(name)
    elif event.type == pygame.WINDOWFOCUSLOST:
        normalizer.reset()
    return True


class GameRunner:
    """Manage the game loop with start/pause/resume/stop controls."""

    def __init__(
        self, store: Optional[HighScoreStore] = None, seed: Optional[int] = None
    ) -> None:
        self._store = store
        self._seed = seed
        self._running = False
        self._paused = False
        self._task: asyncio.Task | None = None
        self._screen: pygame.Surface | None = None
        self._session: GameSession | None = None
        self._clock: pygame.time.Clock | None = None
        self._tick_accum = 0

    @property
    def running(self) -> bool:
        return self._running

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def session(self) -> GameSession | None:
        return self._session

    def advance(self, dt: int) -> int:
        """Run as many engine ticks as ``dt`` milliseconds allow.

        Returns the number of ticks performed.  Leftover time carries over to
        the next frame so the tick rate stays fixed regardless of frame rate.
        """

        if self._paused or self._session is None:
            return 0
        self._tick_accum += dt
        steps = 0
        while self._tick_accum >= TICK_RATE_MS:
            self._tick_accum -= TICK_RATE_MS
            self._session.step()
            steps += 1
        return steps

    async def _run_loop(self) -> None:
        pygame.init()
        self._screen = pygame.display.set_mode(SCREEN_SIZE)
        pygame.display.set_caption("Blockfall")
        self._clock = pygame.time.Clock()
        font = pygame.font.Font(None, 28)

        rng = random.Random(self._seed) if self._seed is not None else None
        self._session = GameSession(store=self._store, rng=rng)
        self._tick_accum = 0
        self._running = True
        while self._running:
            dt = self._clock.tick(FPS) if self._clock else 0
            # Even when paused, process events so the window remains responsive
            for event in pygame.event.get():
                if not handle_event(event, self._session.normalizer):
                    self._running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_p:
                    if self._paused:
                        self.resume()
                    else:
                        self.pause()

            self.advance(dt)

            state = self._session.state
            draw_state(self._screen, state, font)
            pygame.display.set_caption(
                f"Blockfall - {'Paused - ' if self._paused else ''}Lines: {state.score}"
            )
            pygame.display.flip()

            # Yield to the host event loop to keep the UI responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Game stopped")

    def start(self) -> None:
        if self._task and not self._task.done():
            LOGGER.info("Game already running")
            return
        self._paused = False
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No running loop (plain Python); run synchronously
            asyncio.run(self._run_loop())
        else:
            self._task = loop.create_task(self._run_loop())

    def pause(self) -> None:
        if not self._running:
            LOGGER.info("Pause ignored: game not running")
            return
        self._paused = True
        if self._session is not None:
            self._session.normalizer.reset()
        LOGGER.info("Paused")

    def resume(self) -> None:
        if not self._running:
            LOGGER.info("Resume ignored: game not running")
            return
        self._paused = False
        LOGGER.info("Resumed")

    def stop(self) -> None:
        if not self._running:
            LOGGER.info("Stop ignored: game not running")
            return
        self._running = False


def main(store: Optional[HighScoreStore] = None, seed: Optional[int] = None) -> None:
    """Open the window and play until it is closed."""

    GameRunner(store=store, seed=seed).start()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
