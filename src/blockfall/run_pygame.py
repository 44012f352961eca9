"""Simple pygame front-end for the engine.

This module is the renderer and input layer: it maps key presses to engine
commands, feeds the engine the real elapsed frame time and draws whatever the
accessors report.  It holds no game rules of its own.
"""

from __future__ import annotations

import argparse
import logging

import pygame

from .board import HEIGHT, WIDTH
from .engine import Command, GameEngine
from .game_state import Phase

# Size of a single board cell in pixels
CELL_SIZE = 30
# Width of the side panel showing the next piece
PANEL_WIDTH = 6 * CELL_SIZE
# Frames per second to run the game loop at
FPS = 60

BACKGROUND = (17, 17, 17)
GRID_LINE = (51, 51, 51)

KEY_COMMANDS = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_UP: Command.ROTATE_CW,
    pygame.K_x: Command.ROTATE_CW,
    pygame.K_z: Command.ROTATE_CCW,
}

LOGGER = logging.getLogger(__name__)


def handle_key(event: pygame.event.Event, engine: GameEngine) -> None:
    """Translate a key press into an engine call."""

    if event.key == pygame.K_p:
        engine.toggle_pause()
    elif event.key == pygame.K_RETURN:
        engine.start()
    elif event.key == pygame.K_r:
        engine.restart()
    elif event.key in KEY_COMMANDS:
        engine.apply_command(KEY_COMMANDS[event.key])


def _draw_cell(screen: pygame.Surface, x: int, y: int, color: str, size: int = CELL_SIZE) -> None:
    rect = pygame.Rect(x * size + 1, y * size + 1, size - 2, size - 2)
    pygame.draw.rect(screen, pygame.Color(color), rect)


def draw_board(screen: pygame.Surface, engine: GameEngine) -> None:
    """Render the locked cells and the grid lines."""

    for y, row in enumerate(engine.grid()):
        for x, color in enumerate(row):
            rect = pygame.Rect(x * CELL_SIZE, y * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)
            if color:
                _draw_cell(screen, x, y, color)


def draw_active(screen: pygame.Surface, engine: GameEngine) -> None:
    """Render the active piece, skipping blocks above the visible field."""

    color = engine.active_color
    if color is None:
        return
    for x, y in engine.active_cells():
        if 0 <= y < HEIGHT:
            _draw_cell(screen, x, y, color)


def draw_next(screen: pygame.Surface, engine: GameEngine) -> None:
    preview = engine.next_piece
    if preview is None:
        return
    size = CELL_SIZE * 2 // 3
    left = WIDTH * CELL_SIZE + size
    for bx, by in preview.blocks:
        rect = pygame.Rect(left + bx * size + 1, size + by * size + 1, size - 2, size - 2)
        pygame.draw.rect(screen, pygame.Color(preview.color), rect)


def caption(engine: GameEngine) -> str:
    status = {
        Phase.IDLE: "Press Enter - ",
        Phase.PAUSED: "Paused - ",
        Phase.OVER: "Game over - ",
    }.get(engine.phase, "")
    return (
        f"Blockfall - {status}Score: {engine.score} "
        f"Lines: {engine.lines_cleared} Level: {engine.level}"
    )


class GameRunner:
    """Own the pygame window and pace the engine at :data:`FPS`."""

    def __init__(self, engine: GameEngine | None = None) -> None:
        self.engine = engine or GameEngine()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        self._running = False

    def run(self) -> None:
        pygame.init()
        screen = pygame.display.set_mode((WIDTH * CELL_SIZE + PANEL_WIDTH, HEIGHT * CELL_SIZE))
        clock = pygame.time.Clock()
        LOGGER.info("Window opened; press Enter to start")

        self._running = True
        try:
            while self._running:
                dt = clock.tick(FPS)
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN:
                        handle_key(event, self.engine)

                self.engine.tick(dt)

                screen.fill(BACKGROUND)
                draw_board(screen, self.engine)
                draw_active(screen, self.engine)
                draw_next(screen, self.engine)
                pygame.display.set_caption(caption(self.engine))
                pygame.display.flip()
        finally:
            pygame.quit()
            LOGGER.info("Window closed. Final score: %d", self.engine.score)


def main() -> None:
    parser = argparse.ArgumentParser(description="Play blockfall in a pygame window.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece sequence.")
    parser.add_argument("--log-level", default="INFO", help="Logging level (e.g. DEBUG, INFO).")
    args = parser.parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")
    GameRunner(GameEngine(seed=args.seed)).run()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()
