"""High level game state container."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
import random

from .board import Board
from .scoring import (
    BASE_DROP_INTERVAL_MS,
    drop_interval_ms,
    level_for_lines,
    line_clear_score,
)
from .tetromino import Tetromino, TetrominoType
from .utils import can_move


# Spawn origin: horizontal centre, top row.
SPAWN_X = Board.width // 2 - 1
SPAWN_Y = 0


class Phase(str, Enum):
    """Lifecycle of a game session."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


@dataclass
class GameState:
    """Mutable state for a game session."""

    board: Board = field(default_factory=Board)
    active: Optional[Tetromino] = None
    upcoming: Optional[TetrominoType] = None
    phase: Phase = Phase.IDLE
    score: int = 0
    lines: int = 0
    level: int = 1
    drop_interval_ms: int = BASE_DROP_INTERVAL_MS
    drop_accum: float = 0.0
    rng: random.Random = field(default_factory=random.Random, repr=False)

    @property
    def running(self) -> bool:
        return self.phase is Phase.RUNNING

    @property
    def paused(self) -> bool:
        return self.phase is Phase.PAUSED

    @property
    def over(self) -> bool:
        return self.phase is Phase.OVER

    def _random_type(self) -> TetrominoType:
        """Return a uniformly random tetromino type."""

        return self.rng.choice(list(TetrominoType))

    def spawn_tetromino(self) -> bool:
        """Promote the upcoming piece to active and draw a new upcoming one.

        The new active piece starts at the spawn origin in rotation ``0``.
        Returns ``False`` when that placement collides with the board, which
        the caller treats as the end of the game.
        """

        shape = self.upcoming or self._random_type()
        self.active = Tetromino(shape, x=SPAWN_X, y=SPAWN_Y)
        self.upcoming = self._random_type()
        return can_move(self.board, self.active, 0, 0)

    def record_clear(self, cleared: int) -> int:
        """Apply the score, line and level effects of clearing ``cleared`` rows.

        The award uses the level in effect before the clear.  Returns the
        points awarded.
        """

        if cleared == 0:
            return 0
        award = line_clear_score(cleared, self.level)
        self.score += award
        self.lines += cleared
        self.level = level_for_lines(self.lines)
        self.drop_interval_ms = drop_interval_ms(self.level)
        return award

    def reset_game(self) -> None:
        """Reset board, counters and pieces for a new game.

        The phase is left untouched; the engine decides which state follows a
        reset.
        """

        self.board = Board()
        self.score = 0
        self.lines = 0
        self.level = 1
        self.drop_interval_ms = BASE_DROP_INTERVAL_MS
        self.drop_accum = 0.0
        self.active = None
        self.upcoming = None
