"""Game engine driving a single session.

:class:`GameEngine` owns a :class:`~blockfall.game_state.GameState` and is the
only thing that mutates it.  A host (the pygame front-end, the gym
environment, a test) drives it with two calls:

* :meth:`GameEngine.tick` with the elapsed time since the previous frame, which
  is the sole source of gravity, and
* :meth:`GameEngine.apply_command` with a :class:`Command` decoded from player
  input.

Both are silently ignored unless the game is running.  Everything a renderer
needs is available through read-only accessors that return copies.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union
import logging
import random

from .game_state import GameState, Phase
from .scoring import HARD_DROP_POINTS, SOFT_DROP_POINTS
from .tetromino import PiecePreview
from .utils import can_move, render_grid


LOGGER = logging.getLogger(__name__)


class Command(str, Enum):
    """Player commands understood by :meth:`GameEngine.apply_command`."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    HARD_DROP = "hard_drop"
    ROTATE_CW = "rotate_cw"
    ROTATE_CCW = "rotate_ccw"


class GameEngine:
    """Falling-block game engine.

    Parameters
    ----------
    seed:
        Seed for the piece generator.  Ignored when ``rng`` is given.
    rng:
        Random source used to draw pieces.  Pieces are drawn uniformly and
        independently from the seven types.
    """

    def __init__(self, *, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self.state = GameState(rng=rng or random.Random(seed))

    # Lifecycle --------------------------------------------------------
    def start(self) -> bool:
        """Start a new game from the idle or game-over state.

        Returns ``False`` (and does nothing) while a game is running or
        paused.
        """

        if self.state.phase not in (Phase.IDLE, Phase.OVER):
            LOGGER.debug("Start ignored: game already %s", self.state.phase.value)
            return False
        self._new_game()
        LOGGER.info("Game started")
        return True

    def restart(self) -> None:
        """Abandon the current game, if any, and start a fresh one."""

        self._new_game()
        LOGGER.info("Game restarted")

    def pause(self) -> bool:
        if self.state.phase is not Phase.RUNNING:
            LOGGER.debug("Pause ignored: game not running")
            return False
        self.state.phase = Phase.PAUSED
        LOGGER.debug("Paused")
        return True

    def resume(self) -> bool:
        if self.state.phase is not Phase.PAUSED:
            LOGGER.debug("Resume ignored: game not paused")
            return False
        self.state.phase = Phase.RUNNING
        LOGGER.debug("Resumed")
        return True

    def toggle_pause(self) -> bool:
        """Pause a running game or resume a paused one.

        Returns ``True`` if the phase changed.
        """

        if self.state.phase is Phase.PAUSED:
            return self.resume()
        return self.pause()

    def _new_game(self) -> None:
        self.state.reset_game()
        self.state.phase = Phase.RUNNING
        self.spawn_next()

    # Driving ----------------------------------------------------------
    def tick(self, delta_ms: float) -> None:
        """Advance gravity by ``delta_ms`` milliseconds of elapsed time.

        Elapsed time accumulates across calls; once it exceeds the current
        drop interval the accumulator resets and the active piece falls one
        row, locking if it cannot.  At most one row is dropped per call.

        Raises:
            ValueError: If ``delta_ms`` is negative while the game is running.
        """

        if self.state.phase is not Phase.RUNNING:
            return
        if delta_ms < 0:
            raise ValueError(f"Elapsed time must be non-negative, got {delta_ms}")
        self.state.drop_accum += delta_ms
        if self.state.drop_accum > self.state.drop_interval_ms:
            self.state.drop_accum = 0.0
            if not self.try_move(0, 1):
                self._lock_active()

    def apply_command(self, cmd: Union[Command, str]) -> bool:
        """Apply a player command to the active piece.

        Returns ``True`` if the command changed the game state.  Commands are
        ignored unless the game is running.

        Raises:
            ValueError: If ``cmd`` is not a known :class:`Command`.
        """

        cmd = Command(cmd)
        if self.state.phase is not Phase.RUNNING:
            return False
        if cmd is Command.MOVE_LEFT:
            return self.try_move(-1, 0)
        if cmd is Command.MOVE_RIGHT:
            return self.try_move(1, 0)
        if cmd is Command.SOFT_DROP:
            if self.try_move(0, 1):
                self.state.score += SOFT_DROP_POINTS
                return True
            return False
        if cmd is Command.HARD_DROP:
            self.hard_drop()
            return True
        if cmd is Command.ROTATE_CW:
            return self.try_rotate(1)
        return self.try_rotate(-1)

    # Piece operations -------------------------------------------------
    # Each of these is a no-op returning False or 0 unless the game is running.
    def try_move(self, dx: int, dy: int) -> bool:
        """Move the active piece by ``(dx, dy)`` if the target is free."""

        if self.state.phase is not Phase.RUNNING:
            return False
        active = self.state.active
        if active is None or not can_move(self.state.board, active, dx, dy):
            return False
        active.move(dx, dy)
        return True

    def try_rotate(self, direction: int) -> bool:
        """Rotate the active piece in place, rolling back if it would collide.

        ``direction`` is ``1`` for clockwise and ``-1`` for counter-clockwise.
        There are no kicks: the origin never changes.
        """

        if self.state.phase is not Phase.RUNNING:
            return False
        active = self.state.active
        if active is None:
            return False
        previous = active.rotation
        active.rotate(direction)
        if can_move(self.state.board, active, 0, 0):
            return True
        active.rotation = previous
        return False

    def hard_drop(self) -> int:
        """Drop the active piece to its resting row and lock it.

        Awards :data:`~blockfall.scoring.HARD_DROP_POINTS` per row travelled
        and returns the number of rows.
        """

        if self.state.phase is not Phase.RUNNING or self.state.active is None:
            return 0
        rows = 0
        while self.try_move(0, 1):
            rows += 1
            self.state.score += HARD_DROP_POINTS
        self._lock_active()
        return rows

    def spawn_next(self) -> bool:
        """Bring in the next piece, ending the game if it cannot be placed."""

        if self.state.phase is not Phase.RUNNING:
            return False
        if self.state.spawn_tetromino():
            return True
        self.state.phase = Phase.OVER
        LOGGER.info("Game over. Final score: %d", self.state.score)
        return False

    def _lock_active(self) -> None:
        active = self.state.active
        if active is None:
            return
        self.state.board.lock_piece(active)
        cleared = self.state.board.clear_full_rows()
        LOGGER.debug("Locked %s at (%d, %d)", active.shape.value, active.x, active.y)
        if cleared:
            award = self.state.record_clear(cleared)
            LOGGER.debug(
                "Cleared %d row(s) for %d points. Score: %d, level: %d",
                cleared,
                award,
                self.state.score,
                self.state.level,
            )
        self.spawn_next()

    # Read accessors ---------------------------------------------------
    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def lines_cleared(self) -> int:
        return self.state.lines

    @property
    def level(self) -> int:
        return self.state.level

    @property
    def drop_interval_ms(self) -> int:
        return self.state.drop_interval_ms

    @property
    def active_color(self) -> Optional[str]:
        return self.state.active.color if self.state.active else None

    @property
    def next_piece(self) -> Optional[PiecePreview]:
        if self.state.upcoming is None:
            return None
        return PiecePreview.of(self.state.upcoming)

    def grid(self) -> List[List[Optional[str]]]:
        """Return the locked cells as rows of optional color strings."""

        return self.state.board.colors()

    def active_cells(self) -> List[Tuple[int, int]]:
        """Return the absolute ``(x, y)`` cells of the active piece."""

        return self.state.active.blocks() if self.state.active else []

    def render_grid(self) -> List[List[int]]:
        """Return the integer grid with the active piece overlaid."""

        return render_grid(self.state.board, self.state.active)

    def snapshot(self) -> Dict[str, Any]:
        """Return a plain-data view of everything a renderer draws."""

        active = self.state.active
        preview = self.next_piece
        return {
            "grid": self.grid(),
            "active": None
            if active is None
            else {
                "shape": active.shape.value,
                "rotation": active.rotation,
                "x": active.x,
                "y": active.y,
                "cells": active.blocks(),
                "color": active.color,
            },
            "next": None
            if preview is None
            else {
                "shape": preview.shape.value,
                "blocks": [list(b) for b in preview.blocks],
                "color": preview.color,
            },
            "score": self.state.score,
            "lines": self.state.lines,
            "level": self.state.level,
            "drop_interval_ms": self.state.drop_interval_ms,
            "phase": self.state.phase.value,
        }
