"""Utility helpers for the engine."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .board import Board, PIECE_VALUES
from .tetromino import Tetromino


def can_place(board: Board, x: int, y: int, blocks: Iterable[Tuple[int, int]]) -> bool:
    """Return ``True`` if ``blocks`` fit on ``board`` with their origin at ``(x, y)``.

    A placement is rejected when any block leaves the board horizontally,
    falls below the bottom row, or overlaps a locked cell.  Blocks above the
    top row (negative ``y``) are allowed and never checked against the grid,
    so freshly spawned pieces may poke out of the visible field.

    This is the only collision test in the package; movement, rotation and
    spawn checks all go through it.
    """

    for bx, by in blocks:
        col = x + bx
        row = y + by
        if not 0 <= col < board.width or row >= board.height:
            return False
        if row >= 0 and not board.is_empty(row, col):
            return False
    return True


def can_move(board: Board, tetromino: Tetromino, dx: int, dy: int) -> bool:
    """Return ``True`` if ``tetromino`` can move by ``dx`` and ``dy`` on ``board``."""

    return can_place(board, tetromino.x + dx, tetromino.y + dy, tetromino.offsets())


def render_grid(board: Board, active: Optional[Tetromino] = None) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without mutating the underlying board state (i.e. without locking the
    piece). Cells occupied by the active piece receive the mapped integer
    value for the piece's shape.
    """

    grid = [[int(v) for v in row] for row in board.grid]
    if active is not None:
        for x, y in active.blocks():
            if board.in_bounds(y, x):
                grid[y][x] = PIECE_VALUES[active.shape]
    return grid
