"""Board representation for the playfield."""

from __future__ import annotations

from typing import List, Optional

import numpy as np
from numpy.typing import NDArray

from .tetromino import PIECE_COLORS, Tetromino, TetrominoType


# Dimensions of the playfield.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]

# Mapping from ``TetrominoType`` to the integer stored in the grid.  ``0`` is
# reserved for an empty cell.
PIECE_VALUES = {t: i + 1 for i, t in enumerate(TetrominoType)}
VALUE_PIECES = {value: t for t, value in PIECE_VALUES.items()}


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


def cell_color(value: int) -> Optional[str]:
    """Return the color for a stored cell value, ``None`` for empty cells."""

    if value == 0:
        return None
    return PIECE_COLORS[VALUE_PIECES[value]]


class Board:
    """Playfield holding the locked cells.

    Cells are addressed as ``(row, col)``; rows grow downwards so row ``0`` is
    the top of the visible field.
    """

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.in_bounds(row, col):
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.in_bounds(row, col):
            self.grid[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the cell at ``(row, col)`` is empty.

        Any coordinates outside the board are treated as occupied.
        """

        if self.in_bounds(row, col):
            return bool(self.grid[row, col] == 0)
        return False

    def lock_piece(self, tetromino: Tetromino) -> int:
        """Stamp the tetromino's blocks into the grid.

        Blocks that lie above the top row (or otherwise outside the grid) are
        dropped silently.  Returns the number of cells written.
        """

        value = np.uint8(PIECE_VALUES[tetromino.shape])
        written = 0
        for x, y in tetromino.blocks():
            if self.in_bounds(y, x):
                self.grid[y, x] = value
                written += 1
        return written

    def clear_full_rows(self) -> int:
        """Clear completed rows and return how many were removed.

        All full rows are removed in one pass and the same number of empty
        rows is inserted at the top, so a row shifting into a cleared slot is
        never skipped.
        """

        full_rows = np.all(self.grid != 0, axis=1)
        cleared = int(np.count_nonzero(full_rows))
        if cleared:
            remaining = self.grid[~full_rows]
            new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
            self.grid = np.vstack((new_rows, remaining))
        return cleared

    def colors(self) -> List[List[Optional[str]]]:
        """Return a snapshot of the grid as rows of optional color strings."""

        return [[cell_color(int(v)) for v in row] for row in self.grid]
