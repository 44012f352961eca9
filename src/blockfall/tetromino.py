"""Tetromino definitions and rotation.

Every piece is described by four block offsets ``(x, y)`` at rotation ``0``.
Other rotations are derived on demand by repeatedly applying a single
clockwise step around the piece's local origin, ``(x, y) -> (y, -x)``.  There
are no per-piece rotation tables and no wall kicks: a rotation that does not
fit is simply rejected by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

Offsets = Tuple[Tuple[int, int], ...]

# Number of distinct rotation states.
ROTATIONS = 4


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


PIECE_COLORS: Dict[TetrominoType, str] = {
    TetrominoType.I: "#00f0f0",
    TetrominoType.O: "#f0f000",
    TetrominoType.T: "#f000f0",
    TetrominoType.S: "#00f000",
    TetrominoType.Z: "#f00000",
    TetrominoType.J: "#0000f0",
    TetrominoType.L: "#f0a000",
}

# Rotation 0 offsets, ``(x, y)`` with ``y`` growing downwards.
BASE_BLOCKS: Dict[TetrominoType, Offsets] = {
    TetrominoType.I: ((0, 0), (1, 0), (2, 0), (3, 0)),
    TetrominoType.O: ((0, 0), (1, 0), (0, 1), (1, 1)),
    TetrominoType.T: ((1, 0), (0, 1), (1, 1), (2, 1)),
    TetrominoType.S: ((1, 0), (2, 0), (0, 1), (1, 1)),
    TetrominoType.Z: ((0, 0), (1, 0), (1, 1), (2, 1)),
    TetrominoType.J: ((0, 0), (0, 1), (1, 1), (2, 1)),
    TetrominoType.L: ((2, 0), (0, 1), (1, 1), (2, 1)),
}


def rotate_blocks(blocks: Offsets, rotation: int) -> Offsets:
    """Return ``blocks`` rotated clockwise ``rotation`` quarter turns.

    Values are wrapped so any integer is accepted; negative values rotate
    counter-clockwise.
    """

    for _ in range(rotation % ROTATIONS):
        blocks = tuple((y, -x) for x, y in blocks)
    return blocks


def shape_blocks(shape: TetrominoType, rotation: int) -> Offsets:
    """Return the local block offsets for ``shape`` at ``rotation``."""

    return rotate_blocks(BASE_BLOCKS[shape], rotation)


@dataclass(frozen=True)
class PiecePreview:
    """Renderer-facing description of the upcoming piece."""

    shape: TetrominoType
    blocks: Offsets
    color: str

    @classmethod
    def of(cls, shape: TetrominoType) -> "PiecePreview":
        return cls(shape=shape, blocks=BASE_BLOCKS[shape], color=PIECE_COLORS[shape])


@dataclass
class Tetromino:
    """Active falling piece in the game."""

    shape: TetrominoType
    rotation: int = 0
    x: int = 0
    y: int = 0

    @property
    def color(self) -> str:
        return PIECE_COLORS[self.shape]

    def rotate(self, direction: int = 1) -> None:
        """Rotate the piece one step.

        ``+1`` rotates clockwise and ``-1`` counter-clockwise.  The rotation
        state always stays within ``0..3``.
        """

        self.rotation = (self.rotation + direction + ROTATIONS) % ROTATIONS

    def move(self, dx: int, dy: int) -> None:
        self.x += dx
        self.y += dy

    def offsets(self) -> Offsets:
        """Return the local block offsets at the current rotation."""

        return shape_blocks(self.shape, self.rotation)

    def blocks(self) -> List[Tuple[int, int]]:
        """Return the absolute ``(x, y)`` grid coordinates of this piece."""

        return [(self.x + bx, self.y + by) for bx, by in self.offsets()]
