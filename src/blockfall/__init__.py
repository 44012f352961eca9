"""Falling-block puzzle game engine."""

from .board import Board
from .tetromino import PiecePreview, Tetromino, TetrominoType, shape_blocks
from .game_state import GameState, Phase
from .engine import Command, GameEngine
from .utils import can_move, can_place, render_grid
from .gym_env import BlockfallGymEnv

__all__ = [
    "Board",
    "BlockfallGymEnv",
    "Command",
    "GameEngine",
    "GameState",
    "Phase",
    "PiecePreview",
    "Tetromino",
    "TetrominoType",
    "can_move",
    "can_place",
    "render_grid",
    "shape_blocks",
]
