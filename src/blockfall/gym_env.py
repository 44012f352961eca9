"""Gymnasium-compatible wrapper exposing the engine frame by frame.

Observation is a flat vector suitable for SB3 MlpPolicy by default.
It includes:
  - board mask with the active piece overlaid (20x10=200)
  - active piece one-hot (7)
  - upcoming piece one-hot (7)

Action space is Discrete(7): ``0`` does nothing, the rest map to the members
of :class:`~blockfall.engine.Command` in declaration order.  Every step applies
the action and then advances the engine clock by ``frame_ms``, so gravity acts
exactly as it would for a human player at that frame rate.  The reward is the
change in score, plus ``top_out_penalty`` when the game ends.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .board import HEIGHT, WIDTH
from .engine import Command, GameEngine
from .game_state import Phase
from .tetromino import TetrominoType


ACTIONS: Tuple[Optional[Command], ...] = (None, *Command)

_TYPES = list(TetrominoType)


class BlockfallGymEnv(gym.Env):
    metadata = {
        "render_modes": ["ansi"],
        "render_fps": 60,
    }

    def __init__(
        self,
        *,
        frame_ms: float = 1000.0 / 60,
        top_out_penalty: float = -10.0,
        max_steps: Optional[int] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self.frame_ms = frame_ms
        self.top_out_penalty = top_out_penalty
        self.render_mode = render_mode
        self.action_space = spaces.Discrete(len(ACTIONS))
        self._obs_size = HEIGHT * WIDTH + 2 * len(_TYPES)
        self.observation_space = spaces.Box(
            low=0.0, high=1.0, shape=(self._obs_size,), dtype=np.float32
        )
        self._engine = GameEngine()
        self._steps = 0
        self._max_steps = max_steps

    @property
    def engine(self) -> GameEngine:
        return self._engine

    # ----------------------- Env API -----------------------
    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        if seed is not None:
            self._engine = GameEngine(seed=seed)
        self._engine.restart()
        self._steps = 0
        return self._observe(), self._info()

    def step(self, action: int):
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action: {action}")
        if self._engine.phase is Phase.OVER:
            return self._observe(), 0.0, True, self._steps_exhausted(), self._info()
        before = self._engine.score
        command = ACTIONS[int(action)]
        if command is not None:
            self._engine.apply_command(command)
        self._engine.tick(self.frame_ms)
        self._steps += 1

        reward = float(self._engine.score - before)
        terminated = self._engine.phase is Phase.OVER
        if terminated:
            reward += self.top_out_penalty
        return self._observe(), reward, terminated, self._steps_exhausted(), self._info()

    def render(self):
        rows = ["".join("#" if cell else "." for cell in row) for row in self._engine.render_grid()]
        return "\n".join(rows)

    def close(self):
        return None

    # -------------------- Helpers -------------------------
    def _steps_exhausted(self) -> bool:
        return self._max_steps is not None and self._steps >= self._max_steps

    def _observe(self) -> np.ndarray:
        board = (np.asarray(self._engine.render_grid()) != 0).astype(np.float32).reshape(-1)
        active_oh = np.zeros((len(_TYPES),), dtype=np.float32)
        upcoming_oh = np.zeros((len(_TYPES),), dtype=np.float32)
        active = self._engine.state.active
        if active is not None:
            active_oh[_TYPES.index(active.shape)] = 1.0
        upcoming = self._engine.state.upcoming
        if upcoming is not None:
            upcoming_oh[_TYPES.index(upcoming)] = 1.0
        return np.concatenate([board, active_oh, upcoming_oh], dtype=np.float32)

    def _info(self) -> Dict:
        return {
            "score": self._engine.score,
            "lines": self._engine.lines_cleared,
            "level": self._engine.level,
        }
