from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_block_rl.game import Action, FallingBlockGame, GameConfig
from falling_block_rl.visualization.terminal import format_frame


class FallingBlockEnv(gym.Env):
    """One env step is one game tick: the chosen action, then one gravity step."""

    metadata = {"render_modes": ["ansi", "rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 max_episode_steps: int = 10000,
                 step_penalty: float = 0.0,
                 terminal_penalty: float = 0.0) -> None:
        super().__init__()
        self.game = FallingBlockGame(config)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)

        h, w = self.game.config.height, self.game.config.width
        # Frozen cells are 1, the falling piece -1. Row 0 is the bottom row.
        self.observation_space = spaces.Box(low=-1, high=1, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_info(self, rows_cleared: int = 0) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "rows_cleared": rows_cleared,
            "rows_cleared_total": self.game.rows_cleared_total,
            "pieces_spawned": self.game.pieces_spawned,
            "filled_cells": self.game.grid.filled_cells(),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        self._steps = 0
        return self.game.get_state(), self._get_info()

    def step(self, action):
        obs, gained, done, info = self.game.step(Action(int(action)))
        self._steps += 1

        reward = float(gained) - self.step_penalty
        terminated = bool(done)
        truncated = self._steps >= self.max_episode_steps and not terminated
        if terminated:
            reward += self.terminal_penalty

        return obs, reward, terminated, truncated, self._get_info(info.get("rows_cleared", 0))

    def render(self):
        frame = self.game.snapshot()
        if self.render_mode == "ansi":
            return format_frame(frame)
        if self.render_mode == "rgb_array":
            state = frame.to_array()
            cell = 12
            h, w = state.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                # Image rows run top-down, board rows bottom-up
                top = (h - 1 - y) * cell
                for x in range(w):
                    if state[y, x] > 0:
                        color = (70, 200, 120)
                    elif state[y, x] < 0:
                        color = (240, 200, 60)
                    else:
                        color = (30, 30, 36)
                    img[top : top + cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
