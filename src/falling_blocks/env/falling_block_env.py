from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Action, FallingBlockGame, GameConfig, TetrominoType


class FallingBlockEnv(gym.Env):
    """One falling-block game per episode, one ``Action`` per step.

    Observation is the board (row 0 at the bottom) with stack cells holding
    their ``TetrominoType`` and the falling piece's cells negated. Reward is the
    number of rows cleared by the step plus the configured penalties.
    """

    metadata = {"render_modes": []}

    def __init__(self, config: Optional[GameConfig] = None,
                 invalid_action_penalty: float = 0.0,
                 step_penalty: float = 0.0,
                 terminal_penalty: float = -1.0) -> None:
        super().__init__()
        self.game = FallingBlockGame(config)

        self.invalid_action_penalty = float(invalid_action_penalty)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)

        rows = self.game.board.height
        cols = self.game.board.width
        top = max(int(t) for t in TetrominoType)
        self.observation_space = spaces.Box(low=-top, high=top, shape=(rows, cols), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action))

    def _get_obs(self) -> np.ndarray:
        return self.game.get_state().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "rows_cleared_total": self.game.rows_cleared_total,
            "pieces_placed": self.game.pieces_placed,
            "max_height": self.game.board.max_height(),
            "holes": self.game.board.count_holes(),
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.reset(seed)
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        action = Action(int(action))
        _, lines, terminated, step_info = self.game.step(action)

        reward_components: Dict[str, float] = {"lines": float(lines), "step": self.step_penalty}
        if action in (Action.LEFT, Action.RIGHT, Action.ROTATE) and not step_info["moved"]:
            reward_components["invalid"] = self.invalid_action_penalty
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))
        info = self._get_info()
        info["reward_components"] = reward_components
        return self._get_obs(), reward, bool(terminated), False, info

    def close(self) -> None:
        pass
