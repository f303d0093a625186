"""
Clear Cell Gymnasium Environment.

This module provides a Gymnasium-compatible environment so agents can be
trained or evaluated on Clear Cell.
"""
from typing import Dict, Tuple, Any, Optional, List
import numpy as np
import gymnasium as gym
from gymnasium import spaces

from ..game.cells import NUM_CELL_KINDS, RandomCellSource
from ..game.engine import ClearCellEngine, ClickResult


class ClearCellEnv(gym.Env):
    """
    Gymnasium environment for Clear Cell.

    Each step is one click followed by one animation tick, the way a host
    that ticks once per player move would drive the engine.

    Observation Space:
        Dictionary with:
        - 'board': (rows, cols) int8 array of BoardCell values
        - 'action_mask': (rows * cols,) int8 array, 1 = colored cell

    Action Space:
        Discrete(rows * cols) - clicked cell as row * cols + col
    """

    metadata = {"render_modes": ["human", "ansi"]}

    DEFAULT_ROWS = 10
    DEFAULT_COLS = 8

    def __init__(
        self,
        rows: int = DEFAULT_ROWS,
        cols: int = DEFAULT_COLS,
        render_mode: Optional[str] = None,
        reward_config: Optional[Dict[str, float]] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize the Clear Cell environment.

        Args:
            rows: Board rows
            cols: Board columns
            render_mode: 'human' for console output, 'ansi' for string return
            reward_config: Overrides for the reward values
            seed: Random seed for reproducibility
        """
        super().__init__()

        self.rows = rows
        self.cols = cols
        self.render_mode = render_mode
        self.seed_value = seed

        self.reward_config = {
            'cell_cleared': 1.0,
            'invalid_click_penalty': -1.0,
            'game_over_penalty': -10.0,
        }
        if reward_config:
            self.reward_config.update(reward_config)

        self.cell_source = RandomCellSource(seed=seed)
        self.engine = ClearCellEngine(rows, cols, self.cell_source)

        self.observation_space = spaces.Dict({
            'board': spaces.Box(
                low=0, high=NUM_CELL_KINDS - 1,
                shape=(rows, cols),
                dtype=np.int8
            ),
            'action_mask': spaces.Box(
                low=0, high=1,
                shape=(rows * cols,),
                dtype=np.int8
            ),
        })
        self.action_space = spaces.Discrete(rows * cols)

    def _action_to_cell(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col)."""
        return int(action) // self.cols, int(action) % self.cols

    def _cell_to_action(self, row: int, col: int) -> int:
        """Convert (row, col) to flat action index."""
        return row * self.cols + col

    def _get_observation(self) -> Dict[str, np.ndarray]:
        board = self.engine.board.get_state()
        return {
            'board': board,
            'action_mask': (board != 0).flatten().astype(np.int8),
        }

    def _get_info(self, result: Optional[ClickResult] = None) -> Dict[str, Any]:
        """Get info dictionary."""
        info = dict(self.engine.get_statistics())
        info['invalid_action'] = False
        if result is not None:
            info['last_click'] = {
                'cells_cleared': result.cells_cleared,
                'rows_collapsed': result.rows_collapsed,
                'score_gained': result.score_gained,
            }
        return info

    def reset(
        self,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment and insert the first row.

        Args:
            seed: Random seed
            options: Additional options (unused)

        Returns:
            Tuple of (observation, info)
        """
        super().reset(seed=seed)

        if seed is not None:
            self.seed_value = seed
        self.cell_source.reseed(self.seed_value)

        self.engine.reset()
        self.engine.next_animation_step()

        return self._get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Click a cell, then advance the board by one row.

        Args:
            action: Flat cell index

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        row, col = self._action_to_cell(action)

        result = self.engine.process_click(row, col)
        if result is None:
            reward = self.reward_config['invalid_click_penalty']
        else:
            reward = result.cells_cleared * self.reward_config['cell_cleared']

        self.engine.next_animation_step()

        terminated = self.engine.is_game_over()
        if terminated:
            reward += self.reward_config['game_over_penalty']

        observation = self._get_observation()
        info = self._get_info(result)
        info['invalid_action'] = result is None

        if self.render_mode == "human":
            self.render()

        return observation, float(reward), terminated, False, info

    def get_action_mask(self) -> np.ndarray:
        """Boolean mask of clickable (colored) cells."""
        return self._get_observation()['action_mask'].astype(bool)

    def get_valid_actions(self) -> List[int]:
        """Get list of valid action indices."""
        return np.where(self.get_action_mask())[0].tolist()

    def sample_valid_action(self) -> int:
        """Sample a random valid action."""
        valid_actions = self.get_valid_actions()
        if not valid_actions:
            return 0
        return int(self.np_random.choice(valid_actions))

    def render(self) -> Optional[str]:
        """Render the current game state."""
        if self.render_mode == "ansi":
            return str(self.engine)
        elif self.render_mode == "human":
            print("\033[2J\033[H")  # Clear screen
            print(self.engine)
        return None


gym.register(
    id='ClearCell-v0',
    entry_point='clearcell.environment.clear_cell_env:ClearCellEnv',
    max_episode_steps=10000,
)
