"""Gymnasium environment for Clear Cell."""
from .clear_cell_env import ClearCellEnv

__all__ = [
    "ClearCellEnv",
]
