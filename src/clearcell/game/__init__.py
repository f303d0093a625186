"""Game engine module for Clear Cell."""
from .cells import BoardCell, RandomCellSource, SequenceCellSource, NON_EMPTY_CELLS
from .board import Board
from .engine import (
    ClearCellEngine,
    ClickResult,
    GameState,
    GameStatus,
    InvalidClickError,
    InvalidRowIndexError,
    InvalidColumnIndexError,
)

__all__ = [
    "BoardCell",
    "RandomCellSource",
    "SequenceCellSource",
    "NON_EMPTY_CELLS",
    "Board",
    "ClearCellEngine",
    "ClickResult",
    "GameState",
    "GameStatus",
    "InvalidClickError",
    "InvalidRowIndexError",
    "InvalidColumnIndexError",
]
