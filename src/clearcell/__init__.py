"""Clear Cell puzzle game engine."""
from .game import (
    BoardCell,
    Board,
    ClearCellEngine,
    RandomCellSource,
    SequenceCellSource,
    InvalidRowIndexError,
    InvalidColumnIndexError,
)

__version__ = "1.0.0"

__all__ = [
    "BoardCell",
    "Board",
    "ClearCellEngine",
    "RandomCellSource",
    "SequenceCellSource",
    "InvalidRowIndexError",
    "InvalidColumnIndexError",
]
