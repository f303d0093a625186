"""
Clear Cell board cell vocabulary.

This module defines the cell kinds that can appear on the board and the
sources that produce new cells when a row is inserted at the top.
"""
from enum import IntEnum
from typing import Dict, List, Optional, Sequence
import numpy as np


class BoardCell(IntEnum):
    """
    A single board cell.

    EMPTY marks the absence of a piece; every other member is a color.
    Values are small integers so a board fits in an int8 numpy array.
    """
    EMPTY = 0
    RED = 1
    GREEN = 2
    BLUE = 3
    YELLOW = 4

    @property
    def symbol(self) -> str:
        """One-character display symbol."""
        return _SYMBOLS[self]

    @property
    def is_empty(self) -> bool:
        return self is BoardCell.EMPTY

    @classmethod
    def from_symbol(cls, symbol: str) -> "BoardCell":
        """Look up a cell by its display symbol."""
        try:
            return _BY_SYMBOL[symbol]
        except KeyError:
            raise ValueError(
                f"Unknown cell symbol: {symbol!r}. Valid symbols: {list(_BY_SYMBOL.keys())}"
            ) from None

    @classmethod
    def non_empty(cls) -> List["BoardCell"]:
        """All color cells, in definition order."""
        return [cell for cell in cls if cell is not cls.EMPTY]


_SYMBOLS: Dict[BoardCell, str] = {
    BoardCell.EMPTY: ".",
    BoardCell.RED: "R",
    BoardCell.GREEN: "G",
    BoardCell.BLUE: "B",
    BoardCell.YELLOW: "Y",
}
_BY_SYMBOL: Dict[str, BoardCell] = {symbol: cell for cell, symbol in _SYMBOLS.items()}

NON_EMPTY_CELLS = BoardCell.non_empty()
NUM_CELL_KINDS = len(BoardCell)


class RandomCellSource:
    """
    Produces uniformly random non-empty cells.

    The generator is supplied (or seeded) by the caller so games are
    reproducible.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """
        Initialize the source.

        Args:
            seed: Seed for a fresh generator (ignored when rng is given)
            rng: Existing generator to draw from
        """
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def reseed(self, seed: Optional[int]) -> None:
        """Replace the generator with a freshly seeded one."""
        self.rng = np.random.default_rng(seed)

    def next_non_empty_cell(self) -> BoardCell:
        """Draw the next random color."""
        return NON_EMPTY_CELLS[int(self.rng.integers(len(NON_EMPTY_CELLS)))]


class SequenceCellSource:
    """Replays a fixed sequence of cells, cycling when it runs out."""

    def __init__(self, cells: Sequence[BoardCell]):
        if not cells:
            raise ValueError("SequenceCellSource needs at least one cell")
        if any(cell == BoardCell.EMPTY for cell in cells):
            raise ValueError("SequenceCellSource cannot produce EMPTY cells")
        self.cells = list(cells)
        self._index = 0

    def next_non_empty_cell(self) -> BoardCell:
        cell = self.cells[self._index % len(self.cells)]
        self._index += 1
        return cell
