"""
Clear Cell Board Module.

This module implements the game board with:
- rows x cols grid of cell kinds
- Bounds and emptiness checks
- Row queries (empty rows, last colored row)
- Row shifting for insertion and collapse
"""
from typing import List, Sequence
import numpy as np

from .cells import BoardCell


class Board:
    """
    Represents a rectangular Clear Cell board.

    The board is a 2D int8 numpy array of BoardCell values, where
    row 0 is the top and row ``rows - 1`` is the bottom.
    """

    def __init__(self, rows: int, cols: int):
        """Initialize an empty board."""
        self.rows = rows
        self.cols = cols
        self.grid = np.full((rows, cols), BoardCell.EMPTY, dtype=np.int8)

    @classmethod
    def from_strings(cls, lines: Sequence[str]) -> "Board":
        """
        Build a board from rows of cell symbols.

        Example:
            Board.from_strings(["RR.", "..B"])
        """
        if not lines:
            raise ValueError("Board needs at least one row")
        cols = len(lines[0])
        board = cls(len(lines), cols)
        for row, line in enumerate(lines):
            if len(line) != cols:
                raise ValueError(f"Row {row} has {len(line)} cells, expected {cols}")
            for col, symbol in enumerate(line):
                board.grid[row, col] = BoardCell.from_symbol(symbol)
        return board

    def reset(self) -> None:
        """Clear the board."""
        self.grid.fill(BoardCell.EMPTY)

    @property
    def total_cells(self) -> int:
        """Return number of non-empty cells on the board."""
        return int(np.count_nonzero(self.grid))

    def get_cell(self, row: int, col: int) -> BoardCell:
        """Get the cell at a position."""
        return BoardCell(int(self.grid[row, col]))

    def set_cell(self, row: int, col: int, cell: BoardCell) -> None:
        """Set the cell at a position. Raises ValueError for an unknown cell value."""
        self.grid[row, col] = BoardCell(int(cell))

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if coordinates are within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_empty(self, row: int, col: int) -> bool:
        """Check if a cell is empty."""
        return self.grid[row, col] == BoardCell.EMPTY

    def can_move(self, row: int, col: int) -> bool:
        """True if the position is on the board and holds a colored cell."""
        if not self.in_bounds(row, col):
            return False
        return not self.is_empty(row, col)

    def is_row_empty(self, row: int) -> bool:
        return not np.any(self.grid[row, :] != BoardCell.EMPTY)

    def last_colored_row(self) -> int:
        """
        Index of the bottommost row holding at least one colored cell.

        Scans from the bottom row upward. Returns 0 for an empty board.
        """
        for row in range(self.rows - 1, -1, -1):
            if not self.is_row_empty(row):
                return row
        return 0

    def push_row(self, new_row: Sequence[BoardCell]) -> None:
        """
        Insert a row at the top, shifting every row down by one.

        The bottom row falls off the board.
        """
        previous = self.grid
        self.grid = np.empty_like(previous)
        self.grid[0, :] = np.asarray(new_row, dtype=np.int8)
        self.grid[1:, :] = previous[:-1, :]

    def collapse_row(self, row: int, last_row: int) -> None:
        """
        Remove ``row`` by shifting rows ``row + 1 .. last_row`` up by one.

        Row ``last_row`` is left empty. Rows below ``last_row`` are untouched.
        """
        self.grid[row:last_row, :] = self.grid[row + 1:last_row + 1, :].copy()
        self.grid[last_row, :] = BoardCell.EMPTY

    def to_cells(self) -> List[List[BoardCell]]:
        """Board contents as nested lists of BoardCell."""
        return [[BoardCell(int(value)) for value in row] for row in self.grid]

    def get_state(self) -> np.ndarray:
        """Get the board state as a numpy array."""
        return self.grid.copy()

    def set_state(self, state: np.ndarray) -> None:
        """Set the board state from a numpy array."""
        if state.shape != (self.rows, self.cols):
            raise ValueError(
                f"State shape {state.shape} does not match board ({self.rows}, {self.cols})"
            )
        if state.size and (state.min() < 0 or state.max() >= len(BoardCell)):
            raise ValueError(
                f"State holds values outside 0..{len(BoardCell) - 1}"
            )
        self.grid = state.astype(np.int8, copy=True)

    def __str__(self) -> str:
        """Create a string visualization of the board."""
        return "\n".join(
            "".join(BoardCell(int(value)).symbol for value in row) for row in self.grid
        )

    def __repr__(self) -> str:
        return f"Board(rows={self.rows}, cols={self.cols}, cells={self.total_cells})"
