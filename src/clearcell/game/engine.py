"""
Clear Cell Game Engine.

This module implements the complete game logic including:
- Row insertion on every animation step
- Clearing a clicked cell and its same-colored neighbors
- Collapsing rows left empty by a click
- Scoring (one point per cleared cell)
- Game over detection
"""
from dataclasses import dataclass
from typing import List, Tuple, Optional, Dict, Any, Protocol
from enum import Enum
import numpy as np

from .board import Board
from .cells import BoardCell, RandomCellSource


class CellSource(Protocol):
    """Anything that can hand out random non-empty cells."""

    def next_non_empty_cell(self) -> BoardCell:
        ...


class InvalidClickError(ValueError):
    """A click addressed a position outside the board."""


class InvalidRowIndexError(InvalidClickError):
    def __init__(self, row: int):
        super().__init__("Invalid row index")
        self.row = row


class InvalidColumnIndexError(InvalidClickError):
    def __init__(self, col: int):
        super().__init__("Invalid column index")
        self.col = col


class GameStatus(Enum):
    """Game status enumeration."""
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass
class ClickResult:
    """Result of a click."""
    position: Tuple[int, int]
    clicked: BoardCell
    cells_cleared: int = 0
    rows_collapsed: int = 0
    score_gained: int = 0


@dataclass
class GameState:
    """Snapshot of an engine, used for restoring and for run logs."""
    board: np.ndarray
    score: int
    steps: int
    clicks: int
    status: GameStatus
    total_cells_cleared: int = 0
    total_rows_collapsed: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "board": self.board.tolist(),
            "score": self.score,
            "steps": self.steps,
            "clicks": self.clicks,
            "status": self.status.value,
            "total_cells_cleared": self.total_cells_cleared,
            "total_rows_collapsed": self.total_rows_collapsed,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        """Create from dictionary."""
        return cls(
            board=np.array(data["board"], dtype=np.int8),
            score=data["score"],
            steps=data["steps"],
            clicks=data["clicks"],
            status=GameStatus(data["status"]),
            total_cells_cleared=data.get("total_cells_cleared", 0),
            total_rows_collapsed=data.get("total_rows_collapsed", 0),
        )


class ClearCellEngine:
    """
    Clear Cell game engine.

    Owns the board and the score. A host drives it by calling
    ``next_animation_step`` from a timer and ``process_click`` from
    player input; calls must not overlap.
    """

    # Offsets of the clicked cell and its eight neighbors, visited in this order
    V_DISP = (0, -1, -1, -1, 0, 0, 1, 1, 1)
    H_DISP = (0, -1, 0, 1, -1, 1, -1, 0, 1)

    def __init__(self, rows: int, cols: int, cell_source: CellSource):
        """
        Initialize a new game with an empty board.

        Args:
            rows: Number of board rows
            cols: Number of board columns
            cell_source: Supplies the cells of every inserted row
        """
        self.board = Board(rows, cols)
        self.cell_source = cell_source

        self.score = 0
        self.steps = 0
        self.clicks = 0

        # Statistics
        self.total_cells_cleared = 0
        self.total_rows_collapsed = 0

    @property
    def num_rows(self) -> int:
        return self.board.rows

    @property
    def num_cols(self) -> int:
        return self.board.cols

    @property
    def status(self) -> GameStatus:
        return GameStatus.GAME_OVER if self.is_game_over() else GameStatus.PLAYING

    def reset(self) -> GameState:
        """
        Reset the game to an empty board and zero score.

        The cell source is kept as is; reseed it first for a repeatable game.
        """
        self.board.reset()
        self.score = 0
        self.steps = 0
        self.clicks = 0
        self.total_cells_cleared = 0
        self.total_rows_collapsed = 0
        return self.get_state()

    def is_game_over(self) -> bool:
        """The game is over once any cell of the bottom row is colored."""
        return not self.board.is_row_empty(self.board.rows - 1)

    def get_score(self) -> int:
        """Return the player's score."""
        return self.score

    def can_move(self, row: int, col: int) -> bool:
        """True if (row, col) is on the board and not empty."""
        return self.board.can_move(row, col)

    def last_colored_row(self) -> int:
        """Bottommost row with a colored cell, or 0 when the board is empty."""
        return self.board.last_colored_row()

    def get_board_cell(self, row: int, col: int) -> BoardCell:
        return self.board.get_cell(row, col)

    def set_board_cell(self, row: int, col: int, cell: BoardCell) -> None:
        self.board.set_cell(row, col, cell)

    def get_board(self) -> List[List[BoardCell]]:
        """Copy of the board as nested lists."""
        return self.board.to_cells()

    def next_animation_step(self) -> None:
        """
        Advance the board by one animation tick.

        Does nothing once the game is over. Otherwise a new row of random
        cells, drawn left to right, is inserted at the top and every
        existing row moves down by one; the bottom row is discarded.
        """
        if self.is_game_over():
            return

        new_row = [self.cell_source.next_non_empty_cell() for _ in range(self.board.cols)]
        self.board.push_row(new_row)
        self.steps += 1

    def process_click(self, row: int, col: int) -> Optional[ClickResult]:
        """
        Handle a click on (row, col).

        A colored cell is cleared together with every same-colored cell
        among its eight neighbors, one point per cleared cell. Rows left
        empty above the last colored row are then collapsed.

        Args:
            row: Clicked row
            col: Clicked column

        Returns:
            ClickResult, or None when the clicked cell was empty

        Raises:
            InvalidRowIndexError: row is off the board (checked first)
            InvalidColumnIndexError: col is off the board
        """
        if row < 0 or row >= self.board.rows:
            raise InvalidRowIndexError(row)
        if col < 0 or col >= self.board.cols:
            raise InvalidColumnIndexError(col)

        clicked = self.board.get_cell(row, col)
        if clicked == BoardCell.EMPTY:
            return None

        self.clicks += 1
        cleared = self._clear_matching(row, col, clicked)
        collapsed = self._collapse_empty_rows()

        self.score += cleared
        self.total_cells_cleared += cleared
        self.total_rows_collapsed += collapsed

        return ClickResult(
            position=(row, col),
            clicked=clicked,
            cells_cleared=cleared,
            rows_collapsed=collapsed,
            score_gained=cleared,
        )

    def _clear_matching(self, row: int, col: int, kind: BoardCell) -> int:
        """Empty every neighborhood cell of the given kind. The clicked cell is visited first."""
        cleared = 0
        for dv, dh in zip(self.V_DISP, self.H_DISP):
            r, c = row + dv, col + dh
            if self.board.can_move(r, c) and self.board.grid[r, c] == kind:
                self.board.grid[r, c] = BoardCell.EMPTY
                cleared += 1
        return cleared

    def _collapse_empty_rows(self) -> int:
        """
        Close gaps left by empty rows above the last colored row.

        After a collapse the same row index is checked again, since the
        row below has just moved into it.
        """
        collapsed = 0
        last_row = self.board.last_colored_row()
        row = 0
        while row < last_row:
            if self.board.is_row_empty(row):
                self.board.collapse_row(row, last_row)
                last_row -= 1
                collapsed += 1
            else:
                row += 1
        return collapsed

    def get_state(self) -> GameState:
        """Get the current game state."""
        return GameState(
            board=self.board.get_state(),
            score=self.score,
            steps=self.steps,
            clicks=self.clicks,
            status=self.status,
            total_cells_cleared=self.total_cells_cleared,
            total_rows_collapsed=self.total_rows_collapsed,
        )

    def set_state(self, state: GameState) -> None:
        """Restore game from a saved state."""
        self.board.set_state(state.board)
        self.score = state.score
        self.steps = state.steps
        self.clicks = state.clicks
        self.total_cells_cleared = state.total_cells_cleared
        self.total_rows_collapsed = state.total_rows_collapsed

    def get_statistics(self) -> Dict[str, Any]:
        """Get game statistics."""
        return {
            'score': self.score,
            'steps': self.steps,
            'clicks': self.clicks,
            'total_cells_cleared': self.total_cells_cleared,
            'total_rows_collapsed': self.total_rows_collapsed,
            'filled_cells': self.board.total_cells,
            'board_fill_ratio': self.board.total_cells / (self.board.rows * self.board.cols),
        }

    def __str__(self) -> str:
        """String representation of the game state."""
        lines = [str(self.board)]
        lines.append(f"\nScore: {self.score} | Steps: {self.steps} | "
                     f"Clicks: {self.clicks} | Status: {self.status.value}")
        return "\n".join(lines)


def play_random_game(
    rows: int = 10,
    cols: int = 8,
    seed: Optional[int] = None,
    clicks_per_step: int = 1,
    max_steps: int = 1000,
    verbose: bool = False,
) -> Dict[str, Any]:
    """
    Play a complete game with random clicks for testing.

    Each round inserts a row, then clicks ``clicks_per_step`` random
    colored cells, until the game is over or ``max_steps`` rows were
    inserted.

    Args:
        rows: Board rows
        cols: Board columns
        seed: Random seed for both the cells and the clicks
        clicks_per_step: Clicks made between two animation steps
        max_steps: Upper bound on animation steps
        verbose: Whether to print game progress

    Returns:
        Dictionary with game statistics
    """
    rng = np.random.default_rng(seed)
    engine = ClearCellEngine(rows, cols, RandomCellSource(rng=rng))

    if verbose:
        print("Starting random game...")

    while not engine.is_game_over() and engine.steps < max_steps:
        engine.next_animation_step()
        for _ in range(clicks_per_step):
            if engine.is_game_over():
                break
            filled = np.argwhere(engine.get_state().board != BoardCell.EMPTY)
            if len(filled) == 0:
                break
            row, col = filled[rng.integers(len(filled))]
            result = engine.process_click(int(row), int(col))

            if verbose and result is not None and result.rows_collapsed > 0:
                print(f"Collapsed {result.rows_collapsed} rows, +{result.score_gained} points")

    stats = engine.get_statistics()
    stats['game_over'] = engine.is_game_over()

    if verbose:
        print("\n" + "=" * 40)
        print("GAME OVER!" if stats['game_over'] else "STEP LIMIT REACHED")
        print(engine)
        print(f"\nFinal Statistics: {stats}")

    return stats
