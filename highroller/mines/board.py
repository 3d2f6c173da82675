"""
Immutable board for the tile-reveal game.

Hazards are placed once, by sampling positions uniformly without replacement,
and never move. Revealing a cell returns a new board; a revealed cell never
turns hidden again.
"""

from dataclasses import dataclass, replace
from typing import Iterable, List, Tuple

from highroller.common.rng import RandomSource


@dataclass(frozen=True)
class Cell:
    is_hazard: bool
    revealed: bool = False


@dataclass(frozen=True)
class Board:
    """
    A ``rows x cols`` grid stored row-major.

    Attributes:
        rows: Number of rows
        cols: Number of columns
        cells: Row-major tuple of cells
    """

    rows: int
    cols: int
    cells: Tuple[Cell, ...]

    def __post_init__(self):
        if len(self.cells) != self.rows * self.cols:
            raise ValueError("Cell count does not match board dimensions")

    @classmethod
    def from_hazards(cls, rows: int, cols: int, hazards: Iterable[int]) -> "Board":
        """Build a board with hazards at the given row-major positions."""
        positions = set(hazards)
        size = rows * cols
        if any(not 0 <= p < size for p in positions):
            raise ValueError("Hazard position outside the board")
        return cls(rows, cols, tuple(Cell(i in positions) for i in range(size)))

    @classmethod
    def place(cls, rows: int, cols: int, hazard_count: int, rng: RandomSource) -> "Board":
        """Build a board with ``hazard_count`` uniformly placed hazards."""
        return cls.from_hazards(rows, cols, rng.sample(rows * cols, hazard_count))

    @property
    def size(self) -> int:
        return self.rows * self.cols

    @property
    def hazard_count(self) -> int:
        return sum(1 for cell in self.cells if cell.is_hazard)

    @property
    def safe_count(self) -> int:
        return self.size - self.hazard_count

    @property
    def revealed_safe(self) -> int:
        return sum(1 for cell in self.cells if cell.revealed and not cell.is_hazard)

    def in_range(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, row: int, col: int) -> Cell:
        if not self.in_range(row, col):
            raise IndexError(f"Cell ({row}, {col}) is outside the board")
        return self.cells[row * self.cols + col]

    def reveal(self, row: int, col: int) -> "Board":
        index = row * self.cols + col
        cells = list(self.cells)
        cells[index] = replace(cells[index], revealed=True)
        return replace(self, cells=tuple(cells))

    def reveal_hazards(self) -> "Board":
        """Expose every hazard, for display after a loss."""
        cells = tuple(
            replace(cell, revealed=True) if cell.is_hazard else cell for cell in self.cells
        )
        return replace(self, cells=cells)

    def grid(self) -> List[List[Cell]]:
        return [list(self.cells[r * self.cols:(r + 1) * self.cols]) for r in range(self.rows)]
