from __future__ import annotations

import numpy as np


EMPTY = 0


class GameGrid:
    """Fixed-size playfield of cells.

    The grid uses 0 for empty cells and the tetromino type value of the piece
    that filled a cell otherwise. Row 0 is the top of the board.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        return self.grid[y, x] != EMPTY

    def set_cell(self, x: int, y: int, kind: int) -> None:
        self.grid[y, x] = kind

    def clear_cell(self, x: int, y: int) -> None:
        self.grid[y, x] = EMPTY

    def clear_rows(self, start: int, stop: int) -> None:
        """Empty rows ``start`` up to (not including) ``stop``."""
        self.grid[max(0, start):max(0, stop), :] = EMPTY

    def filter_completed_rows(self) -> int:
        """Remove full rows, refill from the top and return how many went."""
        full = np.all(self.grid != EMPTY, axis=1)
        num = int(np.count_nonzero(full))
        if num == 0:
            return 0
        kept = self.grid[~full]
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, kept))
        return num

    def filled_cells(self) -> int:
        return int(np.count_nonzero(self.grid))

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()

    def copy(self) -> "GameGrid":
        new_grid = GameGrid(self.width, self.height)
        new_grid.grid = self.grid.copy()
        return new_grid
