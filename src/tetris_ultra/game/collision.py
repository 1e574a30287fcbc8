from __future__ import annotations

from .grid import GameGrid
from .pieces import Piece, Shape


def collides(grid: GameGrid, shape: Shape, x: int, y: int) -> bool:
    """Return True when ``shape`` placed at (x, y) is not a legal placement.

    Cells above the board (row < 0) are only checked against the side walls,
    so freshly spawned pieces may stick out of the top.
    """
    h, w = shape.shape
    for dy in range(h):
        for dx in range(w):
            if not shape[dy, dx]:
                continue
            bx = x + dx
            by = y + dy
            if bx < 0 or bx >= grid.width or by >= grid.height:
                return True
            if by >= 0 and grid.is_occupied(bx, by):
                return True
    return False


def piece_collides(grid: GameGrid, piece: Piece, dx: int = 0, dy: int = 0) -> bool:
    return collides(grid, piece.shape, piece.x + dx, piece.y + dy)
