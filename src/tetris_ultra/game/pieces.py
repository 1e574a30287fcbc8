from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray


def _frozen(rows: List[List[int]]) -> Shape:
    shape = np.array(rows, dtype=np.int8)
    shape.setflags(write=False)
    return shape


BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _frozen([[1, 1, 1, 1]]),
    TetrominoType.O: _frozen([[1, 1], [1, 1]]),
    TetrominoType.T: _frozen([[0, 1, 0], [1, 1, 1]]),
    TetrominoType.S: _frozen([[0, 1, 1], [1, 1, 0]]),
    TetrominoType.Z: _frozen([[1, 1, 0], [0, 1, 1]]),
    TetrominoType.J: _frozen([[1, 0, 0], [1, 1, 1]]),
    TetrominoType.L: _frozen([[0, 0, 1], [1, 1, 1]]),
}

COLORS: Dict[TetrominoType, str] = {
    TetrominoType.I: "#00f0f0",
    TetrominoType.O: "#f0f000",
    TetrominoType.T: "#a000f0",
    TetrominoType.S: "#00f000",
    TetrominoType.Z: "#f00000",
    TetrominoType.J: "#0000f0",
    TetrominoType.L: "#f0a000",
}


def color_rgb(kind: TetrominoType) -> Tuple[int, int, int]:
    """Display color of ``kind`` as an (r, g, b) tuple."""
    hex_color = COLORS[kind].lstrip("#")
    return int(hex_color[0:2], 16), int(hex_color[2:4], 16), int(hex_color[4:6], 16)


def rotate_cw(shape: Shape) -> Shape:
    """Quarter turn clockwise: transpose, then reverse every row."""
    rotated = np.ascontiguousarray(np.rot90(shape, 1, axes=(1, 0)))
    rotated.setflags(write=False)
    return rotated


@dataclass(frozen=True, eq=False)
class Piece:
    kind: TetrominoType
    shape: Shape
    x: int
    y: int

    @classmethod
    def spawn(cls, kind: TetrominoType, board_width: int, spawn_y: int = 0) -> "Piece":
        shape = BASE_SHAPES[kind]
        x = board_width // 2 - shape.shape[1] // 2
        return cls(kind=kind, shape=shape, x=x, y=spawn_y)

    @property
    def color(self) -> str:
        return COLORS[self.kind]

    def moved(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self) -> "Piece":
        return replace(self, shape=rotate_cw(self.shape))

    def cells(self) -> List[Tuple[int, int]]:
        """Board coordinates (x, y) of every occupied cell."""
        ys, xs = np.nonzero(self.shape)
        return [(self.x + int(dx), self.y + int(dy)) for dy, dx in zip(ys, xs)]
