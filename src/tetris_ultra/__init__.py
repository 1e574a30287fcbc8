"""Tetris Ultra: falling-block puzzle engine with combos and power-ups."""

__version__ = "0.1.0"
