"""Sudoku solver using exhaustive row-major backtracking."""

from .core import SudokuBoard, SudokuConfig, PuzzleFormatError, read_puzzle, parse_puzzle, format_grid
from .solvers import solve

__all__ = [
    "SudokuBoard",
    "SudokuConfig",
    "PuzzleFormatError",
    "read_puzzle",
    "parse_puzzle",
    "format_grid",
    "solve",
]
