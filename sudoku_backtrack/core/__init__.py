"""Core module for Sudoku board representation and validation."""

from .config import SudokuConfig, DEFAULT_CONFIG
from .board import SudokuBoard
from .cursor import advance, retreat
from .validator import (
    row_has_duplicate,
    col_has_duplicate,
    subgrid_has_duplicate,
    is_valid,
    find_conflicts,
    validate_solution,
)
from .io import PuzzleFormatError, parse_puzzle, read_puzzle, format_grid, write_puzzle

__all__ = [
    "SudokuConfig",
    "DEFAULT_CONFIG",
    "SudokuBoard",
    "advance",
    "retreat",
    "row_has_duplicate",
    "col_has_duplicate",
    "subgrid_has_duplicate",
    "is_valid",
    "find_conflicts",
    "validate_solution",
    "PuzzleFormatError",
    "parse_puzzle",
    "read_puzzle",
    "format_grid",
    "write_puzzle",
]
