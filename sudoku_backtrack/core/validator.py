"""Validation utilities for Sudoku puzzles."""

from __future__ import annotations
from typing import List, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .board import SudokuBoard


def row_has_duplicate(board: SudokuBoard, row: int, col: int) -> bool:
    """
    Check if another cell in the row holds the value at (row, col).

    Args:
        board: The Sudoku board.
        row: Row index.
        col: Column index.

    Returns:
        True if the value is repeated elsewhere in the row.
    """
    value = board.get(row, col)
    if value == board.unknown:
        return False
    for i in range(board.size):
        if i != col and board.get(row, i) == value:
            return True
    return False


def col_has_duplicate(board: SudokuBoard, row: int, col: int) -> bool:
    """Check if another cell in the column holds the value at (row, col)."""
    value = board.get(row, col)
    if value == board.unknown:
        return False
    for i in range(board.size):
        if i != row and board.get(i, col) == value:
            return True
    return False


def subgrid_has_duplicate(board: SudokuBoard, row: int, col: int) -> bool:
    """
    Check if another cell in the box holds the value at (row, col).

    Box cells sharing the row or column of (row, col) are skipped; the row
    and column checks already cover them, and the skip also keeps the cell
    from matching itself.
    """
    value = board.get(row, col)
    if value == board.unknown:
        return False
    box_row, box_col = board.box_origin(row, col)
    for r in range(box_row, box_row + board.box_size):
        for c in range(box_col, box_col + board.box_size):
            if r != row and c != col and board.get(r, c) == value:
                return True
    return False


def is_valid(board: SudokuBoard, row: int, col: int) -> bool:
    """
    Check if the value placed at (row, col) obeys the Sudoku rules.

    This is the only check the backtracking solvers run after each trial
    placement.
    """
    return not (row_has_duplicate(board, row, col)
                or col_has_duplicate(board, row, col)
                or subgrid_has_duplicate(board, row, col))


def find_conflicts(board: SudokuBoard) -> List[Tuple[int, int]]:
    """
    List every filled cell whose value is repeated in its row, column or box.

    Returns:
        Cell positions in row-major order. Empty for a consistent board.
    """
    conflicts = []
    for i in range(board.size):
        for j in range(board.size):
            if not board.is_unknown(i, j) and not is_valid(board, i, j):
                conflicts.append((i, j))
    return conflicts


def validate_solution(puzzle: SudokuBoard, solution: SudokuBoard) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle.
        solution: The proposed solution.

    Returns:
        True if solution is valid and matches puzzle clues.
    """
    if puzzle.config != solution.config:
        return False

    # Check that solution respects original clues
    for i in range(puzzle.size):
        for j in range(puzzle.size):
            if not puzzle.is_unknown(i, j):
                if puzzle.get(i, j) != solution.get(i, j):
                    return False

    # Check that solution is complete and valid
    return solution.is_solved()
