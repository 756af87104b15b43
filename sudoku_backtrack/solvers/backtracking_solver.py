"""Recursive backtracking solver scanning the grid in row-major order."""

from __future__ import annotations
import sys

from .base_solver import BaseSolver
from ..core.board import SudokuBoard
from ..core.cursor import advance, retreat
from ..core.validator import is_valid


class BacktrackingSolver(BaseSolver):
    """
    Depth-First Search solver using recursive backtracking.

    Each recursive call handles one cursor position. Given cells are
    skipped; unknown cells try the values 1..size in ascending order and
    keep the first one that leads to a full solution. No candidate pruning
    or propagation is done, so the result is the first solution in
    row-major, ascending-candidate order.
    """

    name = "Backtracking"

    def _solve(self, board: SudokuBoard) -> bool:
        """Solve using DFS with backtracking."""
        self.stats.iterations = 0
        self.stats.backtracks = 0
        self.stats.nodes_explored = 0

        # One frame per cell plus the terminal call, on top of the caller's stack
        old_limit = sys.getrecursionlimit()
        sys.setrecursionlimit(old_limit + board.size * board.size + 1)
        try:
            return self._attempt(board, 0, 0)
        finally:
            sys.setrecursionlimit(old_limit)

    def _attempt(self, board: SudokuBoard, row: int, col: int) -> bool:
        """
        Recursive backtracking algorithm.

        Returns True if solution found, False otherwise.
        """
        self.stats.iterations += 1
        self._check_deadline()

        if not board.in_bounds(row, col):
            # Every cell visited: confirm the last one before reporting success
            last = board.size - 1
            return is_valid(board, last, last)

        if not board.is_unknown(row, col):
            row, col = advance(row, col, board.size)
            return self._attempt(board, row, col)

        for value in board.config.values:
            board.set(row, col, value)
            self.stats.nodes_explored += 1
            if is_valid(board, row, col):
                row, col = advance(row, col, board.size)
                if self._attempt(board, row, col):
                    return True
                row, col = retreat(row, col, board.size)

        board.clear(row, col)
        self.stats.backtracks += 1
        return False


def solve(board: SudokuBoard) -> bool:
    """
    Fill the board in place.

    Returns:
        True if a solution was found. On False the board is unchanged.
    """
    solved, _ = BacktrackingSolver().solve(board)
    return solved
