"""Backtracking solver driven by an explicit stack instead of recursion."""

from __future__ import annotations
from typing import List

from .base_solver import BaseSolver
from ..core.board import SudokuBoard
from ..core.cursor import advance
from ..core.validator import is_valid


class IterativeBacktrackingSolver(BaseSolver):
    """
    Same search as BacktrackingSolver, with the call stack made explicit.

    The stack holds one [row, col, value] frame per unknown cell currently
    holding a trial value. Given cells never get a frame, so a failure
    unwinds straight to the most recent trial, as the recursive version
    does. Stack depth is not limited by Python's recursion limit.
    """

    name = "Iterative Backtracking"

    def _solve(self, board: SudokuBoard) -> bool:
        self.stats.iterations = 0
        self.stats.backtracks = 0
        self.stats.nodes_explored = 0

        size = board.size
        last = size - 1
        frames: List[List[int]] = []
        row, col = 0, 0
        descending = True

        while True:
            self._check_deadline()
            if descending:
                self.stats.iterations += 1
                if not board.in_bounds(row, col):
                    if is_valid(board, last, last):
                        return True
                    descending = False
                    continue
                if not board.is_unknown(row, col):
                    row, col = advance(row, col, size)
                    continue
                frames.append([row, col, 0])

            if not frames:
                return False

            # Resume the newest trial cell at its next candidate
            frame = frames[-1]
            r, c, value = frame
            placed = False
            while value < size:
                value += 1
                board.set(r, c, value)
                self.stats.nodes_explored += 1
                if is_valid(board, r, c):
                    placed = True
                    break

            if placed:
                frame[2] = value
                row, col = advance(r, c, size)
                descending = True
            else:
                board.clear(r, c)
                self.stats.backtracks += 1
                frames.pop()
                descending = False
