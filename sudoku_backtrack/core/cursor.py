"""Row-major cursor stepping over a square grid."""

from typing import Tuple


def advance(row: int, col: int, size: int) -> Tuple[int, int]:
    """
    Move to the next cell in row-major order.

    Past the last cell the row index equals ``size``, which the solvers
    treat as "scan finished".
    """
    col += 1
    if col == size:
        col = 0
        row += 1
    return row, col


def retreat(row: int, col: int, size: int) -> Tuple[int, int]:
    """Move to the previous cell in row-major order. Inverse of advance()."""
    col -= 1
    if col == -1:
        col = size - 1
        row -= 1
    return row, col
