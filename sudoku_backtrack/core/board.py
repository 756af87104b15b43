"""Sudoku board representation with support for variable sizes."""

from __future__ import annotations
import numpy as np
from typing import List, Tuple, Optional

from .config import SudokuConfig, DEFAULT_CONFIG


# Largest value with a one-character form: 1-9 then A-Z
MAX_CHAR_VALUE = 35


def value_to_char(value: int, unknown: int = 0) -> str:
    """
    Render a cell as one character: 0 for unknown, 1-9, then A, B, ...

    Raises:
        ValueError: For values above MAX_CHAR_VALUE, which have no
            single-character form.
    """
    if value == unknown:
        return '0'
    if value <= 9:
        return str(value)
    if value > MAX_CHAR_VALUE:
        raise ValueError(f"Value {value} has no single-character form (max {MAX_CHAR_VALUE})")
    return chr(ord('A') + value - 10)


def char_to_value(c: str, unknown: int = 0) -> int:
    """
    Decode one cell character.

    Raises:
        ValueError: If the character is not '0', '.', a digit or a letter.
    """
    if c == '0' or c == '.':
        return unknown
    if c.isdigit():
        return int(c)
    if c.isascii() and c.isalpha():
        return ord(c.upper()) - ord('A') + 10
    raise ValueError(f"Invalid cell character {c!r}")


class SudokuBoard:
    """
    Represents a Sudoku board of configurable size.

    Cells hold either the configured unknown sentinel or a value in
    1..size. The board does not enforce uniqueness constraints; that is
    the validator's job.
    """

    def __init__(self, config: SudokuConfig = DEFAULT_CONFIG, grid: Optional[np.ndarray] = None):
        """
        Initialize a Sudoku board.

        Args:
            config: Grid dimensions and unknown sentinel.
            grid: Optional initial grid. If None, creates a board of unknowns.
        """
        self.config = config
        self.size = config.size
        self.box_size = config.box_size
        self.unknown = config.unknown

        if grid is not None:
            grid = np.asarray(grid)
            if grid.shape != (self.size, self.size):
                raise ValueError(f"Grid shape must be ({self.size}, {self.size}), got {grid.shape}")
            in_range = (grid >= 1) & (grid <= self.size)
            if not np.all(in_range | (grid == self.unknown)):
                raise ValueError(f"Grid values must be {self.unknown} or 1-{self.size}")
            self.grid = grid.astype(np.int32)
        else:
            self.grid = np.full((self.size, self.size), self.unknown, dtype=np.int32)

    def copy(self) -> SudokuBoard:
        """Create a deep copy of the board."""
        new_board = SudokuBoard(self.config)
        new_board.grid = self.grid.copy()
        return new_board

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if (row, col) lies inside the grid."""
        return 0 <= row < self.size and 0 <= col < self.size

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col)."""
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at position (row, col). Use the unknown sentinel to clear."""
        if value != self.unknown and not 1 <= value <= self.size:
            raise ValueError(f"Value must be {self.unknown} or 1-{self.size}, got {value}")
        self.grid[row, col] = value

    def clear(self, row: int, col: int) -> None:
        """Reset the cell at position (row, col) to unknown."""
        self.grid[row, col] = self.unknown

    def is_unknown(self, row: int, col: int) -> bool:
        """Check if cell holds the unknown sentinel."""
        return self.grid[row, col] == self.unknown

    def get_row(self, row: int) -> np.ndarray:
        """Get all values in a row."""
        return self.grid[row, :]

    def get_col(self, col: int) -> np.ndarray:
        """Get all values in a column."""
        return self.grid[:, col]

    def box_origin(self, row: int, col: int) -> Tuple[int, int]:
        """Top-left cell of the box containing (row, col)."""
        return (row // self.box_size) * self.box_size, (col // self.box_size) * self.box_size

    def get_box(self, row: int, col: int) -> np.ndarray:
        """Get all values in the box containing (row, col)."""
        box_row, box_col = self.box_origin(row, col)
        return self.grid[box_row:box_row + self.box_size,
                        box_col:box_col + self.box_size].flatten()

    def get_box_index(self, row: int, col: int) -> int:
        """Get the box index (0 to size-1) for a cell."""
        return (row // self.box_size) * self.box_size + (col // self.box_size)

    def get_unknown_cells(self) -> List[Tuple[int, int]]:
        """Get list of all unknown cell positions in row-major order."""
        rows, cols = np.nonzero(self.grid == self.unknown)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def count_unknown(self) -> int:
        """Count the number of unknown cells."""
        return int(np.sum(self.grid == self.unknown))

    def count_filled(self) -> int:
        """Count the number of filled cells."""
        return int(np.sum(self.grid != self.unknown))

    def is_complete(self) -> bool:
        """Check if all cells are filled."""
        return self.count_unknown() == 0

    def _has_duplicates(self, values: np.ndarray) -> bool:
        filled = values[values != self.unknown]
        return len(filled) != len(set(filled.tolist()))

    def is_valid(self) -> bool:
        """
        Check if the current board state is valid.
        Does not check if solution is complete, only if no conflicts exist.
        """
        for i in range(self.size):
            if self._has_duplicates(self.get_row(i)) or self._has_duplicates(self.get_col(i)):
                return False

        for box_row in range(0, self.size, self.box_size):
            for box_col in range(0, self.size, self.box_size):
                if self._has_duplicates(self.get_box(box_row, box_col)):
                    return False

        return True

    def is_solved(self) -> bool:
        """Check if the puzzle is completely and correctly solved."""
        return self.is_complete() and self.is_valid()

    def to_string(self) -> str:
        """
        Convert board to a compact string representation.
        Uses 0 for unknown cells, 1-9 for standard, A-G for 16x16.
        """
        return ''.join(value_to_char(int(val), self.unknown) for val in self.grid.flat)

    @classmethod
    def from_string(cls, s: str, config: SudokuConfig = DEFAULT_CONFIG) -> SudokuBoard:
        """
        Create a board from a string representation.

        Args:
            s: String of length size*size with values.
               0 or . for unknown, 1-9 for values, A-G for 10-16.
            config: Grid configuration.
        """
        size = config.size
        if len(s) != size * size:
            raise ValueError(f"String length must be {size*size}, got {len(s)}")

        values = [char_to_value(c, config.unknown) for c in s]
        grid = np.array(values, dtype=np.int32).reshape(size, size)
        return cls(config, grid)

    @classmethod
    def from_2d_list(cls, data: List[List[int]], unknown: int = 0) -> SudokuBoard:
        """Create a board from a 2D list, inferring the size from its length."""
        arr = np.array(data, dtype=np.int32)
        return cls(SudokuConfig(size=arr.shape[0], unknown=unknown), arr)

    def to_list(self) -> List[List[int]]:
        """Convert the grid to nested Python lists."""
        return self.grid.tolist()

    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = '+' + (('-' * (self.box_size * 2 + 1)) + '+') * self.box_size

        for i in range(self.size):
            if i % self.box_size == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(self.size):
                val = int(self.grid[i, j])
                if val == self.unknown:
                    row_str += ' .'
                else:
                    row_str += f' {value_to_char(val, self.unknown)}'

                if (j + 1) % self.box_size == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"SudokuBoard(size={self.size}, filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return False
        return self.config == other.config and np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(self.to_string())
