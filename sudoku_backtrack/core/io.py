"""Reading and printing puzzles in the one-row-per-line text format.

Each line holds one grid row. Cells are single characters ('0' or '.' for
unknown, '1'-'9', then 'A', 'B', ... for larger grids) separated by a
fixed number of delimiter characters, one space by default. Single
characters only reach 35, so grids up to 25x25 can be written this way::

    5 3 0 0 7 0 0 0 0
    6 0 0 1 9 5 0 0 0
    ...
"""

from __future__ import annotations
import logging
import os
from typing import Optional

import numpy as np

from .board import SudokuBoard, MAX_CHAR_VALUE, char_to_value, value_to_char
from .config import SudokuConfig, DEFAULT_CONFIG

log = logging.getLogger(__name__)


class PuzzleFormatError(ValueError):
    """Raised when puzzle text cannot be turned into a grid."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


def _check_text_size(size: int) -> None:
    if size > MAX_CHAR_VALUE:
        raise ValueError(
            f"Grid size {size} cannot use the text format (values above {MAX_CHAR_VALUE} "
            f"have no single-character form)"
        )


def parse_puzzle(
    text: str,
    config: SudokuConfig = DEFAULT_CONFIG,
    delimiter_width: int = 1
) -> SudokuBoard:
    """
    Parse puzzle text into a board.

    Args:
        text: Puzzle text, one row per line.
        config: Grid configuration.
        delimiter_width: Number of characters between two cells.

    Returns:
        The populated board.

    Raises:
        PuzzleFormatError: On a wrong line count, short lines, unknown
            characters or values outside 1..size.
    """
    if delimiter_width < 0:
        raise ValueError(f"Delimiter width must be >= 0, got {delimiter_width}")
    _check_text_size(config.size)

    size = config.size
    step = delimiter_width + 1
    min_length = step * (size - 1) + 1

    lines = text.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()
    if len(lines) != size:
        raise PuzzleFormatError(f"expected {size} rows, got {len(lines)}")

    grid = np.full((size, size), config.unknown, dtype=np.int32)
    for r, line in enumerate(lines):
        if len(line) < min_length:
            raise PuzzleFormatError(
                f"expected at least {min_length} characters, got {len(line)}", line=r + 1
            )
        for c in range(size):
            ch = line[step * c]
            try:
                value = char_to_value(ch, config.unknown)
            except ValueError as e:
                raise PuzzleFormatError(str(e), line=r + 1) from e
            if value != config.unknown and not 1 <= value <= size:
                raise PuzzleFormatError(
                    f"value {ch!r} out of range 1-{size} in column {c + 1}", line=r + 1
                )
            grid[r, c] = value

    return SudokuBoard(config, grid)


def read_puzzle(
    path: str,
    config: SudokuConfig = DEFAULT_CONFIG,
    delimiter_width: int = 1
) -> SudokuBoard:
    """
    Read a puzzle file.

    Raises:
        PuzzleFormatError: If the file cannot be opened or is malformed.
    """
    try:
        with open(path, "r") as f:
            text = f.read()
    except OSError as e:
        raise PuzzleFormatError(f"cannot open {path}: {e.strerror or e}") from e

    log.debug("Read %d bytes from %s", len(text), path)
    try:
        return parse_puzzle(text, config, delimiter_width)
    except PuzzleFormatError as e:
        error = PuzzleFormatError(f"{os.path.basename(path)}: {e}")
        error.line = e.line
        raise error from e


def format_grid(board: SudokuBoard, delimiter_width: int = 1) -> str:
    """Render each cell as one character followed by the separator, one row per line."""
    _check_text_size(board.size)
    sep = " " * delimiter_width
    lines = []
    for r in range(board.size):
        lines.append("".join(
            value_to_char(board.get(r, c), board.unknown) + sep for c in range(board.size)
        ))
    return "\n".join(lines)


def write_puzzle(board: SudokuBoard, path: str, delimiter_width: int = 1) -> None:
    """Write a board in the text format read by read_puzzle()."""
    with open(path, "w") as f:
        f.write(format_grid(board, delimiter_width))
        f.write("\n")
