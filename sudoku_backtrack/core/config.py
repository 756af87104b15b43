"""Immutable grid configuration shared by boards, parsers and solvers."""

from __future__ import annotations
import json
import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class SudokuConfig:
    """
    Dimensions of a Sudoku grid and the sentinel used for unknown cells.

    Standard Sudoku is 9x9 with 3x3 boxes. Other perfect squares work the
    same way (4x4 with 2x2 boxes, 16x16 with 4x4 boxes, ...).
    """
    size: int = 9
    box_size: Optional[int] = None
    unknown: int = 0

    def __post_init__(self):
        if self.size < 1:
            raise ValueError(f"Size must be positive, got {self.size}")

        if self.box_size is None:
            # Frozen dataclass: bypass __setattr__ to fill the derived field
            object.__setattr__(self, "box_size", math.isqrt(self.size))

        if self.box_size * self.box_size != self.size:
            raise ValueError(
                f"Size must be a perfect square of the box size, "
                f"got size={self.size}, box_size={self.box_size}"
            )

        if 1 <= self.unknown <= self.size:
            raise ValueError(
                f"Unknown sentinel {self.unknown} collides with candidate values 1-{self.size}"
            )

    @property
    def values(self) -> range:
        """Candidate values in the order the search tries them."""
        return range(1, self.size + 1)

    @classmethod
    def for_size(cls, size: int) -> SudokuConfig:
        """Build the configuration for a square grid of the given edge length."""
        return cls(size=size)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SudokuConfig:
        unexpected = set(data) - {"size", "box_size", "unknown"}
        if unexpected:
            raise ValueError(f"Unknown configuration keys: {sorted(unexpected)}")
        return cls(**data)

    @classmethod
    def from_json(cls, path: str) -> SudokuConfig:
        """
        Load a configuration from a JSON object file.

        Args:
            path: File containing e.g. {"size": 16, "unknown": 0}.
        """
        with open(path, "r") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Configuration in {path} must be a JSON object")
        return cls.from_dict(data)


DEFAULT_CONFIG = SudokuConfig()
