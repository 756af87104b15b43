"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, Tuple
import logging
import time
import tracemalloc

from ..core.board import SudokuBoard
from ..core.validator import find_conflicts

log = logging.getLogger(__name__)


class SolverTimeout(Exception):
    """Raised inside a search once its deadline has passed."""


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0
    iterations: int = 0

    # Search metrics
    backtracks: int = 0
    nodes_explored: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """
    Abstract base class for Sudoku solvers.

    Solvers fill the board they are given in place. "No solution" is a
    normal outcome reported as False; in that case the board is left
    exactly as it was passed in.
    """

    name: str = "BaseSolver"

    def __init__(self, timeout_seconds: Optional[float] = None):
        """
        Args:
            timeout_seconds: Abandon a search after this long (None: never).
                A timed-out search reports False with the board restored.
        """
        self.timeout_seconds = timeout_seconds
        self._deadline: Optional[float] = None
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, board: SudokuBoard) -> Tuple[bool, SolverStats]:
        """
        Solve a Sudoku puzzle in place with timing and memory tracking.

        Args:
            board: The puzzle to solve. Modified in place.

        Returns:
            Tuple of (solved, stats).
        """
        self.stats = SolverStats(algorithm=self.name)

        conflicts = find_conflicts(board)
        if conflicts:
            log.info("%s: givens conflict at %s, not searching", self.name, conflicts)
            self.stats.extra["conflicts"] = conflicts
            return False, self.stats

        log.debug("%s: solving %r", self.name, board)
        snapshot = board.grid.copy()

        # Start memory tracking unless someone else already is
        started_tracing = not tracemalloc.is_tracing()
        if started_tracing:
            tracemalloc.start()

        # Start timing
        start_time = time.perf_counter()
        if self.timeout_seconds is not None:
            self._deadline = start_time + self.timeout_seconds

        try:
            solved = self._solve(board)
        except SolverTimeout:
            log.warning("%s: gave up after %.2fs", self.name, self.timeout_seconds)
            self.stats.extra["error"] = "Timeout"
            board.grid[:] = snapshot
            solved = False
        except Exception as e:
            log.exception("%s: search failed", self.name)
            self.stats.extra["error"] = str(e)
            board.grid[:] = snapshot
            solved = False
        finally:
            self._deadline = None

        # End timing
        self.stats.time_seconds = time.perf_counter() - start_time

        # Get memory usage
        current, peak = tracemalloc.get_traced_memory()
        if started_tracing:
            tracemalloc.stop()
        self.stats.memory_bytes = peak

        self.stats.solved = solved
        log.debug("%s: solved=%s in %.4fs (%d placements, %d backtracks)",
                  self.name, solved, self.stats.time_seconds,
                  self.stats.nodes_explored, self.stats.backtracks)
        return solved, self.stats

    def _check_deadline(self) -> None:
        """Raise SolverTimeout if the current search has run out of time."""
        if self._deadline is not None and time.perf_counter() >= self._deadline:
            raise SolverTimeout()

    @abstractmethod
    def _solve(self, board: SudokuBoard) -> bool:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            board: The puzzle to fill in place.

        Returns:
            True if a solution was found. On False the board must be back
            in its original state. Long-running loops call
            _check_deadline() so a timeout can interrupt them.
        """
        pass

    def reset_stats(self) -> None:
        """Reset solver statistics."""
        self.stats = SolverStats(algorithm=self.name)
