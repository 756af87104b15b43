"""Benchmarking framework for running solvers over a set of puzzle files."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Type
import json
import logging
import os

from tqdm import tqdm

from ..core.board import SudokuBoard
from ..core.config import SudokuConfig, DEFAULT_CONFIG
from ..core.io import read_puzzle, PuzzleFormatError
from ..solvers import BaseSolver, BacktrackingSolver, IterativeBacktrackingSolver

log = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    puzzle: str
    algorithm: str
    solved: bool
    time_seconds: float
    memory_bytes: int
    iterations: int
    backtracks: int
    nodes_explored: int
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle": self.puzzle,
            "algorithm": self.algorithm,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            **self.extra
        }


class Benchmark:
    """
    Runs every solver on every puzzle file and collects performance metrics.

    Each attempt gets a fresh solver instance and its own copy of the
    puzzle, so results do not depend on run order.
    """

    DEFAULT_SOLVERS: Dict[str, Type[BaseSolver]] = {
        "Recursive": BacktrackingSolver,
        "Iterative": IterativeBacktrackingSolver,
    }

    def __init__(
        self,
        puzzle_paths: List[str],
        solvers: Optional[Dict[str, Type[BaseSolver]]] = None,
        config: SudokuConfig = DEFAULT_CONFIG,
        delimiter_width: int = 1,
        timeout_seconds: Optional[float] = 60.0
    ):
        """
        Initialize the benchmark.

        Args:
            puzzle_paths: Puzzle files to solve.
            solvers: Dict of solver_name -> solver class (default: both engines).
            config: Grid configuration used to parse the files.
            delimiter_width: Characters between cells in the files.
            timeout_seconds: Maximum time per puzzle per solver (None: no limit).
        """
        self.puzzle_paths = list(puzzle_paths)
        self.config = config
        self.delimiter_width = delimiter_width
        self.timeout_seconds = timeout_seconds
        self.solvers = dict(solvers or self.DEFAULT_SOLVERS)

        self.puzzles: Dict[str, SudokuBoard] = {}
        self.results: List[BenchmarkResult] = []

    def load_puzzles(self) -> None:
        """Read all puzzle files, skipping malformed ones."""
        for path in self.puzzle_paths:
            name = os.path.basename(path)
            try:
                self.puzzles[name] = read_puzzle(path, self.config, self.delimiter_width)
            except PuzzleFormatError as e:
                log.warning("Skipping %s: %s", path, e)

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        if not self.puzzles:
            self.load_puzzles()

        self.results = []

        total_tests = len(self.puzzles) * len(self.solvers)
        pbar = tqdm(total=total_tests, desc="Benchmarking", disable=not show_progress)

        for puzzle_name, puzzle in self.puzzles.items():
            for solver_name, solver_class in self.solvers.items():
                result = self._run_single(puzzle.copy(), puzzle_name, solver_name, solver_class)
                self.results.append(result)
                pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(
        self,
        puzzle: SudokuBoard,
        puzzle_name: str,
        solver_name: str,
        solver_class: Type[BaseSolver]
    ) -> BenchmarkResult:
        """Run a single solver on a single puzzle."""
        solver = solver_class(timeout_seconds=self.timeout_seconds)
        solved, stats = solver.solve(puzzle)
        if stats.extra.get("error") == "Timeout":
            log.warning("%s timed out on %s after %.1fs", solver_name, puzzle_name, self.timeout_seconds)

        return BenchmarkResult(
            puzzle=puzzle_name,
            algorithm=solver_name,
            solved=solved,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            iterations=stats.iterations,
            backtracks=stats.backtracks,
            nodes_explored=stats.nodes_explored,
            extra=dict(stats.extra)
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "total_puzzles": len(self.puzzles),
            "solvers_tested": list(self.solvers.keys()),
            "results_by_algorithm": {},
        }

        # Group by algorithm
        for solver_name in self.solvers:
            solver_results = [r for r in self.results if r.algorithm == solver_name]
            if solver_results:
                solved = [r for r in solver_results if r.solved]
                times = [r.time_seconds for r in solver_results]
                memory = [r.memory_bytes for r in solver_results]

                summary["results_by_algorithm"][solver_name] = {
                    "solve_rate": len(solved) / len(solver_results) * 100,
                    "avg_time_seconds": sum(times) / len(times),
                    "max_time_seconds": max(times),
                    "min_time_seconds": min(times),
                    "avg_memory_mb": sum(memory) / len(memory) / (1024 * 1024),
                    "total_solved": len(solved),
                    "total_tested": len(solver_results)
                }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and summary to JSON files."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        log.info("Results saved to %s", output_dir)
