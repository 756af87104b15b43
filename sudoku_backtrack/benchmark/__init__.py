"""Benchmark module for comparing Sudoku solvers."""

from .benchmark import Benchmark, BenchmarkResult

__all__ = ["Benchmark", "BenchmarkResult"]
