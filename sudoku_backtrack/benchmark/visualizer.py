"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult


class Visualizer:
    """
    Visualization generator for Sudoku solver benchmark results.

    Creates charts comparing solver time per algorithm: averages, the
    spread over all puzzles, and a per-puzzle breakdown.
    """

    # Color palette for algorithms
    COLORS = {
        "Recursive": "#2ecc71",  # Green
        "Iterative": "#3498db",  # Blue
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        sns.set_theme(style="whitegrid")

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_time_comparison(),
            self.plot_time_distribution(),
            self.plot_time_by_puzzle(),
        ]

    def _save(self, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path

    def plot_time_comparison(self) -> str:
        """Create bar chart comparing average solve times."""
        fig, ax = plt.subplots(figsize=(8, 6))

        algorithms = sorted(set(r.algorithm for r in self.results))
        avg_times = []
        colors = []

        for algo in algorithms:
            times = [r.time_seconds for r in self.results if r.algorithm == algo]
            avg_times.append(np.mean(times))
            colors.append(self.COLORS.get(algo, "#95a5a6"))

        bars = ax.bar(algorithms, avg_times, color=colors, edgecolor='black', linewidth=0.5)

        # Add value labels on bars
        for bar, time in zip(bars, avg_times):
            height = bar.get_height()
            ax.annotate(f'{time:.4f}s',
                       xy=(bar.get_x() + bar.get_width() / 2, height),
                       xytext=(0, 3),
                       textcoords="offset points",
                       ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Algorithm', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Average Solve Time by Algorithm', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save("time_comparison.png")

    def plot_time_distribution(self) -> str:
        """Create box plot showing time distribution."""
        fig, ax = plt.subplots(figsize=(12, 6))

        algorithms = sorted(set(r.algorithm for r in self.results))
        data = {
            "algorithm": [r.algorithm for r in self.results],
            "time_seconds": [r.time_seconds for r in self.results],
        }
        palette = {algo: self.COLORS.get(algo, "#95a5a6") for algo in algorithms}
        sns.boxplot(data=data, x="algorithm", y="time_seconds", hue="algorithm",
                    order=algorithms, palette=palette, boxprops={"alpha": 0.7}, ax=ax)

        ax.set_xlabel('Algorithm', fontsize=12)
        ax.set_ylabel('Time (seconds)', fontsize=12)
        ax.set_title('Solve Time Distribution by Algorithm', fontsize=14, fontweight='bold')

        return self._save("time_distribution.png")

    def plot_time_by_puzzle(self) -> str:
        """Create grouped bar chart of times per puzzle and algorithm."""
        fig, ax = plt.subplots(figsize=(12, 6))

        data = {
            "puzzle": [r.puzzle for r in self.results],
            "algorithm": [r.algorithm for r in self.results],
            "time_seconds": [r.time_seconds for r in self.results],
        }
        palette = {algo: self.COLORS.get(algo, "#95a5a6") for algo in set(data["algorithm"])}
        sns.barplot(data=data, x="puzzle", y="time_seconds", hue="algorithm",
                    palette=palette, edgecolor='black', linewidth=0.5, ax=ax)

        ax.set_xlabel('Puzzle', fontsize=12)
        ax.set_ylabel('Time (seconds)', fontsize=12)
        ax.set_title('Solve Time by Puzzle and Algorithm', fontsize=14, fontweight='bold')
        ax.tick_params(axis='x', rotation=45)
        ax.legend(title='Algorithm')
        ax.set_ylim(bottom=0)

        return self._save("time_by_puzzle.png")
