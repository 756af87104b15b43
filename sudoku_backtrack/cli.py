"""Command-line interface for the Sudoku solver."""

import argparse
import logging
import sys

from .core.board import SudokuBoard, MAX_CHAR_VALUE
from .core.config import SudokuConfig
from .core.io import PuzzleFormatError, read_puzzle, format_grid
from .core.validator import find_conflicts
from .solvers import BacktrackingSolver, IterativeBacktrackingSolver

EXIT_SOLVED = 0
EXIT_NO_SOLUTION = 1
EXIT_BAD_INPUT = 2

SOLVERS = {
    "recursive": BacktrackingSolver,
    "iterative": IterativeBacktrackingSolver,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Sudoku solver using exhaustive backtracking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Solve a puzzle file (one row per line, cells separated by a space)
  sudoku-backtrack solve puzzles/easy.txt

  # Solve a 16x16 puzzle with the explicit-stack engine
  sudoku-backtrack solve big.txt --size 16 --algorithm iterative

  # Compare both engines on a set of puzzles
  sudoku-backtrack benchmark puzzles/*.txt --output results/
        """
    )
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Options shared by both commands
    grid_parser = argparse.ArgumentParser(add_help=False)
    grid_parser.add_argument(
        "--size", type=int, default=None,
        help="Grid edge length, a perfect square (default: 9)"
    )
    grid_parser.add_argument(
        "--config", "-c", type=str, default=None,
        help="JSON file with size, box_size and unknown"
    )
    grid_parser.add_argument(
        "--delimiter-width", type=int, default=1,
        help="Characters between cells in the input (default: 1)"
    )

    # Solve command
    solve_parser = subparsers.add_parser(
        "solve", parents=[grid_parser], help="Solve a Sudoku puzzle file"
    )
    solve_parser.add_argument(
        "file", nargs="?", default=None,
        help="Puzzle file (prompted for when omitted)"
    )
    solve_parser.add_argument(
        "--algorithm", "-a", choices=sorted(SOLVERS), default="recursive",
        help="Search engine to use (default: recursive)"
    )
    solve_parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Show detailed solving statistics"
    )

    # Benchmark command
    bench_parser = subparsers.add_parser(
        "benchmark", parents=[grid_parser], help="Run both engines over puzzle files"
    )
    bench_parser.add_argument("files", nargs="+", help="Puzzle files")
    bench_parser.add_argument(
        "--output", "-o", type=str, default="results",
        help="Output directory for results (default: results)"
    )
    bench_parser.add_argument(
        "--timeout", type=float, default=60.0,
        help="Seconds allowed per puzzle per engine (default: 60)"
    )
    bench_parser.add_argument(
        "--no-charts", action="store_true",
        help="Skip chart generation"
    )

    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s"
    )

    if args.command is None:
        parser.print_help()
        sys.exit(EXIT_BAD_INPUT)

    try:
        config = load_config(args)
    except (OSError, ValueError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        sys.exit(EXIT_BAD_INPUT)

    if args.command == "solve":
        sys.exit(cmd_solve(args, config))
    elif args.command == "benchmark":
        sys.exit(cmd_benchmark(args, config))


def load_config(args) -> SudokuConfig:
    """Build the grid configuration from --config and --size."""
    if args.config:
        config = SudokuConfig.from_json(args.config)
        if args.size is not None and args.size != config.size:
            config = SudokuConfig(size=args.size, unknown=config.unknown)
    else:
        config = SudokuConfig(size=args.size if args.size is not None else 9)

    # Puzzle files hold one character per cell
    if config.size > MAX_CHAR_VALUE:
        raise ValueError(f"size {config.size} is too large for puzzle files (max {MAX_CHAR_VALUE})")
    return config


def prompt_for_puzzle(config: SudokuConfig, delimiter_width: int, prompt: str = "Sudoku file: ") -> SudokuBoard:
    """Ask for a file name until one can be opened, then parse it."""
    while True:
        path = input(prompt).strip()
        try:
            return read_puzzle(path, config, delimiter_width)
        except PuzzleFormatError as e:
            if isinstance(e.__cause__, OSError):
                print("Unable to open that file. Try again.")
                continue
            raise


def cmd_solve(args, config: SudokuConfig) -> int:
    """Handle the solve command."""
    print("This program solves Sudoku puzzles.")
    try:
        if args.file is None:
            board = prompt_for_puzzle(config, args.delimiter_width)
        else:
            board = read_puzzle(args.file, config, args.delimiter_width)
    except PuzzleFormatError as e:
        print(f"Error parsing puzzle: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    print()
    print("Starting Sudoku grid:")
    print(format_grid(board, args.delimiter_width))
    print()
    print()

    conflicts = find_conflicts(board)
    if conflicts:
        cells = ", ".join(f"({r + 1}, {c + 1})" for r, c in conflicts)
        print(f"Givens conflict at {cells}")

    solver = SOLVERS[args.algorithm]()
    solved, stats = solver.solve(board)

    print("Solution:")
    if not solved:
        print("No solution found.")
    print(format_grid(board, args.delimiter_width))

    if args.verbose:
        print()
        print(f"Algorithm: {stats.algorithm}")
        print(f"  Time: {stats.time_seconds:.4f}s")
        print(f"  Cells visited: {stats.iterations:,}")
        print(f"  Placements: {stats.nodes_explored:,}")
        print(f"  Backtracks: {stats.backtracks:,}")
        print(f"  Memory: {stats.memory_bytes / 1024:.2f} KB")

    return EXIT_SOLVED if solved else EXIT_NO_SOLUTION


def cmd_benchmark(args, config: SudokuConfig) -> int:
    """Handle the benchmark command."""
    from .benchmark import Benchmark

    print("=" * 60)
    print("SUDOKU SOLVER BENCHMARK")
    print("=" * 60)

    benchmark = Benchmark(
        args.files,
        config=config,
        delimiter_width=args.delimiter_width,
        timeout_seconds=args.timeout
    )
    benchmark.load_puzzles()
    if not benchmark.puzzles:
        print("No readable puzzles.", file=sys.stderr)
        return EXIT_BAD_INPUT

    print(f"Puzzles: {len(benchmark.puzzles)}")
    print(f"Algorithms: {', '.join(benchmark.solvers.keys())}")
    print(f"Output directory: {args.output}")
    print("=" * 60)

    results = benchmark.run()
    summary = benchmark.get_summary()

    print("\nBy Algorithm:")
    print("-" * 50)
    for algo, stats in summary["results_by_algorithm"].items():
        print(f"\n{algo}:")
        print(f"  Solved: {stats['solve_rate']:.1f}% ({stats['total_solved']}/{stats['total_tested']})")
        print(f"  Avg Time: {stats['avg_time_seconds']:.4f}s")
        print(f"  Avg Memory: {stats['avg_memory_mb']:.2f} MB")

    benchmark.save_results(args.output)

    if not args.no_charts:
        from .benchmark.visualizer import Visualizer

        print("\nGenerating charts...")
        charts = Visualizer(results, args.output).generate_all()
        for chart in charts:
            print(f"  - {chart}")

    print("\n" + "=" * 60)
    print("Benchmark complete!")
    return EXIT_SOLVED


if __name__ == "__main__":
    main()
