"""Unit tests for the backtracking solvers."""

import sys

import pytest
from sudoku_backtrack.core.board import SudokuBoard
from sudoku_backtrack.core.config import SudokuConfig
from sudoku_backtrack.core.validator import validate_solution
from sudoku_backtrack.solvers import (
    BacktrackingSolver,
    IterativeBacktrackingSolver,
    solve,
)


# A known solvable puzzle (easy difficulty)
TEST_PUZZLE = (
    "530070000"
    "600195000"
    "098000060"
    "800060003"
    "400803001"
    "700020006"
    "060000280"
    "000419005"
    "000080079"
)

# The solution to the test puzzle
TEST_SOLUTION = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)

# Box 0 has no room for a 1: row 0 and column 0 already hold one and
# (1, 1) is taken. No two givens conflict with each other.
UNSATISFIABLE_4X4 = [
    [0, 0, 1, 0],
    [0, 2, 0, 0],
    [1, 0, 0, 0],
    [0, 0, 0, 0],
]

# Needs millions of placements under naive row-major backtracking
HARD_PUZZLE = (
    "000000000"
    "000003085"
    "001020000"
    "000507000"
    "004000100"
    "090000000"
    "500000073"
    "002010000"
    "000040009"
)

SOLVER_CLASSES = [BacktrackingSolver, IterativeBacktrackingSolver]


def assert_all_units_complete(board: SudokuBoard):
    """Every row, column and box holds each of 1..size exactly once."""
    expected = set(range(1, board.size + 1))
    for i in range(board.size):
        assert set(board.get_row(i).tolist()) == expected
        assert set(board.get_col(i).tolist()) == expected
    for box_row in range(0, board.size, board.box_size):
        for box_col in range(0, board.size, board.box_size):
            assert set(board.get_box(box_row, box_col).tolist()) == expected


def make_complete_board(size: int) -> SudokuBoard:
    """A solved grid built from shifted rows."""
    config = SudokuConfig(size=size)
    box = config.box_size
    board = SudokuBoard(config)
    for r in range(size):
        for c in range(size):
            board.set(r, c, (box * (r % box) + r // box + c) % size + 1)
    return board


@pytest.mark.parametrize("solver_class", SOLVER_CLASSES)
class TestBacktrackingSolvers:
    """Tests shared by the recursive and iterative engines."""

    def test_solve_puzzle(self, solver_class):
        """Test solving a known puzzle."""
        board = SudokuBoard.from_string(TEST_PUZZLE)
        solved, stats = solver_class().solve(board)

        assert solved
        assert stats.solved
        assert board.is_solved()
        assert board.to_string() == TEST_SOLUTION
        assert_all_units_complete(board)

    def test_solves_in_place_preserving_clues(self, solver_class):
        puzzle = SudokuBoard.from_string(TEST_PUZZLE)
        board = puzzle.copy()
        solver_class().solve(board)
        assert validate_solution(puzzle, board)

    def test_stats_collected(self, solver_class):
        """Test that stats are collected."""
        board = SudokuBoard.from_string(TEST_PUZZLE)
        solved, stats = solver_class().solve(board)

        assert stats.time_seconds > 0
        assert stats.iterations > 0
        assert stats.nodes_explored >= board.size * board.size - 30
        assert stats.backtracks > 0
        assert stats.to_dict()["algorithm"] == solver_class.name

    def test_presolved_grid_unchanged(self, solver_class):
        board = SudokuBoard.from_string(TEST_SOLUTION)
        solved, stats = solver_class().solve(board)

        assert solved
        assert board.to_string() == TEST_SOLUTION
        assert stats.nodes_explored == 0
        assert stats.backtracks == 0

    def test_conflicting_givens_fail_without_mutation(self, solver_class):
        """Two 5s in the first row."""
        board = SudokuBoard.from_string("55" + TEST_PUZZLE[2:])
        before = board.copy()
        solved, stats = solver_class().solve(board)

        assert not solved
        assert not stats.solved
        assert board == before
        assert (0, 0) in stats.extra["conflicts"]

    def test_dead_cell_fails_without_mutation(self, solver_class):
        """(0, 8) needs a 9 but column 8 already has one."""
        board = SudokuBoard.from_string("123456780" + "0" * 71 + "9")
        before = board.copy()
        solved, stats = solver_class().solve(board)

        assert not solved
        assert board == before
        assert stats.nodes_explored == 9

    def test_undo_restores_grid_after_deep_search(self, solver_class):
        board = SudokuBoard.from_2d_list(UNSATISFIABLE_4X4)
        before = board.copy()
        solved, stats = solver_class().solve(board)

        assert not solved
        assert board == before
        assert stats.backtracks > 0

    def test_empty_grid(self, solver_class):
        board = SudokuBoard()
        solved, _ = solver_class().solve(board)

        assert solved
        assert board.is_solved()
        assert_all_units_complete(board)
        # Ascending candidates in row-major order always start the same way
        assert board.to_string().startswith("123456789456789123789123456")

    def test_empty_4x4_first_solution(self, solver_class):
        board = SudokuBoard(SudokuConfig(size=4))
        solved, _ = solver_class().solve(board)

        assert solved
        assert board.to_list() == [[1, 2, 3, 4], [3, 4, 1, 2], [2, 1, 4, 3], [4, 3, 2, 1]]

    def test_custom_sentinel(self, solver_class):
        board = SudokuBoard(SudokuConfig(size=4, unknown=-1))
        board.set(0, 0, 4)
        solved, _ = solver_class().solve(board)

        assert solved
        assert board.is_solved()
        assert board.get(0, 0) == 4

    def test_16x16_with_holes(self, solver_class):
        complete = make_complete_board(16)
        assert complete.is_solved()

        board = complete.copy()
        for r, c in [(0, 0), (3, 7), (7, 9), (12, 4), (15, 15)]:
            board.clear(r, c)
        solved, _ = solver_class().solve(board)

        assert solved
        assert board == complete

    def test_36x36_last_cell_open(self, solver_class):
        """Searching every cell of a 36x36 grid goes deeper than the default recursion limit."""
        complete = make_complete_board(36)
        board = complete.copy()
        board.clear(35, 35)
        limit = sys.getrecursionlimit()

        solved, stats = solver_class().solve(board)

        assert solved, stats.extra
        assert board == complete
        assert stats.iterations == 36 * 36 + 1
        assert sys.getrecursionlimit() == limit

    def test_timeout_restores_grid(self, solver_class):
        board = SudokuBoard.from_string(HARD_PUZZLE)
        solved, stats = solver_class(timeout_seconds=0.2).solve(board)

        assert not solved
        assert stats.extra["error"] == "Timeout"
        assert stats.time_seconds < 5.0
        assert board.to_string() == HARD_PUZZLE

    def test_solver_reusable_after_timeout(self, solver_class):
        solver = solver_class(timeout_seconds=0.0)
        solved, _ = solver.solve(SudokuBoard.from_string(TEST_PUZZLE))
        assert not solved

        solver.timeout_seconds = None
        board = SudokuBoard.from_string(TEST_PUZZLE)
        solved, stats = solver.solve(board)
        assert solved
        assert "error" not in stats.extra
        assert board.to_string() == TEST_SOLUTION

    def test_deterministic(self, solver_class):
        first = SudokuBoard()
        second = SudokuBoard()
        solver = solver_class()
        solver.solve(first)
        solver.solve(second)
        assert first == second

    def test_reset_stats(self, solver_class):
        solver = solver_class()
        solver.solve(SudokuBoard.from_string(TEST_PUZZLE))
        solver.reset_stats()
        assert solver.stats.iterations == 0
        assert not solver.stats.solved


class TestEnginesAgree:
    """The recursive and iterative engines find the same first solution."""

    @pytest.mark.parametrize("puzzle", [
        "0" * 81,
        TEST_PUZZLE,
        "003020600900305001001806400008102900700000008006708200002609500800203009005010300",
    ])
    def test_same_solution(self, puzzle):
        recursive = SudokuBoard.from_string(puzzle)
        iterative = recursive.copy()

        r_solved, r_stats = BacktrackingSolver().solve(recursive)
        i_solved, i_stats = IterativeBacktrackingSolver().solve(iterative)

        assert r_solved == i_solved
        assert recursive == iterative
        assert r_stats.nodes_explored == i_stats.nodes_explored
        assert r_stats.backtracks == i_stats.backtracks


class TestSolveFunction:
    """Tests for the module-level solve() contract."""

    def test_returns_true_and_fills(self):
        board = SudokuBoard.from_string(TEST_PUZZLE)
        assert solve(board) is True
        assert board.to_string() == TEST_SOLUTION

    def test_returns_false_and_restores(self):
        board = SudokuBoard.from_2d_list(UNSATISFIABLE_4X4)
        before = board.to_list()
        assert solve(board) is False
        assert board.to_list() == before


class TestSolverErrors:
    """Exceptions inside a search are reported, not raised."""

    def test_error_restores_grid(self, monkeypatch):
        board = SudokuBoard.from_string(TEST_PUZZLE)
        before = board.copy()
        solver = BacktrackingSolver()
        calls = []

        def failing_attempt(board, row, col):
            calls.append((row, col))
            board.set(0, 2, 4)
            raise RuntimeError("boom")

        monkeypatch.setattr(solver, "_attempt", failing_attempt)
        solved, stats = solver.solve(board)

        assert not solved
        assert stats.extra["error"] == "boom"
        assert board == before
        assert calls == [(0, 0)]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
