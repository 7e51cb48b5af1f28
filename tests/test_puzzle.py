"""Tests for puzzle assembly and the public uniqueness check."""

import random

import numpy as np
import pytest

from sudoku_engine.config import EngineConfig, GeneratorConfig
from sudoku_engine.generator import is_symmetric
from sudoku_engine.grid import is_solved, make_base_solution
from sudoku_engine.puzzle import SudokuOptions, generate_sudoku, is_uniquely_solvable
from sudoku_engine.solver import has_unique_solution


class TestGenerateSudoku:
    """Tests for the calibrated generator."""

    def test_easy_is_fully_logical(self):
        """Easy puzzles land in [36, 45] clues with full logic coverage."""
        puzzle = generate_sudoku("easy", rng=random.Random(2024))
        assert 36 <= puzzle.clue_count <= 45
        assert puzzle.logic_coverage == 1.0
        assert puzzle.calibrated
        assert puzzle.size == 9
        assert puzzle.difficulty == "easy"

    @pytest.mark.parametrize("difficulty,lo", [("medium", 32), ("hard", 28)])
    def test_structure(self, difficulty, lo):
        """Puzzles are unique, consistent with the solution and above the clue floor."""
        puzzle = generate_sudoku(
            difficulty, SudokuOptions(max_attempts=3), rng=random.Random(7)
        )
        assert is_solved(puzzle.solution)
        mask = puzzle.puzzle != 0
        assert np.all(puzzle.puzzle[mask] == puzzle.solution[mask])
        assert has_unique_solution(puzzle.puzzle)
        assert puzzle.clue_count >= lo
        assert 0.0 <= puzzle.logic_coverage <= 1.0

    def test_without_calibration_takes_one_attempt(self):
        """Disabling calibration accepts the first attempt."""
        puzzle = generate_sudoku(
            "expert", SudokuOptions(ensure_difficulty=False), rng=random.Random(1)
        )
        assert puzzle.attempts == 1
        assert is_uniquely_solvable(puzzle.puzzle)

    def test_fallback_when_goal_unreachable(self):
        """An unreachable coverage goal falls back to one more attempt."""
        config = EngineConfig(generator=GeneratorConfig(coverage_goals={"easy": 1.01}))
        puzzle = generate_sudoku(
            "easy", SudokuOptions(max_attempts=2), rng=random.Random(3), config=config
        )
        assert puzzle.attempts == 3
        assert not puzzle.calibrated
        assert is_uniquely_solvable(puzzle.puzzle)

    def test_seed_is_reproducible(self):
        """Equal seeds give equal puzzles."""
        a = generate_sudoku("medium", SudokuOptions(seed=99, max_attempts=2))
        b = generate_sudoku("medium", SudokuOptions(seed=99, max_attempts=2))
        assert np.array_equal(a.puzzle, b.puzzle)
        assert np.array_equal(a.solution, b.solution)

    def test_symmetry_is_reported(self):
        """The requested symmetry and its outcome are recorded."""
        puzzle = generate_sudoku(
            "easy", SudokuOptions(symmetry="none"), rng=random.Random(5)
        )
        assert puzzle.symmetry == "none"
        assert puzzle.symmetric

    @pytest.mark.parametrize("symmetry", ["central", "diagonal"])
    def test_symmetric_flag_matches_pattern(self, symmetry):
        """The symmetric flag describes the returned blank pattern."""
        for seed in range(3):
            puzzle = generate_sudoku(
                "easy", SudokuOptions(symmetry=symmetry), rng=random.Random(seed)
            )
            assert puzzle.symmetry == symmetry
            assert puzzle.symmetric == is_symmetric(puzzle.puzzle, symmetry)

    def test_single_cell_pass_breaks_symmetry(self):
        """Digging past what paired removals reach is reported as asymmetric."""
        config = EngineConfig(generator=GeneratorConfig(clue_ranges={"hard": (17, 17)}))
        options = SudokuOptions(symmetry="central", ensure_difficulty=False)
        puzzles = [
            generate_sudoku("hard", options, rng=random.Random(seed), config=config)
            for seed in range(3)
        ]
        for puzzle in puzzles:
            assert puzzle.symmetric == is_symmetric(puzzle.puzzle, "central")
            assert is_uniquely_solvable(puzzle.puzzle)
        assert not all(puzzle.symmetric for puzzle in puzzles)

    def test_grids_are_read_only(self):
        """Callers must copy before filling cells."""
        puzzle = generate_sudoku("easy", rng=random.Random(8))
        with pytest.raises(ValueError):
            puzzle.puzzle[0, 0] = 1
        editable = puzzle.puzzle.copy()
        editable[0, 0] = 0
        assert editable[0, 0] == 0

    def test_to_dict(self):
        """Serialization uses the external field names."""
        data = generate_sudoku("easy", rng=random.Random(9)).to_dict()
        assert set(data) >= {"puzzle", "solution", "size", "difficulty", "logicCoverage"}
        assert len(data["puzzle"]) == 9
        assert isinstance(data["puzzle"][0][0], int)

    def test_16x16(self):
        """The 16x16 tier produces a unique 16x16 puzzle."""
        puzzle = generate_sudoku(
            "16x16", SudokuOptions(ensure_difficulty=False), rng=random.Random(16)
        )
        assert puzzle.size == 16
        assert puzzle.puzzle.shape == (16, 16)
        assert puzzle.clue_count >= 115
        mask = puzzle.puzzle != 0
        assert np.all(puzzle.puzzle[mask] == puzzle.solution[mask])
        assert is_solved(puzzle.solution)

    def test_unknown_difficulty(self):
        """Unknown tiers raise ValueError."""
        with pytest.raises(ValueError):
            generate_sudoku("impossible")

    def test_unknown_symmetry(self):
        """Unknown symmetries raise ValueError."""
        with pytest.raises(ValueError):
            generate_sudoku("easy", SudokuOptions(symmetry="spiral"))


class TestIsUniquelySolvable:
    """Tests for the public uniqueness check."""

    def test_unsupported_sizes_are_false(self):
        """Sizes other than 9 and 16 are rejected without raising."""
        assert not is_uniquely_solvable(make_base_solution(4))
        assert not is_uniquely_solvable(np.zeros((10, 10), dtype=int))
        assert not is_uniquely_solvable([[1, 2], [3]])
        assert not is_uniquely_solvable([])

    def test_out_of_range_values_are_false(self, solved9):
        """Values above the grid size are rejected without raising."""
        grid = solved9.copy()
        grid[0, 0] = 12
        assert not is_uniquely_solvable(grid)

    def test_accepts_nested_lists(self, solved9):
        """Plain nested lists are accepted."""
        grid = solved9.tolist()
        grid[0][0] = 0
        assert is_uniquely_solvable(grid)

    def test_two_gaps_in_a_row(self, solved9):
        """Two blanks in one row are pinned by their columns."""
        grid = solved9.copy()
        grid[7, 0] = 0
        grid[7, 5] = 0
        assert is_uniquely_solvable(grid)

    def test_swappable_rectangle(self, rectangle_grid):
        """Blanks that can trade digits are not uniquely solvable."""
        grid, cells = rectangle_grid
        puzzle = grid.copy()
        for r, c in cells:
            puzzle[r, c] = 0
        assert not is_uniquely_solvable(puzzle)

    def test_16x16(self):
        """16x16 grids are supported."""
        grid = make_base_solution(16)
        grid[0, 0] = 0
        grid[15, 15] = 0
        assert is_uniquely_solvable(grid)
