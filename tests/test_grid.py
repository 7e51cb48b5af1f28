"""Tests for grid primitives and solved-grid construction."""

import random

import numpy as np
import pytest

from sudoku_engine.grid import (
    as_grid,
    box_size_for,
    clone_grid,
    count_filled,
    get_box,
    get_col,
    get_row,
    grid_units,
    is_solved,
    make_base_solution,
    relabel_digits,
    shuffle_bands,
    shuffle_cols_within_stacks,
    shuffle_rows_within_bands,
    shuffle_stacks,
    transpose,
    validate_grid,
)


class TestBoxSize:
    """Tests for box size resolution."""

    def test_supported_sizes(self):
        """9 uses 3x3 boxes and 16 uses 4x4 boxes."""
        assert box_size_for(9) == 3
        assert box_size_for(16) == 4
        assert box_size_for(4) == 2

    def test_invalid_size(self):
        """Non-perfect-square sizes should raise ValueError."""
        with pytest.raises(ValueError):
            box_size_for(10)
        with pytest.raises(ValueError):
            box_size_for(0)


class TestPrimitives:
    """Tests for clone, transpose and unit extraction."""

    def test_clone_is_independent(self):
        """Mutating a clone should not touch the original."""
        grid = make_base_solution(9)
        copy = clone_grid(grid)
        copy[0, 0] = 0
        assert grid[0, 0] != 0

    def test_transpose(self):
        """Transpose swaps rows and columns."""
        grid = make_base_solution(9)
        t = transpose(grid)
        assert np.array_equal(t[2, :], grid[:, 2])

    def test_row_col_box(self):
        """Row, column and box extraction return the right cells."""
        grid = np.arange(81).reshape(9, 9)
        assert get_row(grid, 1).tolist() == list(range(9, 18))
        assert get_col(grid, 0).tolist() == list(range(0, 81, 9))
        assert get_box(grid, 4, 5).tolist() == [30, 31, 32, 39, 40, 41, 48, 49, 50]

    def test_count_filled(self):
        """Zeros are empty, everything else counts as a clue."""
        grid = make_base_solution(9)
        grid[0, :3] = 0
        assert count_filled(grid) == 78

    def test_as_grid_rejects_non_square(self):
        """Non-square input should raise ValueError."""
        with pytest.raises(ValueError):
            as_grid([[1, 2, 3], [4, 5, 6]])

    def test_validate_grid_rejects_bad_values(self):
        """Values outside 0..size should raise ValueError."""
        grid = np.zeros((9, 9), dtype=int)
        grid[0, 0] = 10
        with pytest.raises(ValueError):
            validate_grid(grid)

    def test_validate_grid_rejects_unsupported_size(self):
        """Only 9x9 and 16x16 are puzzle sizes."""
        with pytest.raises(ValueError):
            validate_grid(np.zeros((4, 4), dtype=int))

    def test_grid_units(self):
        """A 9x9 grid has 27 units of 9 cells each."""
        units = grid_units(9)
        assert len(units) == 27
        assert [kind for kind, _ in units].count("box") == 9
        assert all(len(cells) == 9 for _, cells in units)


class TestBaseSolution:
    """Tests for the canonical solution pattern."""

    @pytest.mark.parametrize("size", [4, 9, 16])
    def test_base_solution_valid(self, size):
        """The canonical pattern is a valid solution at every size."""
        assert is_solved(make_base_solution(size))


class TestShuffles:
    """Each shuffle step must preserve validity."""

    @pytest.mark.parametrize(
        "step",
        [
            shuffle_rows_within_bands,
            shuffle_cols_within_stacks,
            shuffle_bands,
            shuffle_stacks,
            relabel_digits,
        ],
    )
    def test_step_preserves_validity(self, step):
        """Applying a shuffle to a valid grid yields a valid grid."""
        rng = random.Random(3)
        for size in (9, 16):
            grid = make_base_solution(size)
            for _ in range(5):
                grid = step(grid, rng)
                assert is_solved(grid)

    def test_relabel_keeps_blanks(self):
        """Digit relabeling leaves empty cells empty."""
        grid = make_base_solution(9)
        grid[4, 4] = 0
        out = relabel_digits(grid, random.Random(1))
        assert out[4, 4] == 0
        assert count_filled(out) == 80

    def test_shuffles_return_new_arrays(self):
        """Shuffles never modify their input."""
        grid = make_base_solution(9)
        before = grid.copy()
        shuffle_rows_within_bands(grid, random.Random(0))
        relabel_digits(grid, random.Random(0))
        assert np.array_equal(grid, before)
