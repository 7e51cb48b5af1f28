"""Shared fixtures for engine tests."""

import random

import numpy as np
import pytest

from sudoku_engine.generator import generate_solved
from sudoku_engine.solver import solve


def _find_swappable_rectangle(grid: np.ndarray):
    """Four cells in two rows, two columns and two boxes holding a/b and b/a."""
    size = grid.shape[0]
    box = 3 if size == 9 else 4
    for r1 in range(size):
        for r2 in range(r1 + 1, size):
            same_band = r1 // box == r2 // box
            for c1 in range(size):
                for c2 in range(c1 + 1, size):
                    same_stack = c1 // box == c2 // box
                    if same_band == same_stack:
                        continue
                    if grid[r1, c1] == grid[r2, c2] and grid[r1, c2] == grid[r2, c1]:
                        return [(r1, c1), (r1, c2), (r2, c1), (r2, c2)]
    return None


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def solved9():
    return generate_solved(9, random.Random(7))


@pytest.fixture
def rectangle_grid():
    """A solved 9x9 grid containing a swappable rectangle, and its four cells.

    Grids from the shuffled canonical pattern never contain one, so this
    searches randomized backtracking solutions of the empty grid instead.
    """
    empty = np.zeros((9, 9), dtype=np.int64)
    for seed in range(200):
        grid = solve(empty, rng=random.Random(seed))
        cells = _find_swappable_rectangle(grid)
        if cells is not None:
            return grid, cells
    pytest.fail("no grid with a swappable rectangle found")


@pytest.fixture
def hidden_single_grids():
    """Sparse 9x9 grids where only a hidden single for 1 at (0, 0) is forced.

    No cell is a naked single. In the "col" and "box" grids only that unit
    kind pins the digit; in the "row" grid row 0 is the first unit scanned
    that does.
    """
    row = np.zeros((9, 9), dtype=np.int64)
    row[1, 3] = row[2, 6] = row[6, 1] = row[4, 2] = 1

    col = np.zeros((9, 9), dtype=np.int64)
    col[1, 0], col[2, 0], col[5, 0], col[8, 0] = 2, 3, 4, 5
    col[3, 4] = col[4, 7] = col[6, 5] = col[7, 8] = 1

    box = np.zeros((9, 9), dtype=np.int64)
    box[0, 2], box[1, 2], box[2, 2], box[1, 0], box[2, 0] = 2, 3, 4, 5, 6
    box[5, 1] = 1

    return {"row": row, "col": col, "box": box}
