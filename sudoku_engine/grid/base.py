import math
import random
from functools import lru_cache
from typing import Iterable, List, Sequence, Tuple

import numpy as np

SUPPORTED_SIZES = (9, 16)


def box_size_for(size: int) -> int:
    """Validate that size is a Sudoku order (k^2) and return the box side k."""
    if size <= 0:
        raise ValueError(f"size must be positive, got {size}")
    box = int(math.isqrt(size))
    if box * box != size:
        raise ValueError(f"size must be a perfect square (e.g. 4, 9, 16); got {size}")
    return box


def as_grid(grid: Sequence[Sequence[int]] | np.ndarray) -> np.ndarray:
    """Return a private int64 copy of `grid`, checking that it is square."""
    out = np.array(grid, dtype=np.int64)
    if out.ndim != 2 or out.shape[0] != out.shape[1]:
        raise ValueError(f"grid must be square; got shape={out.shape}")
    return out


def validate_grid(grid: Sequence[Sequence[int]] | np.ndarray) -> np.ndarray:
    """Copy and check a puzzle grid: supported side and values in 0..size."""
    out = as_grid(grid)
    size = int(out.shape[0])
    if size not in SUPPORTED_SIZES:
        raise ValueError(f"grid size must be one of {SUPPORTED_SIZES}; got {size}")
    if out.min() < 0 or out.max() > size:
        raise ValueError(f"grid values must be in [0, {size}]")
    return out


def clone_grid(grid: np.ndarray) -> np.ndarray:
    return np.array(grid, dtype=np.int64, copy=True)


def transpose(grid: np.ndarray) -> np.ndarray:
    return np.ascontiguousarray(np.asarray(grid).T)


def get_row(grid: np.ndarray, r: int) -> np.ndarray:
    return np.array(grid[r, :])


def get_col(grid: np.ndarray, c: int) -> np.ndarray:
    return np.array(grid[:, c])


def get_box(grid: np.ndarray, r: int, c: int) -> np.ndarray:
    """Return the box containing cell (r, c) as a flat array, row-major."""
    box = box_size_for(int(grid.shape[0]))
    br, bc = (r // box) * box, (c // box) * box
    return np.array(grid[br:br + box, bc:bc + box]).flatten()


def count_filled(grid: np.ndarray) -> int:
    return int(np.count_nonzero(grid))


Cell = Tuple[int, int]
Unit = Tuple[str, Tuple[Cell, ...]]


@lru_cache(maxsize=None)
def grid_units(size: int) -> Tuple[Unit, ...]:
    """All rows, then columns, then boxes of a size×size grid as (kind, cells)."""
    box = box_size_for(size)
    units: List[Unit] = []
    for r in range(size):
        units.append(("row", tuple((r, c) for c in range(size))))
    for c in range(size):
        units.append(("col", tuple((r, c) for r in range(size))))
    for br in range(0, size, box):
        for bc in range(0, size, box):
            cells = tuple((br + i, bc + j) for i in range(box) for j in range(box))
            units.append(("box", cells))
    return tuple(units)


def make_base_solution(size: int) -> np.ndarray:
    """Create the canonical valid size×size Sudoku solution for size=k^2.

    Uses the standard pattern construction:
      value(r,c) = (k*(r mod k) + r//k + c) mod size + 1
    which guarantees each row/col is a permutation of 1..size and each k×k box is valid.
    """
    k = box_size_for(size)
    grid = np.empty((size, size), dtype=np.int64)
    for r in range(size):
        for c in range(size):
            grid[r, c] = (k * (r % k) + (r // k) + c) % size + 1
    return grid


def _shuffled(values: Iterable[int], rng: random.Random) -> List[int]:
    values = list(values)
    rng.shuffle(values)
    return values


def _require_square(grid: np.ndarray) -> int:
    n = int(grid.shape[0])
    if grid.shape != (n, n):
        raise ValueError(f"grid must be square; got shape={grid.shape}")
    return n


def shuffle_rows_within_bands(grid: np.ndarray, rng: random.Random) -> np.ndarray:
    """Permute the rows inside each band of `box` rows (returns a new array)."""
    n = _require_square(grid)
    box = box_size_for(n)
    row_indices: List[int] = []
    for band in range(box):
        row_indices.extend(_shuffled((band * box + i for i in range(box)), rng))
    return grid[row_indices, :]


def shuffle_cols_within_stacks(grid: np.ndarray, rng: random.Random) -> np.ndarray:
    """Permute the columns inside each stack (via transpose)."""
    return transpose(shuffle_rows_within_bands(transpose(grid), rng))


def shuffle_bands(grid: np.ndarray, rng: random.Random) -> np.ndarray:
    """Permute whole bands of rows, keeping row order inside each band."""
    n = _require_square(grid)
    box = box_size_for(n)
    row_indices: List[int] = []
    for band in _shuffled(range(box), rng):
        row_indices.extend(band * box + i for i in range(box))
    return grid[row_indices, :]


def shuffle_stacks(grid: np.ndarray, rng: random.Random) -> np.ndarray:
    """Permute whole stacks of columns (via transpose)."""
    return transpose(shuffle_bands(transpose(grid), rng))


def relabel_digits(grid: np.ndarray, rng: random.Random) -> np.ndarray:
    """Randomly permute digits 1..n (returns a new array). Blanks stay 0."""
    n = _require_square(grid)
    mapping = np.array([0] + _shuffled(range(1, n + 1), rng), dtype=np.int64)
    return mapping[grid]
