"""Backtracking solver with most-constrained-cell ordering."""

import random
from typing import List, Sequence, Tuple

import numpy as np

from .grid import CandidateMasks, validate_grid
from .grid.candidates import mask_to_values


class _Search:
    """Depth-first search over a private copy of a grid.

    Every placement is undone on the way back up, so the working cells and
    masks are always consistent with the current branch.
    """

    def __init__(self, grid: np.ndarray, rng: random.Random | None = None):
        self.cells: List[List[int]] = np.asarray(grid).tolist()
        self.masks = CandidateMasks(self.cells)
        self.empties: List[Tuple[int, int]] = [
            (r, c)
            for r, row in enumerate(self.cells)
            for c, v in enumerate(row)
            if v == 0
        ]
        self.rng = rng
        self.found = 0
        self.first: List[List[int]] | None = None

    def best_empty(self) -> Tuple[int, int, int] | None:
        """The empty cell with the fewest candidates as (r, c, allowed mask)."""
        best = None
        best_count = self.masks.size + 1
        for r, c in self.empties:
            if self.cells[r][c]:
                continue
            allowed = self.masks.allowed(r, c)
            count = allowed.bit_count()
            if count == 0:
                return r, c, 0
            if count < best_count:
                best = (r, c, allowed)
                best_count = count
                if count == 1:
                    break
        return best

    def ordered(self, allowed: int) -> List[int]:
        values = mask_to_values(allowed)
        if self.rng is not None:
            self.rng.shuffle(values)
        return values

    def run(self, limit: int) -> int:
        """Count solutions, stopping as soon as `limit` have been found."""
        if self.masks.conflicted:
            return 0
        self._dfs(limit)
        return self.found

    def _dfs(self, limit: int) -> bool:
        cell = self.best_empty()
        if cell is None:
            self.found += 1
            if self.first is None:
                self.first = [row[:] for row in self.cells]
            return self.found >= limit

        r, c, allowed = cell
        for v in self.ordered(allowed):
            self.cells[r][c] = v
            self.masks.place(r, c, v)
            stop = self._dfs(limit)
            self.cells[r][c] = 0
            self.masks.clear(r, c, v)
            if stop:
                return True
        return False


def count_solutions(
    grid: Sequence[Sequence[int]] | np.ndarray,
    limit: int = 2,
    rng: random.Random | None = None,
) -> int:
    """
    Count the solutions of `grid`, up to `limit`.

    Args:
        grid: 9×9 or 16×16 grid with 0 for empty cells.
        limit: Stop searching once this many solutions are found.
        rng: Optional source for randomized candidate order.

    Returns:
        Number of solutions found (0 if the givens already conflict).
    """
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")
    return _Search(validate_grid(grid), rng).run(limit)


def solve(
    grid: Sequence[Sequence[int]] | np.ndarray,
    rng: random.Random | None = None,
) -> np.ndarray | None:
    """Return the first solution found, or None if the grid has none.

    Candidate order is shuffled, so for a grid with several solutions the one
    returned varies with `rng`.
    """
    search = _Search(validate_grid(grid), rng or random.Random())
    if search.run(1) == 0:
        return None
    return np.array(search.first, dtype=np.int64)


def has_unique_solution(grid: Sequence[Sequence[int]] | np.ndarray) -> bool:
    """True if `grid` has exactly one solution.

    The search continues past the first solution and stops at the second.
    """
    return count_solutions(grid, limit=2) == 1
