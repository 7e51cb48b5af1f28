"""Solved-grid generation and uniqueness-preserving clue removal."""

import logging
import random
from typing import List, Tuple

import numpy as np

from .grid import (
    Cell,
    as_grid,
    make_base_solution,
    relabel_digits,
    shuffle_bands,
    shuffle_cols_within_stacks,
    shuffle_rows_within_bands,
    shuffle_stacks,
)
from .solver import count_solutions

logger = logging.getLogger(__name__)

SYMMETRIES = ("none", "central", "diagonal")


def generate_solved(size: int = 9, rng: random.Random | None = None) -> np.ndarray:
    """
    Sample a valid, completely filled size×size Sudoku grid.

    Starts from the canonical pattern and applies row shuffles within bands,
    column shuffles within stacks, band and stack shuffles, then a digit
    relabeling. Each step preserves validity.

    Args:
        size: Grid side, a perfect square (9 or 16 for puzzles).
        rng: Random source; a fresh unseeded one if None.
    """
    rng = rng or random.Random()
    grid = make_base_solution(size)
    grid = shuffle_rows_within_bands(grid, rng)
    grid = shuffle_cols_within_stacks(grid, rng)
    grid = shuffle_bands(grid, rng)
    grid = shuffle_stacks(grid, rng)
    return relabel_digits(grid, rng)


def check_symmetry(symmetry: str) -> str:
    if symmetry not in SYMMETRIES:
        raise ValueError(f"symmetry must be one of {SYMMETRIES}; got {symmetry!r}")
    return symmetry


def symmetry_partner(r: int, c: int, size: int, symmetry: str) -> Cell:
    """The cell paired with (r, c) under `symmetry` ((r, c) itself for "none")."""
    if symmetry == "central":
        return size - 1 - r, size - 1 - c
    if symmetry == "diagonal":
        return c, r
    return r, c


def _removal_seeds(size: int, symmetry: str) -> List[Cell]:
    """One representative cell per symmetry orbit."""
    total = size * size
    seeds = []
    for r in range(size):
        for c in range(size):
            if symmetry == "central" and r * size + c > (total - 1) / 2:
                continue
            if symmetry == "diagonal" and r > c:
                continue
            seeds.append((r, c))
    return seeds


def is_symmetric(puzzle: np.ndarray, symmetry: str) -> bool:
    """True if the blank pattern of `puzzle` is invariant under `symmetry`."""
    check_symmetry(symmetry)
    g = np.asarray(puzzle)
    size = int(g.shape[0])
    for r in range(size):
        for c in range(size):
            pr, pc = symmetry_partner(r, c, size, symmetry)
            if (g[r, c] == 0) != (g[pr, pc] == 0):
                return False
    return True


def _is_unique(cells: List[List[int]]) -> bool:
    return count_solutions(cells, limit=2) == 1


def dig(
    solution: np.ndarray,
    target_clues: int,
    symmetry: str = "central",
    rng: random.Random | None = None,
) -> np.ndarray:
    """
    Remove clues from a solved grid while keeping the solution unique.

    Symmetric groups of cells are cleared together in random order; a removal
    that breaks uniqueness, or that would drop below `target_clues`, is skipped.
    A second pass then tries single cells, ignoring symmetry, to close the gap.
    The target is a floor, not a promise: if removals run out first the puzzle
    keeps more clues.

    Args:
        solution: Completely filled valid grid.
        target_clues: Stop once the clue count reaches this value.
        symmetry: "central", "diagonal" or "none".
        rng: Random source; a fresh unseeded one if None.

    Returns:
        A new puzzle grid with 0 for removed cells.
    """
    check_symmetry(symmetry)
    rng = rng or random.Random()
    puzzle = as_grid(solution).tolist()
    size = len(puzzle)
    floor = max(0, target_clues)
    clues = size * size

    seeds = _removal_seeds(size, symmetry)
    rng.shuffle(seeds)
    for r, c in seeds:
        if clues <= floor:
            break
        positions = {(r, c), symmetry_partner(r, c, size, symmetry)}
        backup: List[Tuple[int, int, int]] = [
            (rr, cc, puzzle[rr][cc]) for rr, cc in positions if puzzle[rr][cc]
        ]
        if not backup or clues - len(backup) < floor:
            continue
        for rr, cc, _ in backup:
            puzzle[rr][cc] = 0
        if _is_unique(puzzle):
            clues -= len(backup)
        else:
            for rr, cc, v in backup:
                puzzle[rr][cc] = v

    cells = [(r, c) for r in range(size) for c in range(size)]
    rng.shuffle(cells)
    for r, c in cells:
        if clues <= floor:
            break
        v = puzzle[r][c]
        if v == 0:
            continue
        puzzle[r][c] = 0
        if _is_unique(puzzle):
            clues -= 1
        else:
            puzzle[r][c] = v

    if clues > floor:
        logger.debug(f"Digging stopped at {clues} clues (target {target_clues})")
    return np.array(puzzle, dtype=np.int64)
