"""Killer Sudoku: partition a solved grid into sum cages."""

import logging
import random
from collections import deque
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

import numpy as np

from .config import EngineConfig
from .grid import SUPPORTED_SIZES, Cell, as_grid
from .puzzle import SudokuOptions, generate_sudoku

logger = logging.getLogger(__name__)

# Relative weight of each target cage size; sizes not listed weigh 1.
CAGE_SIZE_WEIGHTS: Dict[str, Dict[int, float]] = {
    "hard": {2: 0.3, 3: 0.4, 4: 0.3},
    "medium": {2: 0.45, 3: 0.35, 4: 0.2},
    "easy": {2: 0.55, 3: 0.3, 4: 0.15},
}
DEFAULT_SEED_ATTEMPTS = {"hard": 4, "medium": 3, "easy": 2}

# Two-cell sums with a single digit combination in 9x9 ({1,2}, {1,3}, {7,9}, {8,9})
EASY_PAIR_SUMS = frozenset({3, 4, 16, 17})

_NEIGHBOURS = ((1, 0), (-1, 0), (0, 1), (0, -1))


@dataclass
class Cage:
    """Connected cells with no repeated digit and a known total."""

    id: int
    sum: int
    cells: List[Cell]

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "sum": self.sum, "cells": [[r, c] for r, c in self.cells]}


@dataclass
class KillerOptions:
    """Per-call options for :func:`generate_killer_sudoku`.

    Fields left as None fall back to the killer configuration.
    """

    size: int | None = None
    min_cage: int | None = None
    max_cage: int | None = None
    seed_attempts: int | None = None
    difficulty: str | None = None  # "easy", "medium" or "hard"
    base_numbers_count: int | None = None
    symmetric_givens: bool | None = None
    avoid_easy_pair_sums: bool | None = None
    seed: int | None = None


@dataclass(frozen=True)
class KillerPuzzle:
    """Cages over a solved grid, plus any revealed givens."""

    size: int
    cages: List[Cage]
    solution: np.ndarray
    givens: np.ndarray

    def to_dict(self) -> dict[str, Any]:
        return {
            "size": self.size,
            "cages": [cage.to_dict() for cage in self.cages],
            "solution": self.solution.tolist(),
            "givens": self.givens.tolist(),
        }


class _CageGrower:
    """Randomized frontier growth of cages over a solved grid."""

    def __init__(
        self,
        solution: List[List[int]],
        rng: random.Random,
        seed_attempts: int,
    ):
        self.solution = solution
        self.size = len(solution)
        self.rng = rng
        self.seed_attempts = seed_attempts
        self.used = [[False] * self.size for _ in range(self.size)]

    def free_neighbours(self, r: int, c: int) -> List[Cell]:
        out = []
        for dr, dc in _NEIGHBOURS:
            nr, nc = r + dr, c + dc
            if 0 <= nr < self.size and 0 <= nc < self.size and not self.used[nr][nc]:
                out.append((nr, nc))
        return out

    def pick_seed(self) -> Cell | None:
        """A random unused cell, or the first unused one once probing gives up."""
        for _ in range(self.seed_attempts * self.size * self.size):
            r = self.rng.randrange(self.size)
            c = self.rng.randrange(self.size)
            if not self.used[r][c]:
                return r, c
        for r in range(self.size):
            for c in range(self.size):
                if not self.used[r][c]:
                    return r, c
        return None

    def take(self, cells: List[Cell], taken: set[int], cell: Cell) -> None:
        r, c = cell
        self.used[r][c] = True
        cells.append(cell)
        taken.add(self.solution[r][c])

    def grow(self, seed: Cell, target: int) -> tuple[List[Cell], set[int]]:
        cells: List[Cell] = []
        taken: set[int] = set()
        frontier = [seed]
        while frontier and len(cells) < target:
            r, c = frontier.pop(self.rng.randrange(len(frontier)))
            if self.used[r][c] or self.solution[r][c] in taken:
                continue
            self.take(cells, taken, (r, c))
            frontier.extend(self.free_neighbours(r, c))
        return cells, taken

    def extend_once(self, cells: List[Cell], taken: set[int]) -> bool:
        """Add one unused neighbouring cell whose digit is new to the cage."""
        border = [n for r, c in cells for n in self.free_neighbours(r, c)]
        self.rng.shuffle(border)
        for r, c in border:
            if self.solution[r][c] not in taken:
                self.take(cells, taken, (r, c))
                return True
        return False


def _target_sampler(min_size: int, max_size: int, difficulty: str, rng: random.Random):
    sizes = list(range(min_size, max_size + 1))
    table = CAGE_SIZE_WEIGHTS.get(difficulty, {})
    weights = [table.get(k, 1.0) for k in sizes]
    return lambda: rng.choices(sizes, weights=weights)[0]


def generate_cages(
    solution: Sequence[Sequence[int]] | np.ndarray,
    min_size: int = 2,
    max_size: int = 4,
    rng: random.Random | None = None,
    *,
    difficulty: str = "hard",
    seed_attempts: int | None = None,
    avoid_easy_pair_sums: bool = False,
) -> List[Cage]:
    """
    Partition a solved grid into connected cages with distinct digits.

    Seeds are random unused cells. Each cage grows by popping random cells
    off a frontier of unused neighbours, skipping cells whose digit is
    already in the cage, until it reaches a random target size in
    [min_size, max_size]. A cage stuck at one cell gets one forced merge
    attempt. Every iteration consumes at least the seed, so the loop ends
    with every cell in exactly one cage.

    Args:
        solution: Completely filled valid grid.
        min_size: Smallest target cage size.
        max_size: Largest target cage size.
        rng: Random source; a fresh unseeded one if None.
        difficulty: Biases target sizes ("easy", "medium" or "hard").
        seed_attempts: Random probes per cell before scanning for a seed.
        avoid_easy_pair_sums: Extend 9×9 pairs summing to 3, 4, 16 or 17
            by one cell when the cage is still below `max_size`.

    Returns:
        Cages in creation order with ids starting at 1.
    """
    if min_size < 1 or max_size < min_size:
        raise ValueError(
            f"cage sizes must satisfy 1 <= min_size <= max_size; got {min_size}, {max_size}"
        )
    rng = rng or random.Random()
    cells_grid = as_grid(solution).tolist()
    if seed_attempts is None:
        seed_attempts = DEFAULT_SEED_ATTEMPTS.get(difficulty, 4)
    grower = _CageGrower(cells_grid, rng, seed_attempts)
    sample_target = _target_sampler(min_size, max_size, difficulty, rng)

    cages: List[Cage] = []
    while True:
        seed = grower.pick_seed()
        if seed is None:
            break
        cells, taken = grower.grow(seed, sample_target())

        if len(cells) == 1 and min_size > 1:
            grower.extend_once(cells, taken)

        if avoid_easy_pair_sums and grower.size == 9 and len(cells) == 2 and max_size > 2:
            if sum(taken) in EASY_PAIR_SUMS:
                grower.extend_once(cells, taken)

        total = sum(cells_grid[r][c] for r, c in cells)
        cages.append(Cage(id=len(cages) + 1, sum=total, cells=cells))
    return cages


def cage_map(cages: Sequence[Cage], size: int) -> np.ndarray:
    """Grid of cage ids (0 where no cage covers a cell)."""
    ids = np.zeros((size, size), dtype=np.int64)
    for cage in cages:
        for r, c in cage.cells:
            ids[r, c] = cage.id
    return ids


def _is_connected(cells: Sequence[Cell]) -> bool:
    remaining = set(cells)
    if not remaining:
        return False
    queue = deque([next(iter(remaining))])
    remaining.discard(queue[0])
    while queue:
        r, c = queue.popleft()
        for dr, dc in _NEIGHBOURS:
            n = (r + dr, c + dc)
            if n in remaining:
                remaining.discard(n)
                queue.append(n)
    return not remaining


def validate_cages(cages: Sequence[Cage], solution: Sequence[Sequence[int]] | np.ndarray) -> List[str]:
    """Describe every broken cage invariant; an empty list means the cages are sound."""
    grid = as_grid(solution)
    size = int(grid.shape[0])
    problems: List[str] = []
    owner: Dict[Cell, int] = {}
    for cage in cages:
        digits = [int(grid[r, c]) for r, c in cage.cells]
        if len(set(digits)) != len(digits):
            problems.append(f"cage {cage.id} repeats a digit")
        if sum(digits) != cage.sum:
            problems.append(f"cage {cage.id} sum is {cage.sum}, cells add to {sum(digits)}")
        if not _is_connected(cage.cells):
            problems.append(f"cage {cage.id} is not connected")
        for cell in cage.cells:
            if cell in owner:
                problems.append(f"cell {cell} is in cages {owner[cell]} and {cage.id}")
            owner[cell] = cage.id
    missing = size * size - len(owner)
    if missing:
        problems.append(f"{missing} cells are not in any cage")
    return problems


def place_givens(
    cages: Sequence[Cage],
    solution: Sequence[Sequence[int]] | np.ndarray,
    count: int,
    symmetric: bool = True,
) -> np.ndarray:
    """
    Reveal up to `count` solution digits, preferring cells of larger cages.

    With `symmetric`, cells are revealed in 180-degree pairs, and a pair is
    skipped if it would reveal both cells of a two-cell cage.
    """
    grid = as_grid(solution)
    size = int(grid.shape[0])
    givens = np.zeros_like(grid)
    if count <= 0:
        return givens

    ids = cage_map(cages, size)
    by_id = {cage.id: cage for cage in cages}
    order = sorted(
        ((r, c) for r in range(size) for c in range(size)),
        key=lambda cell: -len(by_id[int(ids[cell])].cells),
    )
    selected: Dict[Cell, None] = {}

    def completes_pair(cell: Cell, other_new: Cell) -> bool:
        cage = by_id[int(ids[cell])]
        if len(cage.cells) != 2:
            return False
        other = cage.cells[0] if cage.cells[1] == cell else cage.cells[1]
        return other in selected or other == other_new

    for cell in order:
        if len(selected) >= count:
            break
        if cell in selected:
            continue
        if not symmetric:
            selected[cell] = None
            continue
        mirror = (size - 1 - cell[0], size - 1 - cell[1])
        if completes_pair(cell, mirror) or completes_pair(mirror, cell):
            continue
        selected[cell] = None
        selected[mirror] = None

    for r, c in list(selected)[:count]:
        givens[r, c] = grid[r, c]
    return givens


def generate_killer_sudoku(
    options: KillerOptions | None = None,
    *,
    rng: random.Random | None = None,
    config: EngineConfig | None = None,
) -> KillerPuzzle:
    """
    Generate a Killer Sudoku over a fresh solved grid.

    The grid comes from :func:`generate_sudoku` at the easiest tier with
    calibration disabled; only its solution is used.

    Args:
        options: Cage sizes, difficulty, givens and reproducibility options.
        rng: Random source; takes precedence over ``options.seed``.
        config: Engine configuration; defaults if None.

    Raises:
        ValueError: For an unsupported size or difficulty.
    """
    options = options or KillerOptions()
    defaults = (config or EngineConfig()).killer

    def pick(value, fallback):
        return fallback if value is None else value

    size = pick(options.size, defaults.size)
    if size not in SUPPORTED_SIZES:
        raise ValueError(f"size must be one of {SUPPORTED_SIZES}; got {size}")
    difficulty = pick(options.difficulty, defaults.difficulty)
    if difficulty not in CAGE_SIZE_WEIGHTS:
        raise ValueError(
            f"difficulty must be one of {tuple(CAGE_SIZE_WEIGHTS)}; got {difficulty!r}"
        )
    min_cage = max(2, pick(options.min_cage, defaults.min_cage))
    max_cage = max(min_cage, pick(options.max_cage, defaults.max_cage))
    seed_attempts = pick(
        options.seed_attempts,
        pick(defaults.seed_attempts, DEFAULT_SEED_ATTEMPTS[difficulty]),
    )
    avoid = pick(
        options.avoid_easy_pair_sums,
        pick(defaults.avoid_easy_pair_sums, difficulty != "easy"),
    )
    if rng is None:
        rng = random.Random(options.seed)

    preset = "16x16" if size == 16 else "easy"
    base = generate_sudoku(
        preset, SudokuOptions(ensure_difficulty=False), rng=rng, config=config
    )
    solution = np.array(base.solution)

    cages = generate_cages(
        solution,
        min_cage,
        max_cage,
        rng,
        difficulty=difficulty,
        seed_attempts=seed_attempts,
        avoid_easy_pair_sums=avoid,
    )
    givens = place_givens(
        cages,
        solution,
        pick(options.base_numbers_count, defaults.base_numbers_count),
        pick(options.symmetric_givens, defaults.symmetric_givens),
    )
    logger.info(f"Generated {size}x{size} killer puzzle with {len(cages)} cages")
    return KillerPuzzle(size=size, cages=cages, solution=solution, givens=givens)
