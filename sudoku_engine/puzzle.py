"""Puzzle assembly: solved grid -> dig -> rate, retried until calibrated."""

import logging
import random
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from .config import EngineConfig
from .difficulty import DifficultySettings, settings_for
from .generator import check_symmetry, dig, generate_solved, is_symmetric
from .grid import SUPPORTED_SIZES, count_filled, validate_grid
from .rating import rate_logic
from .solver import count_solutions

logger = logging.getLogger(__name__)


@dataclass
class SudokuOptions:
    """Per-call options for :func:`generate_sudoku`.

    Fields left as None fall back to the generator configuration.
    """

    symmetry: str | None = None  # "none", "central" or "diagonal"
    ensure_difficulty: bool | None = None
    max_attempts: int | None = None
    seed: int | None = None


@dataclass(frozen=True)
class GeneratedPuzzle:
    """A uniquely solvable puzzle together with its solution.

    The grids are read-only; callers that fill cells should work on
    ``puzzle.copy()``.
    """

    puzzle: np.ndarray
    solution: np.ndarray
    size: int
    difficulty: str
    logic_coverage: float
    symmetry: str = "central"
    symmetric: bool = True
    attempts: int = 1
    calibrated: bool = True

    def __post_init__(self) -> None:
        self.puzzle.setflags(write=False)
        self.solution.setflags(write=False)

    @property
    def clue_count(self) -> int:
        return count_filled(self.puzzle)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation using the external field names."""
        return {
            "puzzle": self.puzzle.tolist(),
            "solution": self.solution.tolist(),
            "size": self.size,
            "difficulty": self.difficulty,
            "logicCoverage": self.logic_coverage,
            "symmetry": self.symmetry,
            "symmetric": self.symmetric,
            "clues": self.clue_count,
        }


def _attempt(
    settings: DifficultySettings,
    symmetry: str,
    rng: random.Random,
) -> tuple[np.ndarray, np.ndarray, float]:
    solution = generate_solved(settings.size, rng)
    lo, hi = settings.clue_range
    target = rng.randint(lo, hi)
    puzzle = dig(solution, target, symmetry=symmetry, rng=rng)
    coverage = rate_logic(puzzle)
    logger.debug(
        f"{settings.name}: target {target} clues, got {count_filled(puzzle)}, "
        f"coverage {coverage:.2f}"
    )
    return puzzle, solution, coverage


def generate_sudoku(
    difficulty: str = "medium",
    options: SudokuOptions | None = None,
    *,
    rng: random.Random | None = None,
    config: EngineConfig | None = None,
) -> GeneratedPuzzle:
    """
    Generate a uniquely solvable puzzle calibrated to a difficulty tier.

    Each attempt builds a fresh solved grid, digs it down to a random clue
    count inside the tier's range and rates its logic coverage. The first
    attempt meeting the coverage goal is returned. If none does within the
    attempt budget, one more unconditional attempt is returned instead.

    Args:
        difficulty: "easy", "medium", "hard", "expert", "extreme" or "16x16".
        options: Symmetry, calibration and reproducibility options.
        rng: Random source; takes precedence over ``options.seed``.
        config: Engine configuration; defaults if None.

    Returns:
        The generated puzzle.

    Raises:
        ValueError: For an unknown difficulty or symmetry.
    """
    options = options or SudokuOptions()
    gen_config = (config or EngineConfig()).generator
    settings = settings_for(difficulty, gen_config, options.max_attempts)
    symmetry = check_symmetry(options.symmetry or gen_config.symmetry)
    ensure = (
        gen_config.ensure_difficulty
        if options.ensure_difficulty is None
        else options.ensure_difficulty
    )
    if rng is None:
        rng = random.Random(options.seed)

    def build(puzzle: np.ndarray, solution: np.ndarray, coverage: float, attempts: int) -> GeneratedPuzzle:
        return GeneratedPuzzle(
            puzzle=puzzle,
            solution=solution,
            size=settings.size,
            difficulty=difficulty,
            logic_coverage=round(coverage, 2),
            symmetry=symmetry,
            symmetric=is_symmetric(puzzle, symmetry),
            attempts=attempts,
            calibrated=coverage >= settings.coverage_goal,
        )

    for attempt in range(1, settings.max_attempts + 1):
        puzzle, solution, coverage = _attempt(settings, symmetry, rng)
        if not ensure or coverage >= settings.coverage_goal:
            logger.info(
                f"Generated {difficulty} puzzle: {count_filled(puzzle)} clues, "
                f"coverage {coverage:.2f} (attempt {attempt})"
            )
            return build(puzzle, solution, coverage, attempt)

    puzzle, solution, coverage = _attempt(settings, symmetry, rng)
    logger.warning(
        f"Coverage goal {settings.coverage_goal:.2f} for {difficulty} not met in "
        f"{settings.max_attempts} attempts; returning fallback with coverage {coverage:.2f}"
    )
    return build(puzzle, solution, coverage, settings.max_attempts + 1)


def is_uniquely_solvable(grid: Sequence[Sequence[int]] | np.ndarray) -> bool:
    """True if `grid` is a 9×9 or 16×16 puzzle with exactly one solution.

    Malformed input (other sizes, ragged rows, out-of-range values) yields
    False rather than an error.
    """
    try:
        g = np.asarray(grid, dtype=np.int64)
    except (TypeError, ValueError):
        return False
    if g.ndim != 2 or g.shape[0] != g.shape[1] or g.shape[0] not in SUPPORTED_SIZES:
        return False
    try:
        return count_solutions(validate_grid(g), limit=2) == 1
    except ValueError:
        return False
