"""Difficulty tiers and their calibration targets."""

from dataclasses import dataclass
from typing import Literal

from .config import GeneratorConfig

Difficulty = Literal["easy", "medium", "hard", "expert", "extreme", "16x16"]

DIFFICULTIES: tuple[str, ...] = ("easy", "medium", "hard", "expert", "extreme", "16x16")


@dataclass(frozen=True)
class DifficultySettings:
    """Calibration targets for one difficulty tier."""

    name: str
    size: int
    clue_range: tuple[int, int]
    coverage_goal: float
    max_attempts: int


def size_for(difficulty: str) -> int:
    return 16 if difficulty == "16x16" else 9


def settings_for(
    difficulty: str,
    config: GeneratorConfig | None = None,
    max_attempts: int | None = None,
) -> DifficultySettings:
    """
    Resolve the clue range, coverage goal and attempt budget of a tier.

    Args:
        difficulty: One of DIFFICULTIES.
        config: Generator configuration; defaults if None.
        max_attempts: Explicit attempt budget, clamped to at least 1.

    Raises:
        ValueError: If `difficulty` is not a known tier.
    """
    if difficulty not in DIFFICULTIES:
        raise ValueError(f"difficulty must be one of {DIFFICULTIES}; got {difficulty!r}")
    config = config or GeneratorConfig()
    size = size_for(difficulty)
    if max_attempts is None:
        max_attempts = config.max_attempts_16 if size == 16 else config.max_attempts_9
    lo, hi = config.clue_ranges[difficulty]
    return DifficultySettings(
        name=difficulty,
        size=size,
        clue_range=(min(lo, hi), max(lo, hi)),
        coverage_goal=config.coverage_goals[difficulty],
        max_attempts=max(1, max_attempts),
    )


def parse_difficulty(label: str | None) -> str:
    """Map a UI label to a difficulty tier, falling back to "medium"."""
    value = str(label if label is not None else "medium").strip().lower()
    if value in DIFFICULTIES:
        return value
    return "medium"
