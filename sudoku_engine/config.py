"""Configuration management for the puzzle engine."""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

import yaml

# Inclusive clue-count ranges per difficulty. 16x16 has a single tier.
DEFAULT_CLUE_RANGES: dict[str, tuple[int, int]] = {
    "easy": (36, 45),
    "medium": (32, 35),
    "hard": (28, 31),
    "expert": (24, 27),
    "extreme": (22, 23),
    "16x16": (115, 155),
}

# Share of blank cells that singles / hidden singles must resolve.
DEFAULT_COVERAGE_GOALS: dict[str, float] = {
    "easy": 1.0,
    "medium": 0.75,
    "hard": 0.5,
    "expert": 0.35,
    "extreme": 0.2,
    "16x16": 0.35,
}


@dataclass
class GeneratorConfig:
    """Classic Sudoku generation configuration."""

    clue_ranges: dict[str, tuple[int, int]] = field(
        default_factory=lambda: dict(DEFAULT_CLUE_RANGES)
    )
    coverage_goals: dict[str, float] = field(
        default_factory=lambda: dict(DEFAULT_COVERAGE_GOALS)
    )
    max_attempts_9: int = 25
    max_attempts_16: int = 60
    symmetry: str = "central"
    ensure_difficulty: bool = True

    def __post_init__(self) -> None:
        # Partial tables (e.g. from YAML) only override the tiers they name
        self.clue_ranges = {
            **DEFAULT_CLUE_RANGES,
            **{k: (int(v[0]), int(v[1])) for k, v in self.clue_ranges.items()},
        }
        self.coverage_goals = {
            **DEFAULT_COVERAGE_GOALS,
            **{k: float(v) for k, v in self.coverage_goals.items()},
        }


@dataclass
class KillerConfig:
    """Killer Sudoku generation configuration."""

    size: int = 9
    min_cage: int = 2
    max_cage: int = 4
    difficulty: str = "hard"
    seed_attempts: int | None = None  # None = derived from difficulty
    base_numbers_count: int = 0  # 0 = classic killer, no givens
    symmetric_givens: bool = True
    avoid_easy_pair_sums: bool | None = None  # None = on unless difficulty is easy


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    log_file: str | None = None


@dataclass
class EngineConfig:
    """Complete engine configuration."""

    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    killer: KillerConfig = field(default_factory=KillerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "EngineConfig":
        """Load configuration from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            raw = yaml.safe_load(f) or {}

        return cls.from_dict(raw)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EngineConfig":
        """Create configuration from a dictionary."""
        config = cls()

        if "generator" in data:
            config.generator = GeneratorConfig(**data["generator"])

        if "killer" in data:
            config.killer = KillerConfig(**data["killer"])

        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a plain dictionary (YAML-safe)."""
        generator = asdict(self.generator)
        generator["clue_ranges"] = {
            k: list(v) for k, v in self.generator.clue_ranges.items()
        }
        return {
            "generator": generator,
            "killer": asdict(self.killer),
            "logging": asdict(self.logging),
        }

    def save(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


def load_config(path: str | Path | None = None) -> EngineConfig:
    """
    Load configuration from file or return defaults.

    Args:
        path: Path to YAML config file. If None, returns default config.

    Returns:
        Configuration object.
    """
    if path is None:
        return EngineConfig()
    return EngineConfig.from_yaml(path)


def merge_configs(base: EngineConfig, overrides: dict[str, Any]) -> EngineConfig:
    """
    Merge override values into a base configuration.

    Args:
        base: Base configuration.
        overrides: Dictionary of override values.

    Returns:
        New configuration with overrides applied.
    """
    base_dict = base.to_dict()

    for key, value in overrides.items():
        if isinstance(value, dict) and key in base_dict:
            base_dict[key].update(value)
        else:
            base_dict[key] = value

    return EngineConfig.from_dict(base_dict)
