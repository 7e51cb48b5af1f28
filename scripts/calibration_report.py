"""Measure how well generated puzzles hit their difficulty targets."""

import argparse
import json
import random
import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))
from sudoku_engine.difficulty import DIFFICULTIES, settings_for
from sudoku_engine.logging_utils import get_logger
from sudoku_engine.puzzle import SudokuOptions, generate_sudoku


def summarize(difficulty: str, num_puzzles: int, rng: random.Random, max_attempts: int | None) -> dict[str, Any]:
    """Generate `num_puzzles` puzzles of one tier and aggregate their stats."""
    settings = settings_for(difficulty, max_attempts=max_attempts)
    clues, coverages, attempts = [], [], []
    fallbacks = 0
    for _ in tqdm(range(num_puzzles), desc=difficulty):
        puzzle = generate_sudoku(difficulty, SudokuOptions(max_attempts=max_attempts), rng=rng)
        clues.append(puzzle.clue_count)
        coverages.append(puzzle.logic_coverage)
        attempts.append(puzzle.attempts)
        if not puzzle.calibrated:
            fallbacks += 1

    lo, hi = settings.clue_range
    return {
        "difficulty": difficulty,
        "clue_range": [lo, hi],
        "coverage_goal": settings.coverage_goal,
        "mean_clues": sum(clues) / num_puzzles,
        "out_of_range": sum(1 for n in clues if not lo <= n <= hi),
        "mean_coverage": sum(coverages) / num_puzzles,
        "coverages": coverages,
        "mean_attempts": sum(attempts) / num_puzzles,
        "fallback_rate": fallbacks / num_puzzles,
    }


def plot_coverage(results: list[dict[str, Any]], output_path: Path) -> None:
    """Box plot of logic coverage per tier, with each tier's goal marked."""
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(figsize=(10, 6))
    labels = [r["difficulty"] for r in results]
    ax.boxplot([r["coverages"] for r in results])
    ax.set_xticks(range(1, len(labels) + 1), labels)
    for i, r in enumerate(results, start=1):
        ax.hlines(r["coverage_goal"], i - 0.4, i + 0.4, colors="red", linestyles="--")
    ax.set_ylabel("Logic coverage")
    ax.set_ylim(0, 1.05)
    ax.set_title("Logic coverage by difficulty (dashed: goal)")
    ax.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches="tight")
    plt.close()


def main():
    parser = argparse.ArgumentParser(description="Difficulty calibration report")
    parser.add_argument("--difficulties", type=str, nargs="+", default=list(DIFFICULTIES[:-1]), choices=DIFFICULTIES)
    parser.add_argument("--num-puzzles", type=int, default=20, help="Puzzles per difficulty")
    parser.add_argument("--max-attempts", type=int, default=None)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--save-json", type=str, default="calibration.json", help="Path to save results JSON")
    parser.add_argument("--plot", type=str, default=None, help="Path to save a coverage plot (PNG)")
    args = parser.parse_args()

    get_logger("sudoku_engine", "WARNING")
    rng = random.Random(args.seed)
    results = [summarize(d, args.num_puzzles, rng, args.max_attempts) for d in args.difficulties]

    for r in results:
        print(
            f"{r['difficulty']:>8}: clues {r['mean_clues']:.1f} "
            f"(out of range {r['out_of_range']}), coverage {r['mean_coverage']:.2f} "
            f"(goal {r['coverage_goal']:.2f}), attempts {r['mean_attempts']:.1f}, "
            f"fallback {r['fallback_rate']:.0%}"
        )

    out = Path(args.save_json)
    out.parent.mkdir(parents=True, exist_ok=True)
    with open(out, "w") as f:
        json.dump(results, f, indent=2)
    print(f"Results saved to {out}")

    if args.plot:
        plot_coverage(results, Path(args.plot))
        print(f"Plot saved to {args.plot}")


if __name__ == "__main__":
    main()
