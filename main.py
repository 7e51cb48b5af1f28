#!/usr/bin/env python3
"""
Command-line entry point for the puzzle engine.

Generates classic and Killer Sudoku puzzles, and checks puzzles given as
text for uniqueness and logic coverage.
"""

import argparse
import json
import random
import sys
from pathlib import Path

from tqdm import tqdm

from sudoku_engine.config import EngineConfig, load_config
from sudoku_engine.difficulty import DIFFICULTIES
from sudoku_engine.formatting import grid_to_string, parse_grid
from sudoku_engine.generator import SYMMETRIES
from sudoku_engine.killer import KillerOptions, cage_map, generate_killer_sudoku
from sudoku_engine.logging_utils import get_logger
from sudoku_engine.puzzle import SudokuOptions, generate_sudoku, is_uniquely_solvable
from sudoku_engine.rating import rate_logic
from sudoku_engine.solver import solve

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def run_sudoku(args: argparse.Namespace, config: EngineConfig) -> int:
    """Generate `args.count` classic puzzles and print or save them."""
    rng = random.Random(args.seed)
    options = SudokuOptions(
        symmetry=args.symmetry,
        ensure_difficulty=False if args.no_ensure_difficulty else None,
        max_attempts=args.max_attempts,
    )
    iterator = range(args.count)
    if args.count > 1:
        iterator = tqdm(iterator, desc=f"Generating {args.difficulty}")

    puzzles = [
        generate_sudoku(args.difficulty, options, rng=rng, config=config)
        for _ in iterator
    ]

    if args.output:
        path = Path(args.output)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            for puzzle in puzzles:
                f.write(json.dumps(puzzle.to_dict()) + "\n")
        print(f"Wrote {len(puzzles)} puzzles to {path}")
        return 0

    for puzzle in puzzles:
        print(
            f"# {puzzle.difficulty} | clues {puzzle.clue_count} | "
            f"coverage {puzzle.logic_coverage:.2f}"
        )
        print(grid_to_string(puzzle.puzzle))
        print()
    return 0


def run_killer(args: argparse.Namespace, config: EngineConfig) -> int:
    """Generate one Killer puzzle and print or save it."""
    options = KillerOptions(
        size=args.size,
        min_cage=args.min_cage,
        max_cage=args.max_cage,
        difficulty=args.difficulty,
        base_numbers_count=args.givens,
        seed=args.seed,
    )
    puzzle = generate_killer_sudoku(options, config=config)

    if args.output:
        path = Path(args.output)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(puzzle.to_dict(), f, indent=2)
        print(f"Wrote killer puzzle to {path}")
        return 0

    ids = cage_map(puzzle.cages, puzzle.size)
    width = len(str(len(puzzle.cages)))
    print(f"# {puzzle.size}x{puzzle.size} killer | {len(puzzle.cages)} cages")
    for row in ids:
        print(" ".join(str(int(v)).rjust(width) for v in row))
    print()
    for cage in puzzle.cages:
        cells = " ".join(f"r{r + 1}c{c + 1}" for r, c in cage.cells)
        print(f"cage {cage.id}: sum {cage.sum} | {cells}")
    return 0


def run_check(args: argparse.Namespace) -> int:
    """Report uniqueness, logic coverage and a solution for a given puzzle."""
    try:
        is_file = Path(args.puzzle).is_file()
    except OSError:
        is_file = False
    grid = parse_grid(Path(args.puzzle).read_text() if is_file else args.puzzle)

    unique = is_uniquely_solvable(grid)
    coverage = rate_logic(grid)
    print(f"Unique solution: {'yes' if unique else 'no'}")
    print(f"Logic coverage: {coverage:.2f}")

    solution = solve(grid, rng=random.Random(0))
    if solution is None:
        print("No solution")
    else:
        print(grid_to_string(solution))
    return 0 if unique else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate and check Sudoku and Killer Sudoku puzzles",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML config file",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: from config, INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sudoku = subparsers.add_parser("sudoku", help="Generate classic puzzles")
    sudoku.add_argument(
        "--difficulty",
        type=str,
        choices=DIFFICULTIES,
        default="medium",
        help="Difficulty tier (default: medium)",
    )
    sudoku.add_argument(
        "--symmetry",
        type=str,
        choices=SYMMETRIES,
        default=None,
        help="Clue symmetry (default: from config, central)",
    )
    sudoku.add_argument("--count", type=int, default=1, help="Number of puzzles")
    sudoku.add_argument(
        "--no-ensure-difficulty",
        action="store_true",
        help="Accept the first attempt regardless of logic coverage",
    )
    sudoku.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Attempt budget before falling back (default: 25, or 60 for 16x16)",
    )
    sudoku.add_argument("--seed", type=int, default=None, help="Random seed")
    sudoku.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write puzzles as JSON lines to this path",
    )

    killer = subparsers.add_parser("killer", help="Generate a Killer puzzle")
    killer.add_argument("--size", type=int, choices=(9, 16), default=None)
    killer.add_argument("--min-cage", type=int, default=None)
    killer.add_argument("--max-cage", type=int, default=None)
    killer.add_argument(
        "--difficulty",
        type=str,
        choices=("easy", "medium", "hard"),
        default=None,
        help="Biases cage sizes (default: from config, hard)",
    )
    killer.add_argument(
        "--givens",
        type=int,
        default=None,
        help="Number of solution digits to reveal (default: 0)",
    )
    killer.add_argument("--seed", type=int, default=None, help="Random seed")
    killer.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the puzzle as JSON to this path",
    )

    check = subparsers.add_parser("check", help="Check a puzzle for uniqueness")
    check.add_argument(
        "puzzle",
        type=str,
        help="Puzzle text (81 or 256 symbols, 0 or . for blanks) or a file containing it",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    log_file = Path(config.logging.log_file) if config.logging.log_file else None

    try:
        get_logger("sudoku_engine", args.log_level or config.logging.level, log_file)
        if args.command == "sudoku":
            return run_sudoku(args, config)
        if args.command == "killer":
            return run_killer(args, config)
        return run_check(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
