"""
sudoku-engine: puzzle generation and solving for Sudoku and Killer Sudoku.

Builds solved grids, digs them down to uniquely solvable puzzles, calibrates
difficulty by how much falls to simple logic, and partitions solutions into
Killer cages.
"""

from sudoku_engine.config import EngineConfig, load_config, merge_configs
from sudoku_engine.difficulty import DIFFICULTIES, parse_difficulty
from sudoku_engine.generator import dig, generate_solved, is_symmetric
from sudoku_engine.grid import candidates, has_conflict
from sudoku_engine.killer import (
    Cage,
    KillerOptions,
    KillerPuzzle,
    generate_cages,
    generate_killer_sudoku,
)
from sudoku_engine.logging_utils import get_logger
from sudoku_engine.puzzle import (
    GeneratedPuzzle,
    SudokuOptions,
    generate_sudoku,
    is_uniquely_solvable,
)
from sudoku_engine.rating import analyze_logic, rate_logic
from sudoku_engine.solver import count_solutions, has_unique_solution, solve
from sudoku_engine.techniques import Hint, next_hint

__version__ = "0.1.0"
__all__ = [
    # Config
    "EngineConfig",
    "load_config",
    "merge_configs",
    "get_logger",
    # Oracle
    "candidates",
    "has_conflict",
    # Classic
    "DIFFICULTIES",
    "GeneratedPuzzle",
    "SudokuOptions",
    "generate_sudoku",
    "is_uniquely_solvable",
    "parse_difficulty",
    "generate_solved",
    "dig",
    "is_symmetric",
    # Solving and rating
    "solve",
    "count_solutions",
    "has_unique_solution",
    "rate_logic",
    "analyze_logic",
    "Hint",
    "next_hint",
    # Killer
    "Cage",
    "KillerOptions",
    "KillerPuzzle",
    "generate_cages",
    "generate_killer_sudoku",
]
