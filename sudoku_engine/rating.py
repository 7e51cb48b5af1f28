"""Logic-coverage rating: how much of a puzzle falls to singles alone."""

from dataclasses import dataclass

import numpy as np

from .grid import CandidateMasks, as_grid, grid_units
from .techniques import missing_values, naked_single_at, sole_cell_for


@dataclass
class LogicReport:
    """Outcome of solving a puzzle with naked and hidden singles only."""

    coverage: float
    filled_by_logic: int
    blanks: int
    passes: int
    grid: np.ndarray

    @property
    def stalled(self) -> bool:
        """True if logic left some cells empty."""
        return self.filled_by_logic < self.blanks


def analyze_logic(puzzle: np.ndarray) -> LogicReport:
    """
    Fill every cell forced by naked or hidden singles until nothing changes.

    Each pass sweeps naked singles over the whole grid, then hidden singles
    per row, per column and per box. Works on a copy; `puzzle` is untouched.

    Args:
        puzzle: Square grid with 0 for empty cells.

    Returns:
        LogicReport with coverage = filled_by_logic / blanks (1.0 when the
        puzzle has no blanks).
    """
    cells = as_grid(puzzle).tolist()
    masks = CandidateMasks(cells)
    size = masks.size
    units = grid_units(size)
    blanks = sum(1 for row in cells for v in row if v == 0)

    filled = 0
    passes = 0
    progress = True
    while progress:
        progress = False
        passes += 1

        for r in range(size):
            for c in range(size):
                v = naked_single_at(cells, masks, r, c)
                if v:
                    cells[r][c] = v
                    masks.place(r, c, v)
                    filled += 1
                    progress = True

        for _, unit in units:
            for v in missing_values(cells, unit, masks.full):
                spot = sole_cell_for(cells, masks, unit, v)
                if spot is None:
                    continue
                r, c = spot
                cells[r][c] = v
                masks.place(r, c, v)
                filled += 1
                progress = True

    coverage = 1.0 if blanks == 0 else filled / blanks
    return LogicReport(
        coverage=coverage,
        filled_by_logic=filled,
        blanks=blanks,
        passes=passes,
        grid=np.array(cells, dtype=np.int64),
    )


def rate_logic(puzzle: np.ndarray) -> float:
    """Fraction of the puzzle's blank cells solvable by singles alone."""
    return analyze_logic(puzzle).coverage
