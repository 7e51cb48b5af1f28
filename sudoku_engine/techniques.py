"""Single-placement techniques: naked singles and hidden singles.

These are the only deductions the logic rater uses, and the same routines
back the hint finders offered to the interactive board.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .grid import CandidateMasks, Cell, grid_units, mask_to_values

NAKED_SINGLE = "naked_single"
HIDDEN_SINGLE_ROW = "hidden_single_row"
HIDDEN_SINGLE_COL = "hidden_single_col"
HIDDEN_SINGLE_BOX = "hidden_single_box"

HIDDEN_SINGLE_BY_UNIT = {
    "row": HIDDEN_SINGLE_ROW,
    "col": HIDDEN_SINGLE_COL,
    "box": HIDDEN_SINGLE_BOX,
}


@dataclass(frozen=True)
class Hint:
    """A forced placement: `value` goes in (`row`, `col`) by `technique`."""

    row: int
    col: int
    value: int
    technique: str


def naked_single_at(cells: List[List[int]], masks: CandidateMasks, r: int, c: int) -> int:
    """The only candidate of empty cell (r, c), or 0 if there is not exactly one."""
    if cells[r][c]:
        return 0
    allowed = masks.allowed(r, c)
    if allowed and not allowed & (allowed - 1):
        return allowed.bit_length()
    return 0


def sole_cell_for(
    cells: List[List[int]],
    masks: CandidateMasks,
    unit: Sequence[Cell],
    value: int,
) -> Cell | None:
    """The single empty cell of `unit` that can still take `value`, if exactly one."""
    spot = None
    for r, c in unit:
        if cells[r][c] == 0 and masks.allows(r, c, value):
            if spot is not None:
                return None
            spot = (r, c)
    return spot


def missing_values(cells: List[List[int]], unit: Sequence[Cell], full: int) -> List[int]:
    present = 0
    for r, c in unit:
        v = cells[r][c]
        if v:
            present |= 1 << (v - 1)
    return mask_to_values(full & ~present)


def _working_state(grid: np.ndarray) -> Tuple[List[List[int]], CandidateMasks]:
    cells = np.asarray(grid).tolist()
    return cells, CandidateMasks(cells)


def find_naked_single(grid: np.ndarray, prefer: Cell | None = None) -> Hint | None:
    """First empty cell with exactly one candidate, checking `prefer` first."""
    cells, masks = _working_state(grid)
    if prefer is not None:
        r, c = prefer
        v = naked_single_at(cells, masks, r, c)
        if v:
            return Hint(r, c, v, NAKED_SINGLE)
    for r in range(masks.size):
        for c in range(masks.size):
            v = naked_single_at(cells, masks, r, c)
            if v:
                return Hint(r, c, v, NAKED_SINGLE)
    return None


def find_hidden_single(grid: np.ndarray) -> Hint | None:
    """First digit with a single legal cell in a row, then column, then box."""
    cells, masks = _working_state(grid)
    for kind, unit in grid_units(masks.size):
        for v in missing_values(cells, unit, masks.full):
            spot = sole_cell_for(cells, masks, unit, v)
            if spot is not None:
                return Hint(spot[0], spot[1], v, HIDDEN_SINGLE_BY_UNIT[kind])
    return None


def next_hint(grid: np.ndarray, prefer: Cell | None = None) -> Hint | None:
    """A naked single if one exists, otherwise a hidden single."""
    return find_naked_single(grid, prefer=prefer) or find_hidden_single(grid)
