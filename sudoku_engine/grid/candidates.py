"""Candidate and conflict queries over a grid snapshot.

Row, column and box occupancy is tracked as bitmasks: bit ``v - 1`` set means
digit ``v`` is already used in that unit. :class:`CandidateMasks` is shared by
the solver, the logic rater and the hint finders so every consumer computes
candidates the same way.
"""

from typing import List, Sequence, Set, Tuple

import numpy as np

from .base import box_size_for


def mask_to_values(mask: int) -> List[int]:
    """Digits whose bits are set in `mask`, ascending."""
    values = []
    while mask:
        low = mask & -mask
        values.append(low.bit_length())
        mask ^= low
    return values


class CandidateMasks:
    """Occupancy bitmasks for every row, column and box of a grid."""

    __slots__ = ("size", "box", "full", "rows", "cols", "boxes", "conflicted")

    def __init__(self, cells: Sequence[Sequence[int]]):
        self.size = len(cells)
        self.box = box_size_for(self.size)
        self.full = (1 << self.size) - 1
        self.rows = [0] * self.size
        self.cols = [0] * self.size
        self.boxes = [0] * self.size
        self.conflicted = False
        for r, row in enumerate(cells):
            for c, v in enumerate(row):
                if not v:
                    continue
                bit = 1 << (v - 1)
                b = self.box_index(r, c)
                if (self.rows[r] | self.cols[c] | self.boxes[b]) & bit:
                    self.conflicted = True
                self.rows[r] |= bit
                self.cols[c] |= bit
                self.boxes[b] |= bit

    @classmethod
    def from_grid(cls, grid: np.ndarray) -> "CandidateMasks":
        return cls(np.asarray(grid).tolist())

    def box_index(self, r: int, c: int) -> int:
        return (r // self.box) * self.box + c // self.box

    def allowed(self, r: int, c: int) -> int:
        """Bitmask of digits not yet used in the row, column or box of (r, c)."""
        return self.full & ~(self.rows[r] | self.cols[c] | self.boxes[self.box_index(r, c)])

    def allows(self, r: int, c: int, v: int) -> bool:
        return bool(self.allowed(r, c) & (1 << (v - 1)))

    def candidates(self, r: int, c: int) -> List[int]:
        return mask_to_values(self.allowed(r, c))

    def place(self, r: int, c: int, v: int) -> None:
        bit = 1 << (v - 1)
        self.rows[r] |= bit
        self.cols[c] |= bit
        self.boxes[self.box_index(r, c)] |= bit

    def clear(self, r: int, c: int, v: int) -> None:
        bit = ~(1 << (v - 1))
        self.rows[r] &= bit
        self.cols[c] &= bit
        self.boxes[self.box_index(r, c)] &= bit


def has_conflict(grid: np.ndarray, r: int, c: int, v: int) -> bool:
    """True if `v` at (r, c) would repeat a digit elsewhere in its row, column or box.

    ``v == 0`` (an empty cell) is never a conflict. The cell itself is ignored,
    so a filled cell can be checked against its own value.
    """
    if v == 0:
        return False
    g = np.asarray(grid)
    box = box_size_for(int(g.shape[0]))
    hits = g == v
    hits[r, c] = False
    br, bc = (r // box) * box, (c // box) * box
    return bool(hits[r, :].any() or hits[:, c].any() or hits[br:br + box, bc:bc + box].any())


def candidates(grid: np.ndarray, r: int, c: int) -> Set[int]:
    """Legal digits for empty cell (r, c); the empty set for a filled cell."""
    g = np.asarray(grid)
    if g[r, c] != 0:
        return set()
    return set(CandidateMasks.from_grid(g).candidates(r, c))


def find_conflicts(grid: np.ndarray) -> List[Tuple[int, int]]:
    """Every filled cell whose digit is repeated in one of its units."""
    g = np.asarray(grid)
    size = int(g.shape[0])
    return [
        (r, c)
        for r in range(size)
        for c in range(size)
        if has_conflict(g, r, c, int(g[r, c]))
    ]


def is_solved(grid: np.ndarray) -> bool:
    """True for a complete grid in which every unit holds each digit once."""
    g = np.asarray(grid)
    if not np.all(g > 0):
        return False
    return not CandidateMasks.from_grid(g).conflicted
