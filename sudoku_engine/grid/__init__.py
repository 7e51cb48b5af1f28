"""Grid primitives and the candidate/conflict oracle."""

from .base import (
    SUPPORTED_SIZES,
    Cell,
    as_grid,
    box_size_for,
    clone_grid,
    count_filled,
    get_box,
    get_col,
    get_row,
    grid_units,
    make_base_solution,
    relabel_digits,
    shuffle_bands,
    shuffle_cols_within_stacks,
    shuffle_rows_within_bands,
    shuffle_stacks,
    transpose,
    validate_grid,
)
from .candidates import (
    CandidateMasks,
    candidates,
    find_conflicts,
    has_conflict,
    is_solved,
    mask_to_values,
)

__all__ = [
    # Primitives
    "SUPPORTED_SIZES",
    "Cell",
    "as_grid",
    "box_size_for",
    "clone_grid",
    "count_filled",
    "get_box",
    "get_col",
    "get_row",
    "grid_units",
    "transpose",
    "validate_grid",
    # Solved-grid construction
    "make_base_solution",
    "relabel_digits",
    "shuffle_bands",
    "shuffle_cols_within_stacks",
    "shuffle_rows_within_bands",
    "shuffle_stacks",
    # Oracle
    "CandidateMasks",
    "candidates",
    "find_conflicts",
    "has_conflict",
    "is_solved",
    "mask_to_values",
]
