"""Text rendering and parsing of grids.

Digits above 9 are shown as letters (10 -> "A", ... 16 -> "G"); the engine
itself only ever sees integers.
"""

from typing import List

import numpy as np

from .grid import SUPPORTED_SIZES

BLANK_SYMBOLS = ("0", ".", "")


def symbol_for(value: int) -> str:
    """Render a cell value: "" for empty, 1-9, then A-G for 10-16."""
    if value <= 0:
        return ""
    if value <= 9:
        return str(value)
    return chr(ord("A") + value - 10)


def value_for(symbol: str) -> int:
    """Inverse of :func:`symbol_for`; "0", "." and "" are empty."""
    symbol = symbol.strip().upper()
    if symbol in BLANK_SYMBOLS:
        return 0
    if symbol.isdigit():
        return int(symbol)
    if len(symbol) == 1 and "A" <= symbol <= "G":
        return ord(symbol) - ord("A") + 10
    raise ValueError(f"Invalid cell symbol {symbol!r}")


def grid_to_string(grid: np.ndarray) -> str:
    """One line per row, blanks shown as "."."""
    g = np.asarray(grid)
    return "\n".join(
        "".join(symbol_for(int(v)) or "." for v in row) for row in g
    )


def parse_grid(text: str) -> np.ndarray:
    """
    Parse a puzzle written as symbols, one per cell.

    Accepts a flat string of 81 or 256 symbols or one row per line;
    whitespace is ignored and "0" or "." mark empty cells.

    Raises:
        ValueError: On an unsupported cell count or an unknown symbol.
    """
    symbols: List[str] = [ch for ch in text if not ch.isspace()]
    sizes = {n * n: n for n in SUPPORTED_SIZES}
    if len(symbols) not in sizes:
        raise ValueError(
            f"Expected {' or '.join(str(k) for k in sizes)} cells, got {len(symbols)}"
        )
    size = sizes[len(symbols)]
    values = [value_for(ch) for ch in symbols]
    if max(values) > size:
        raise ValueError(f"Cell value out of range for a {size}x{size} grid")
    return np.array(values, dtype=np.int64).reshape(size, size)
