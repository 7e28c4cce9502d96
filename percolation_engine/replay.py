"""
Replay of recorded site-opening sequences.

Input files use the plain-text format of the classic percolation visualiser
data sets: the first integer is the grid side ``n``, followed by
whitespace-separated ``row col`` pairs (1-indexed), one ``open`` call each.

    3
    1 3
    2 3
    3 3
"""

from __future__ import annotations

import warnings
from pathlib import Path
from typing import Iterable

from .percolation import PercolationGrid


def parse_open_sequence(text: str) -> tuple[int, list[tuple[int, int]]]:
    """Parse replay text into ``(n, [(row, col), ...])``.

    Raises
    ------
    ValueError
        If the text is empty or contains a non-integer token.
    """
    tokens = text.split()
    if not tokens:
        raise ValueError("Replay input is empty; expected the grid size first.")
    try:
        values = [int(tok) for tok in tokens]
    except ValueError as exc:
        raise ValueError(f"Replay input contains a non-integer token: {exc}") from exc

    n, coords = values[0], values[1:]
    if n < 0:
        raise ValueError(f"Grid size must be >= 0; got {n}.")
    if len(coords) % 2:
        warnings.warn(
            f"parse_open_sequence: trailing row value {coords[-1]} has no column; ignored.",
            UserWarning,
            stacklevel=2,
        )
        coords = coords[:-1]
    pairs = list(zip(coords[0::2], coords[1::2]))
    return n, pairs


def load_open_sequence(path: str | Path) -> tuple[int, list[tuple[int, int]]]:
    """Read and parse a replay file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        On malformed content (see :func:`parse_open_sequence`).
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Replay file not found: {path}")
    return parse_open_sequence(path.read_text())


def replay(n: int, pairs: Iterable[tuple[int, int]]) -> PercolationGrid:
    """Open every ``(row, col)`` of ``pairs`` in order on a fresh grid.

    Out-of-range coordinates propagate
    :class:`~percolation_engine.percolation.InvalidCoordinate`.
    """
    grid = PercolationGrid(n)
    for row, col in pairs:
        grid.open(row, col)
    return grid


def status_line(grid: PercolationGrid) -> str:
    """Status-bar text: open-site count and whether the grid percolates."""
    n_open = grid.number_of_open_sites()
    left = "1 site opened" if n_open == 1 else f"{n_open} sites opened"
    right = "percolates" if grid.percolates() else "does not percolate"
    return f"{left} | {right}"
