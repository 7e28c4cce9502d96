"""
Site percolation on an n-by-n grid.

Sites are opened one at a time.  Connectivity between open sites is kept in a
single :class:`~percolation_engine.union_find.DisjointSet` of size n², and
every component root carries a small status bitmask recording whether the
component touches the top row, the bottom row, or both:

    CLOSED         = 0
    OPEN           = 1
    REACHES_TOP    = 2
    REACHES_BOTTOM = 4

There are no virtual top/bottom nodes, so a site connected only to the bottom
row is never reported as full ("backwash").  Fullness is always read from the
site's *current* root, never from the byte written when the site was opened.

Coordinates in the public API are 1-indexed: ``row, col`` in ``[1, n]``.
"""

from __future__ import annotations

import operator

import numpy as np

from .union_find import DisjointSet


# ---------------------------------------------------------------------------
# Status bits
# ---------------------------------------------------------------------------

CLOSED: int = 0
OPEN: int = 1
REACHES_TOP: int = 2
REACHES_BOTTOM: int = 4
PERCOLATING: int = REACHES_TOP | REACHES_BOTTOM

# Values returned by PercolationGrid.site_states()
SITE_CLOSED: int = 0
SITE_OPEN: int = 1
SITE_FULL: int = 2


class InvalidCoordinate(IndexError):
    """Raised when a grid row or column lies outside ``[1, n]``."""


# ---------------------------------------------------------------------------
# Grid
# ---------------------------------------------------------------------------


class PercolationGrid:
    """Incrementally opened n-by-n percolation system.

    Parameters
    ----------
    n : int
        Side length of the grid (``n >= 0``).
    """

    def __init__(self, n: int) -> None:
        n = operator.index(n)
        if n < 0:
            raise ValueError(f"n must be >= 0; got {n}.")
        self.side: int = n
        self._open_count: int = 0
        self._percolates: bool = False
        self._status: np.ndarray = np.zeros(n * n, dtype=np.uint8)
        self._uf = DisjointSet(n * n)

    # ------------------------------------------------------------------
    # Coordinate helpers
    # ------------------------------------------------------------------

    def _index(self, row: int, col: int) -> int:
        """Validate 1-indexed ``(row, col)`` and return the flat 0-indexed site id."""
        row, col = operator.index(row), operator.index(col)
        n = self.side
        if not (1 <= row <= n and 1 <= col <= n):
            raise InvalidCoordinate(f"Invalid (row, col): ({row}, {col})")
        return (row - 1) * n + (col - 1)

    def _neighbours(self, idx: int) -> list[int]:
        n = self.side
        row, col = divmod(idx, n)
        out = []
        if col > 0:
            out.append(idx - 1)
        if col + 1 < n:
            out.append(idx + 1)
        if row > 0:
            out.append(idx - n)
        if row + 1 < n:
            out.append(idx + n)
        return out

    def _connect(self, idx: int, neighbour: int) -> int:
        """Union ``idx`` with an open ``neighbour`` and return the neighbour root's flags."""
        root = self._uf.find(neighbour)
        flags = int(self._status[root])
        if flags == CLOSED:
            return CLOSED
        self._uf.union(idx, neighbour)
        return flags

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def open(self, row: int, col: int) -> None:
        """Open site ``(row, col)`` if it is not open already.

        Raises
        ------
        InvalidCoordinate
            If ``row`` or ``col`` is outside ``[1, n]``.
        TypeError
            If ``row`` or ``col`` is not an integer.
        """
        idx = self._index(row, col)
        if self._status[idx] & OPEN:
            return

        status = OPEN
        for neighbour in self._neighbours(idx):
            status |= self._connect(idx, neighbour)

        if idx < self.side:
            status |= REACHES_TOP
        if idx >= self.side * (self.side - 1):
            status |= REACHES_BOTTOM

        root = self._uf.find(idx)
        self._status[root] |= status
        self._status[idx] = self._status[root]
        if (int(self._status[root]) & PERCOLATING) == PERCOLATING:
            self._percolates = True
        self._open_count += 1

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_open(self, row: int, col: int) -> bool:
        return bool(self._status[self._index(row, col)] != CLOSED)

    def is_full(self, row: int, col: int) -> bool:
        """True iff the site is open and its component currently reaches the top row."""
        idx = self._index(row, col)
        if self._status[idx] == CLOSED:
            return False
        return bool(self._status[self._uf.find(idx)] & REACHES_TOP)

    def number_of_open_sites(self) -> int:
        return self._open_count

    def percolates(self) -> bool:
        return self._percolates

    def site_states(self) -> np.ndarray:
        """Return an (n, n) array of ``SITE_CLOSED`` / ``SITE_OPEN`` / ``SITE_FULL``.

        Row 0 of the array is grid row 1.  This is the per-frame snapshot a
        renderer polls instead of calling ``is_open``/``is_full`` per site.
        """
        n = self.side
        states = np.zeros(n * n, dtype=np.int8)
        for idx in np.flatnonzero(self._status):
            idx = int(idx)
            if self._status[self._uf.find(idx)] & REACHES_TOP:
                states[idx] = SITE_FULL
            else:
                states[idx] = SITE_OPEN
        return states.reshape(n, n)

    def __repr__(self) -> str:
        return (
            f"PercolationGrid(n={self.side}, open={self._open_count}, "
            f"percolates={self._percolates})"
        )


def render_text(grid: PercolationGrid) -> str:
    """Render a grid as text: ``#`` closed, ``.`` open, ``~`` full."""
    glyphs = np.array(["#", ".", "~"])
    states = grid.site_states()
    return "\n".join("".join(glyphs[row]) for row in states)
