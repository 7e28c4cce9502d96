"""
Weighted quick-union (union-by-size) disjoint-set structure.

Elements are integer ids in ``[0, n)``.  Parent pointers and tree sizes are
stored in fixed-length numpy arrays; no path compression is applied, so every
tree has height O(log n) purely through the union-by-size rule.
"""

from __future__ import annotations

import operator

import numpy as np


class IndexOutOfBounds(IndexError):
    """Raised when an element id lies outside ``[0, n)``."""


class DisjointSet:
    """Weighted quick-union over a fixed universe of ``n`` elements.

    Parameters
    ----------
    n : int
        Number of elements.  Each starts as its own singleton set.

    Attributes
    ----------
    parent : np.ndarray, shape (n,), dtype int64
        ``parent[i]`` is the parent of ``i``; ``i`` is a root iff
        ``parent[i] == i``.
    size : np.ndarray, shape (n,), dtype int64
        ``size[i]`` is the number of elements in the tree rooted at ``i``.
        Only meaningful while ``i`` is a root.
    """

    def __init__(self, n: int) -> None:
        n = operator.index(n)
        if n < 0:
            raise ValueError(f"n must be >= 0; got {n}.")
        self.parent: np.ndarray = np.arange(n, dtype=np.int64)
        self.size: np.ndarray = np.ones(n, dtype=np.int64)
        self._count: int = n

    def __len__(self) -> int:
        return int(self.parent.shape[0])

    def _validate(self, x: int) -> int:
        x = operator.index(x)
        n = len(self)
        if not (0 <= x < n):
            raise IndexOutOfBounds(f"index {x} is not between 0 and {n - 1}")
        return x

    def count(self) -> int:
        """Return the number of disjoint sets."""
        return self._count

    def find(self, x: int) -> int:
        """Return the root of the tree containing ``x``.

        Raises
        ------
        IndexOutOfBounds
            If ``x`` is not in ``[0, n)``.
        TypeError
            If ``x`` is not an integer.
        """
        x = self._validate(x)
        parent = self.parent
        while x != parent[x]:
            x = int(parent[x])
        return x

    def connected(self, a: int, b: int) -> bool:
        """Convenience wrapper for ``find(a) == find(b)``."""
        return self.find(a) == self.find(b)

    def union(self, a: int, b: int) -> None:
        """Merge the sets containing ``a`` and ``b``.

        The smaller tree is attached under the root of the larger one; on a
        tie ``b``'s root goes under ``a``'s root.  A no-op when both are
        already in the same set.

        Raises
        ------
        IndexOutOfBounds
            If ``a`` or ``b`` is not in ``[0, n)``.
        """
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return

        if self.size[root_a] < self.size[root_b]:
            self.parent[root_a] = root_b
            self.size[root_b] += self.size[root_a]
        else:
            self.parent[root_b] = root_a
            self.size[root_a] += self.size[root_b]
        self._count -= 1
