"""
Monte Carlo estimator of the site-percolation threshold.

Each trial opens uniformly random sites of a fresh n-by-n grid until it
percolates and records the fraction of open sites at that instant.  The
sample of per-trial thresholds yields a mean, a Bessel-corrected standard
deviation, and a 95% normal-approximation confidence interval.

Design principles
-----------------
* No global RNG state: the random source is passed in explicitly, so a fixed
  seed reproduces every trial exactly.
* Trials run eagerly and sequentially at construction; the estimator is
  read-only afterwards.
"""

from __future__ import annotations

import operator

import numpy as np
from numpy.random import Generator, default_rng

from .percolation import PercolationGrid


CONFIDENCE_95: float = 1.96


class InvalidArgument(ValueError):
    """Raised when the estimator is built with a non-positive size or trial count."""


def run_trial(n: int, rng: Generator) -> float:
    """Open random sites of a fresh grid until it percolates.

    Row and column are drawn independently from ``[1, n]`` with replacement;
    re-opening an open site is a no-op.

    Returns
    -------
    float
        Fraction of the n² sites open when percolation first occurred.
    """
    grid = PercolationGrid(n)
    while not grid.percolates():
        row = int(rng.integers(1, n, endpoint=True))
        col = int(rng.integers(1, n, endpoint=True))
        grid.open(row, col)
    return grid.number_of_open_sites() / (n * n)


class MonteCarloEstimator:
    """Percolation-threshold statistics over ``trials`` independent trials.

    Parameters
    ----------
    n : int
        Grid side length, ``n >= 1``.
    trials : int
        Number of independent trials, ``trials >= 1``.
    rng : Generator or None, optional
        Random source shared by all trials in order.  A fresh unseeded
        ``default_rng()`` is used when omitted.

    Raises
    ------
    InvalidArgument
        If ``n`` or ``trials`` is not a positive integer.  Raised before any
        trial runs.
    """

    def __init__(self, n: int, trials: int, rng: Generator | None = None) -> None:
        try:
            n, trials = operator.index(n), operator.index(trials)
        except TypeError as exc:
            raise InvalidArgument(
                f"n and trials must be integers; got n={n!r}, trials={trials!r}."
            ) from exc
        if n <= 0 or trials <= 0:
            raise InvalidArgument(
                f"n and trials should both be positive; got n={n}, trials={trials}."
            )
        self.n: int = n
        self.trials: int = trials
        if rng is None:
            rng = default_rng()

        thresholds = np.empty(self.trials, dtype=np.float64)
        for trial in range(self.trials):
            thresholds[trial] = run_trial(self.n, rng)
        thresholds.setflags(write=False)
        self._thresholds = thresholds

    @property
    def thresholds(self) -> np.ndarray:
        """Per-trial threshold samples, shape (trials,), read-only."""
        return self._thresholds

    def mean(self) -> float:
        return float(np.mean(self._thresholds))

    def stddev(self) -> float:
        """Sample standard deviation (ddof=1); exactly 0.0 for a single trial."""
        if self.trials == 1:
            return 0.0
        return float(np.std(self._thresholds, ddof=1))

    def _half_width(self) -> float:
        return CONFIDENCE_95 * self.stddev() / float(np.sqrt(self.trials))

    def confidence_lo(self) -> float:
        return self.mean() - self._half_width()

    def confidence_hi(self) -> float:
        return self.mean() + self._half_width()

    def summary_dict(self) -> dict:
        """Return a JSON-serialisable summary (no arrays)."""
        return {
            "n": self.n,
            "trials": self.trials,
            "mean": self.mean(),
            "stddev": self.stddev(),
            "ci_95_low": self.confidence_lo(),
            "ci_95_high": self.confidence_hi(),
            "min_threshold": float(np.min(self._thresholds)),
            "max_threshold": float(np.max(self._thresholds)),
            "median_threshold": float(np.median(self._thresholds)),
        }
