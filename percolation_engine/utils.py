"""
Shared utilities for the percolation engine.

Currently provides:
  - normal_confidence_interval() : normal-approximation CI for a sample mean
  - t_confidence_interval()      : t-distribution CI for a sample mean
  - make_trial_rngs()            : SeedSequence-based independent RNG streams

All functions are pure (no global state).
"""

from __future__ import annotations

import numpy as np
from numpy.random import Generator, SeedSequence, default_rng
import scipy.stats as stats


# ---------------------------------------------------------------------------
# Confidence intervals
# ---------------------------------------------------------------------------


def normal_confidence_interval(
    samples: np.ndarray,
    confidence: float = 0.95,
) -> tuple[float, float]:
    """Normal-approximation confidence interval ``mean ± z * s / sqrt(m)``.

    Parameters
    ----------
    samples : np.ndarray, shape (m,)
        Sample array with m >= 1.  A single sample yields a zero-width interval.
    confidence : float, optional
        Confidence level in (0, 1).  Default 0.95.

    Returns
    -------
    (ci_low, ci_high) : tuple of float

    Raises
    ------
    ValueError
        If the sample is empty or confidence is not in (0, 1).
    """
    samples = np.asarray(samples, dtype=np.float64)
    m = samples.shape[0]
    if m < 1:
        raise ValueError("Need at least 1 sample for CI computation.")
    if not (0 < confidence < 1):
        raise ValueError(f"confidence must be in (0, 1); got {confidence}.")
    mean = float(np.mean(samples))
    if m == 1:
        return mean, mean
    z = float(stats.norm.ppf(0.5 + confidence / 2.0))
    half_width = z * float(np.std(samples, ddof=1)) / np.sqrt(m)
    return mean - half_width, mean + half_width


def t_confidence_interval(
    samples: np.ndarray,
    confidence: float = 0.95,
) -> tuple[float, float]:
    """Confidence interval for the population mean via the t-distribution.

    Parameters
    ----------
    samples : np.ndarray, shape (m,)
        Sample array with m >= 2.
    confidence : float, optional
        Confidence level in (0, 1).  Default 0.95.

    Returns
    -------
    (ci_low, ci_high) : tuple of float

    Raises
    ------
    ValueError
        If m < 2 or confidence is not in (0, 1).
    """
    samples = np.asarray(samples, dtype=np.float64)
    m = samples.shape[0]
    if m < 2:
        raise ValueError("Need at least 2 samples for CI computation.")
    if not (0 < confidence < 1):
        raise ValueError(f"confidence must be in (0, 1); got {confidence}.")
    mean = float(np.mean(samples))
    se = float(stats.sem(samples))
    # Zero-variance sample has a degenerate but well-defined CI.
    if se == 0.0:
        return mean, mean
    interval = stats.t.interval(confidence, df=m - 1, loc=mean, scale=se)
    return float(interval[0]), float(interval[1])


# ---------------------------------------------------------------------------
# SeedSequence-based RNG spawning
# ---------------------------------------------------------------------------


def make_trial_rngs(master_seed: int, n_streams: int) -> list[Generator]:
    """Spawn *n_streams* statistically-independent Generators from a master seed.

    Uses ``numpy.random.SeedSequence.spawn()``, which derives child seeds via a
    hash-based algorithm, so streams stay independent, unlike the
    ``default_rng(seed + i)`` integer-offset approach.

    Parameters
    ----------
    master_seed : int
        The top-level seed.  The same master_seed always produces the same
        sequence of Generators.
    n_streams : int
        How many independent Generator instances to create.

    Returns
    -------
    list of Generator
    """
    ss = SeedSequence(master_seed)
    return [default_rng(child) for child in ss.spawn(n_streams)]
