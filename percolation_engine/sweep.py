"""
Grid-size sweep of the percolation-threshold estimate.

Runs one :class:`~percolation_engine.monte_carlo.MonteCarloEstimator` per grid
size and tabulates the results, showing how the estimate settles as ``n``
grows.  Each size draws from its own ``SeedSequence``-spawned stream, so
adding or reordering sizes never changes the samples of another size.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from .monte_carlo import MonteCarloEstimator
from .utils import make_trial_rngs, t_confidence_interval


SWEEP_COLUMNS = [
    "n", "trials", "mean", "stddev",
    "ci_low", "ci_high", "t_ci_low", "t_ci_high",
]


def threshold_sweep(
    sizes: Sequence[int],
    trials: int,
    seed: int,
) -> pd.DataFrame:
    """Estimate the percolation threshold for every grid size in ``sizes``.

    Parameters
    ----------
    sizes : sequence of int
        Grid side lengths, each >= 1.
    trials : int
        Trials per size, >= 1.
    seed : int
        Master seed.  Size ``sizes[i]`` uses the i-th spawned stream.

    Returns
    -------
    pd.DataFrame
        One row per size with columns ``SWEEP_COLUMNS``.  ``ci_low``/``ci_high``
        are the 1.96-sigma normal interval; ``t_ci_low``/``t_ci_high`` the
        t-distribution interval (equal to the mean when ``trials == 1``).
    """
    rngs = make_trial_rngs(seed, len(sizes))
    records = []
    for n, rng in zip(sizes, rngs):
        est = MonteCarloEstimator(n, trials, rng=rng)
        mean = est.mean()
        if trials >= 2:
            t_lo, t_hi = t_confidence_interval(est.thresholds)
        else:
            t_lo, t_hi = mean, mean
        records.append({
            "n": int(n),
            "trials": int(trials),
            "mean": mean,
            "stddev": est.stddev(),
            "ci_low": est.confidence_lo(),
            "ci_high": est.confidence_hi(),
            "t_ci_low": t_lo,
            "t_ci_high": t_hi,
        })
    return pd.DataFrame.from_records(records, columns=SWEEP_COLUMNS)
