"""
percolation_engine - Site Percolation and Threshold Estimation
===============================================================

Three layers, each owning the next:

  DisjointSet
      Weighted quick-union (union by size, no path compression) over a
      fixed universe of integer ids.

  PercolationGrid
      n-by-n grid of sites opened one at a time.  Each component root holds
      a bitmask of the boundaries it touches, so percolation and fullness are
      tracked without virtual top/bottom nodes and without backwash.

  MonteCarloEstimator
      Repeated random-opening trials yielding the mean percolation threshold,
      its sample standard deviation and a 95% confidence interval.

Quick start
-----------
>>> from numpy.random import default_rng
>>> from percolation_engine import MonteCarloEstimator
>>> est = MonteCarloEstimator(20, 30, rng=default_rng(42))
>>> est.confidence_lo() <= est.mean() <= est.confidence_hi()
True
"""

from .union_find import DisjointSet, IndexOutOfBounds
from .percolation import (
    PercolationGrid,
    InvalidCoordinate,
    render_text,
    CLOSED,
    OPEN,
    REACHES_TOP,
    REACHES_BOTTOM,
    PERCOLATING,
)
from .monte_carlo import MonteCarloEstimator, InvalidArgument, run_trial, CONFIDENCE_95
from .replay import parse_open_sequence, load_open_sequence, replay, status_line
from .sweep import threshold_sweep
from .utils import normal_confidence_interval, t_confidence_interval, make_trial_rngs

__all__ = [
    # union-find
    "DisjointSet", "IndexOutOfBounds",
    # grid
    "PercolationGrid", "InvalidCoordinate", "render_text",
    "CLOSED", "OPEN", "REACHES_TOP", "REACHES_BOTTOM", "PERCOLATING",
    # monte carlo
    "MonteCarloEstimator", "InvalidArgument", "run_trial", "CONFIDENCE_95",
    # replay
    "parse_open_sequence", "load_open_sequence", "replay", "status_line",
    # sweep
    "threshold_sweep",
    # utils
    "normal_confidence_interval", "t_confidence_interval", "make_trial_rngs",
]
