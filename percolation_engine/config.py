"""
Configuration loader for the percolation engine.

Loads JSON config files, validates fields, and builds the seeded numpy random
Generator that drives every simulation.
"""

from __future__ import annotations

import json
import warnings
from pathlib import Path
from typing import Any

from numpy.random import Generator, default_rng


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

ConfigDict = dict[str, Any]


# ---------------------------------------------------------------------------
# Schema constants
# ---------------------------------------------------------------------------

MODES = {"estimate", "sweep", "replay"}

_MODE_REQUIRED_KEYS: dict[str, list[str]] = {
    "estimate": ["grid", "trials"],
    "sweep":    ["sweep", "trials"],
    "replay":   ["replay_file"],
}


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


def load_config(path: str | Path) -> ConfigDict:
    """Load and validate a JSON configuration file.

    Parameters
    ----------
    path : str or Path
        Path to the JSON configuration file.

    Returns
    -------
    ConfigDict
        Validated configuration dictionary.

    Raises
    ------
    ValueError
        If the file is not valid JSON, or required fields are missing or invalid.
    FileNotFoundError
        If the config file does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        cfg: ConfigDict = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"Malformed JSON in '{path}': {exc}") from exc

    validate_config(cfg)
    return cfg


def _require_positive_int(value: Any, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


def validate_config(cfg: ConfigDict) -> None:
    """Validate top-level and mode-specific config fields.

    Raises
    ------
    ValueError
        On any validation failure.
    """
    required_top = {"mode", "seed"}
    missing = required_top - cfg.keys()
    if missing:
        raise ValueError(f"Config missing required fields: {sorted(missing)}")

    mode = cfg["mode"]
    if mode not in MODES:
        raise ValueError(f"mode must be one of {sorted(MODES)}, got {mode!r}")

    if isinstance(cfg["seed"], bool) or not isinstance(cfg["seed"], int):
        raise ValueError(f"seed must be an integer, got {cfg['seed']!r}")

    missing_mode_keys = [k for k in _MODE_REQUIRED_KEYS[mode] if k not in cfg]
    if missing_mode_keys:
        raise ValueError(
            f"config for mode {mode!r} is missing required key(s): {missing_mode_keys}"
        )

    if "trials" in cfg:
        _require_positive_int(cfg["trials"], "trials")
        if cfg["trials"] == 1:
            warnings.warn(
                "validate_config: trials == 1; stddev is defined as 0 and the "
                "confidence interval collapses to the single sample.",
                UserWarning,
                stacklevel=2,
            )

    if mode == "estimate":
        grid_cfg = cfg["grid"]
        if not isinstance(grid_cfg, dict) or "n" not in grid_cfg:
            raise ValueError("grid.n is required")
        _require_positive_int(grid_cfg["n"], "grid.n")

    elif mode == "sweep":
        sizes = cfg["sweep"].get("sizes") if isinstance(cfg["sweep"], dict) else None
        if not isinstance(sizes, list) or not sizes:
            raise ValueError("sweep.sizes must be a non-empty list of grid sizes")
        for size in sizes:
            _require_positive_int(size, "sweep.sizes entry")

    elif mode == "replay":
        if not isinstance(cfg["replay_file"], str) or not cfg["replay_file"]:
            raise ValueError(f"replay_file must be a path string, got {cfg['replay_file']!r}")


def build_rng(cfg: ConfigDict) -> Generator:
    """Build a seeded numpy Generator from a config dict.

    Parameters
    ----------
    cfg : ConfigDict
        Configuration dictionary containing ``seed`` (int).

    Returns
    -------
    Generator
        A seeded numpy random Generator.
    """
    return default_rng(int(cfg["seed"]))
