"""
Runner script for the percolation engine.

Loads a JSON config and dispatches on ``mode``:

estimate
    Monte Carlo threshold estimate for one grid size; outputs
    thresholds.csv and summary.json.

sweep
    Threshold estimate across several grid sizes; outputs sweep_results.csv
    and summary.json.

replay
    Replays a recorded sequence of site openings; outputs final_grid.txt and
    summary.json.

Usage
-----
    python runner.py config.json [--output-dir results/]

All outputs are written to the specified directory.  A config snapshot
with SHA-256 hash is always saved alongside results for reproducibility.
"""

from __future__ import annotations

import argparse
import csv
import hashlib
import json
import sys
import time
from pathlib import Path

from .config import load_config, build_rng
from .monte_carlo import MonteCarloEstimator
from .percolation import render_text
from .replay import load_open_sequence, replay, status_line
from .sweep import threshold_sweep


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Percolation engine: threshold estimate, size sweep, and replay runner."
    )
    parser.add_argument("config", help="Path to JSON configuration file.")
    parser.add_argument(
        "--output-dir",
        default="results",
        help="Directory for output files (default: results/).",
    )
    return parser.parse_args(argv)


# ---------------------------------------------------------------------------
# Filesystem helpers
# ---------------------------------------------------------------------------


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _write_csv(path: Path, fieldnames: list[str], rows: list[dict]) -> None:
    with path.open("w", newline="") as fh:
        writer = csv.DictWriter(fh, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)


def _config_hash(cfg: dict) -> str:
    """Compute a SHA-256 hash of the JSON-serialised config for reproducibility."""
    serialised = json.dumps(cfg, sort_keys=True).encode("utf-8")
    return hashlib.sha256(serialised).hexdigest()


def _save_config_snapshot(output_dir: Path, cfg: dict) -> None:
    snapshot = {
        "config": cfg,
        "sha256": _config_hash(cfg),
    }
    (output_dir / "config_snapshot.json").write_text(json.dumps(snapshot, indent=2))


def _resolve_replay_path(replay_file: str, config_path: Path) -> Path:
    """Resolve a replay path as given, else relative to the config file's directory."""
    candidate = Path(replay_file)
    if candidate.is_absolute() or candidate.exists():
        return candidate
    return config_path.parent / candidate


# ---------------------------------------------------------------------------
# estimate
# ---------------------------------------------------------------------------


def _run_estimate(cfg: dict, output_dir: Path) -> MonteCarloEstimator:
    n = int(cfg["grid"]["n"])
    trials = int(cfg["trials"])
    print(f"[Estimate] n={n} | trials={trials} | seed={cfg['seed']}")

    t0 = time.perf_counter()
    est = MonteCarloEstimator(n, trials, rng=build_rng(cfg))
    elapsed = time.perf_counter() - t0

    _write_csv(
        output_dir / "thresholds.csv",
        ["trial", "threshold"],
        [
            {"trial": i, "threshold": round(float(p), 8)}
            for i, p in enumerate(est.thresholds.tolist())
        ],
    )
    summary = {"mode": "estimate", **est.summary_dict(), "elapsed_seconds": elapsed}
    (output_dir / "summary.json").write_text(json.dumps(summary, indent=2))

    _print_estimate_summary(est, elapsed)
    return est


def _print_estimate_summary(est: MonteCarloEstimator, elapsed: float) -> None:
    sep = "-" * 58
    print(sep)
    print("  Percolation Engine - Threshold Estimate")
    print(sep)
    print(f"  Grid                    : {est.n} x {est.n}")
    print(f"  Trials                  : {est.trials}")
    print(f"  Elapsed                 : {elapsed:.2f}s")
    print()
    print(f"  mean                    = {est.mean()}")
    print(f"  stddev                  = {est.stddev()}")
    print(f"  95% confidence interval = [{est.confidence_lo()}, {est.confidence_hi()}]")
    print()
    print(
        f"  Percolation succeeded when {est.mean() * 100:.2f}% sites were opened "
        f"on average with {(est.mean() - est.confidence_lo()) * 100:.3f}% margin "
        f"of error at 95% CI"
    )
    print(sep)


# ---------------------------------------------------------------------------
# sweep
# ---------------------------------------------------------------------------


def _run_sweep(cfg: dict, output_dir: Path) -> None:
    sizes = [int(s) for s in cfg["sweep"]["sizes"]]
    trials = int(cfg["trials"])
    print(f"[Sweep] sizes={sizes} | trials/size={trials} | seed={cfg['seed']}")

    t0 = time.perf_counter()
    df = threshold_sweep(sizes, trials, seed=int(cfg["seed"]))
    elapsed = time.perf_counter() - t0
    print(f"[Sweep] Done in {elapsed:.2f}s - {len(df)} sizes")

    df.to_csv(output_dir / "sweep_results.csv", index=False)
    (output_dir / "summary.json").write_text(
        json.dumps(
            {
                "mode": "sweep",
                "trials": trials,
                "sizes": sizes,
                "elapsed_seconds": elapsed,
                "largest_n_mean": float(df["mean"].iloc[-1]),
            },
            indent=2,
        )
    )

    sep = "-" * 58
    print(sep)
    print("  Percolation Engine - Grid-Size Sweep")
    print(sep)
    print(f"  {'n':>6}  {'mean':>8}  {'stddev':>8}  {'ci_low':>8}  {'ci_high':>8}")
    for row in df.itertuples(index=False):
        print(
            f"  {row.n:>6}  {row.mean:>8.4f}  {row.stddev:>8.4f}  "
            f"{row.ci_low:>8.4f}  {row.ci_high:>8.4f}"
        )
    print(sep)


# ---------------------------------------------------------------------------
# replay
# ---------------------------------------------------------------------------


def _run_replay(cfg: dict, config_path: Path, output_dir: Path) -> None:
    path = _resolve_replay_path(cfg["replay_file"], config_path)
    n, pairs = load_open_sequence(path)
    print(f"[Replay] {path} | n={n} | {len(pairs)} open calls")

    grid = replay(n, pairs)
    (output_dir / "final_grid.txt").write_text(render_text(grid) + "\n")
    (output_dir / "summary.json").write_text(
        json.dumps(
            {
                "mode": "replay",
                "replay_file": str(path),
                "n": n,
                "open_calls": len(pairs),
                "open_sites": grid.number_of_open_sites(),
                "percolates": grid.percolates(),
            },
            indent=2,
        )
    )
    print(render_text(grid))
    print(f"[Replay] {status_line(grid)}")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    output_dir = Path(args.output_dir)
    _ensure_dir(output_dir)

    config_path = Path(args.config)
    cfg = load_config(config_path)
    _save_config_snapshot(output_dir, cfg)

    (output_dir / "experiment_metadata.json").write_text(
        json.dumps(
            {
                "config_file": str(config_path.resolve()),
                "output_dir": str(output_dir.resolve()),
                "config_sha256": _config_hash(cfg),
                "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            },
            indent=2,
        )
    )

    mode = str(cfg["mode"])
    if mode == "estimate":
        _run_estimate(cfg, output_dir)
    elif mode == "sweep":
        _run_sweep(cfg, output_dir)
    elif mode == "replay":
        _run_replay(cfg, config_path, output_dir)
    else:
        print(f"ERROR: Unknown mode {mode!r}. Must be 'estimate', 'sweep' or 'replay'.")
        sys.exit(1)

    print(f"  Results saved to : {output_dir.resolve()}")


if __name__ == "__main__":
    main()
