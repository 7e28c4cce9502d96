"""End-to-end tests for the package runner (estimate / sweep / replay)."""

from __future__ import annotations

import csv
import json
from pathlib import Path

import pandas as pd
import pytest

from percolation_engine.runner import main


def _write_json(path: Path, data: dict) -> Path:
    path.write_text(json.dumps(data))
    return path


def test_estimate_writes_outputs(tmp_path, capsys):
    cfg = _write_json(
        tmp_path / "cfg.json",
        {"mode": "estimate", "seed": 5, "grid": {"n": 8}, "trials": 10},
    )
    out = tmp_path / "out"
    main([str(cfg), "--output-dir", str(out)])

    summary = json.loads((out / "summary.json").read_text())
    assert summary["mode"] == "estimate"
    assert summary["trials"] == 10
    assert summary["ci_95_low"] <= summary["mean"] <= summary["ci_95_high"]

    with (out / "thresholds.csv").open() as fh:
        rows = list(csv.DictReader(fh))
    assert len(rows) == 10

    snapshot = json.loads((out / "config_snapshot.json").read_text())
    assert len(snapshot["sha256"]) == 64
    assert (out / "experiment_metadata.json").exists()
    assert "margin of error at 95% CI" in capsys.readouterr().out


def test_estimate_is_reproducible(tmp_path):
    cfg = _write_json(
        tmp_path / "cfg.json",
        {"mode": "estimate", "seed": 11, "grid": {"n": 6}, "trials": 5},
    )
    main([str(cfg), "--output-dir", str(tmp_path / "a")])
    main([str(cfg), "--output-dir", str(tmp_path / "b")])
    a = (tmp_path / "a" / "thresholds.csv").read_text()
    b = (tmp_path / "b" / "thresholds.csv").read_text()
    assert a == b


def test_sweep_writes_csv(tmp_path):
    cfg = _write_json(
        tmp_path / "cfg.json",
        {"mode": "sweep", "seed": 2, "trials": 3, "sweep": {"sizes": [2, 4]}},
    )
    out = tmp_path / "out"
    main([str(cfg), "--output-dir", str(out)])
    df = pd.read_csv(out / "sweep_results.csv")
    assert df["n"].tolist() == [2, 4]
    assert json.loads((out / "summary.json").read_text())["sizes"] == [2, 4]


def test_replay_resolves_relative_to_config(tmp_path, monkeypatch):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "moves.txt").write_text("3\n1 3\n2 3\n3 3\n3 1\n")
    cfg = _write_json(
        data_dir / "cfg.json",
        {"mode": "replay", "seed": 0, "replay_file": "moves.txt"},
    )
    monkeypatch.chdir(tmp_path)
    out = tmp_path / "out"
    main([str(cfg), "--output-dir", str(out)])

    summary = json.loads((out / "summary.json").read_text())
    assert summary["percolates"] is True
    assert summary["open_sites"] == 4
    assert (out / "final_grid.txt").read_text() == "##~\n##~\n.#~\n"


def test_invalid_config_raises(tmp_path):
    cfg = _write_json(tmp_path / "cfg.json", {"mode": "estimate", "seed": 1})
    with pytest.raises(ValueError):
        main([str(cfg), "--output-dir", str(tmp_path / "out")])
