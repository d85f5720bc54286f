"""
Tests for the benchmark harness: timing, config parsing and a tiny end-to-end run.
"""

from __future__ import annotations

import gc
import json
import pathlib
import sys
from typing import Any

import pandas as pd
import pytest
import yaml

_REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
_SRC = _REPO_ROOT / "src"
if str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from sortcheck.algorithms import randomized_sort  # noqa: E402
from sortcheck.bench.config import parse_config  # noqa: E402
from sortcheck.bench.measure import time_check_call  # noqa: E402
from sortcheck.bench.runner import main, run_experiment  # noqa: E402
from sortcheck.log import parse_log_level  # noqa: E402
from sortcheck.validate import ORACLE_NAME, compare_min_to_max, is_sorted_linear  # noqa: E402


def _base_config(tmp_path: pathlib.Path, **overrides: Any) -> dict:
    cfg = {
        "experiment_name": "tiny",
        "output_dir": str(tmp_path / "runs"),
        "seed": 1,
        "repeats": 3,
        "warmup": True,
        "disable_gc": True,
        "timeout_seconds": 30.0,
        "dataset": {"dist": "sorted"},
        "sizes": [10, 50],
        "checkers": [{"name": "linear"}, {"name": "cocktail"}, {"name": "divided"}],
    }
    cfg.update(overrides)
    return cfg


# ------------------------- measure ------------------------- #


def test_time_check_call_records_samples_and_comparisons() -> None:
    res = time_check_call(
        name="linear",
        fn=is_sorted_linear,
        a=list(range(10)),
        compare=compare_min_to_max,
        repeats=4,
        warmup=True,
        disable_gc=True,
        timeout_seconds=10.0,
        defensive_copy=False,
    )
    assert res["status"] == "ok"
    assert len(res["samples_ns"]) == 4
    assert res["comparisons"] == [9, 9, 9, 9]
    assert res["verdict"] is True
    assert gc.isenabled()


@pytest.mark.timeout(20)
def test_time_check_call_copies_for_sorters() -> None:
    a = [3, 2, 1, 0]
    res = time_check_call(
        name="randomized_sort",
        fn=randomized_sort,
        a=a,
        compare=compare_min_to_max,
        repeats=2,
        warmup=False,
        disable_gc=False,
        timeout_seconds=10.0,
        defensive_copy=True,
    )
    assert res["status"] == "ok"
    assert a == [3, 2, 1, 0]
    assert res["verdict"] is None
    assert all(c > 0 for c in res["comparisons"])


def test_time_check_call_timeout() -> None:
    res = time_check_call(
        name="linear",
        fn=is_sorted_linear,
        a=list(range(1000)),
        compare=compare_min_to_max,
        repeats=5,
        warmup=False,
        disable_gc=False,
        timeout_seconds=1e-9,
        defensive_copy=False,
    )
    assert res["status"] == "timeout"
    assert res["timed_out_on_repeat"] == 0
    assert len(res["samples_ns"]) == 1


def test_time_check_call_error() -> None:
    def boom(a: Any, b: Any) -> int:
        raise RuntimeError("comparator failed")

    res = time_check_call(
        name="linear",
        fn=is_sorted_linear,
        a=[1, 2, 3],
        compare=boom,
        repeats=2,
        warmup=False,
        disable_gc=False,
        timeout_seconds=1.0,
        defensive_copy=False,
    )
    assert res["status"] == "error"
    assert "comparator failed" in res["error"]
    assert res["samples_ns"] == []


@pytest.mark.parametrize("kwargs", [{"repeats": -1}, {"timeout_seconds": 0}])
def test_time_check_call_rejects_bad_settings(kwargs) -> None:
    args = dict(
        name="linear",
        fn=is_sorted_linear,
        a=[1],
        compare=compare_min_to_max,
        repeats=1,
        warmup=False,
        disable_gc=False,
        timeout_seconds=1.0,
        defensive_copy=False,
    )
    args.update(kwargs)
    with pytest.raises(ValueError):
        time_check_call(**args)


# ------------------------- config ------------------------- #


def test_parse_config_defaults(tmp_path) -> None:
    cfg = parse_config(_base_config(tmp_path))
    assert cfg.checkers == ("linear", "cocktail", "divided")
    assert cfg.sizes == (10, 50)
    assert cfg.comparator == "ascending"
    assert cfg.compare is compare_min_to_max


@pytest.mark.parametrize(
    "overrides",
    [
        {"checkers": [{"name": "bogus"}]},
        {"checkers": [{"name": "linear"}, {"name": "linear"}]},
        {"checkers": []},
        {"sizes": []},
        {"sizes": 10},
        {"sizes": "10"},
        {"sizes": [1, "2"]},
        {"sizes": [1.5]},
        {"repeats": 0},
        {"timeout_seconds": -1},
        {"dataset": {"dist": "nope"}},
        {"comparator": "sideways"},
    ],
)
def test_parse_config_rejects(tmp_path, overrides) -> None:
    with pytest.raises(ValueError):
        parse_config(_base_config(tmp_path, **overrides))


def test_parse_config_missing_keys(tmp_path) -> None:
    raw = _base_config(tmp_path)
    del raw["seed"]
    with pytest.raises(ValueError, match="seed"):
        parse_config(raw)


def test_parse_log_level() -> None:
    assert parse_log_level("debug") == 10
    assert parse_log_level("WARNING") == 30
    assert parse_log_level("25") == 25
    with pytest.raises(ValueError):
        parse_log_level("chatty")


# ------------------------- end to end ------------------------- #


def test_run_experiment_writes_outputs(tmp_path) -> None:
    config_path = tmp_path / "tiny.yaml"
    config_path.write_text(yaml.safe_dump(_base_config(tmp_path)), encoding="utf-8")

    run_dir = run_experiment(config_path)

    for fname in ("config_resolved.yaml", "meta.json", "results.jsonl", "summary.csv"):
        assert (run_dir / fname).exists(), fname

    lines = [json.loads(l) for l in (run_dir / "results.jsonl").read_text().splitlines()]
    assert len(lines) == 3 * 2 * 3  # checkers * sizes * repeats
    assert all(line["verdict"] is True for line in lines)

    summary = pd.read_csv(run_dir / "summary.csv")
    assert set(summary["checker"]) == {"linear", "cocktail", "divided"}
    linear_50 = summary[(summary["checker"] == "linear") & (summary["n"] == 50)]
    assert int(linear_50["median_comparisons"].iloc[0]) == 49

    meta = json.loads((run_dir / "meta.json").read_text())
    assert "python" in meta and "machine" in meta
    assert meta["oracle"] == ORACLE_NAME


@pytest.mark.timeout(20)
def test_run_experiment_with_sorter(tmp_path) -> None:
    raw = _base_config(
        tmp_path,
        dataset={"dist": "random", "params": {"range": [0, 20]}},
        sizes=[3, 5],
        checkers=[{"name": "randomized_sort"}],
        warmup=False,
    )
    config_path = tmp_path / "sorter.yaml"
    config_path.write_text(yaml.safe_dump(raw), encoding="utf-8")

    run_dir = run_experiment(config_path)
    summary = pd.read_csv(run_dir / "summary.csv")
    assert list(summary["n"]) == [3, 5]
    assert (summary["samples_ok"] == 3).all()


def test_main_missing_config(tmp_path) -> None:
    with pytest.raises(SystemExit):
        main([str(tmp_path / "absent.yaml")])
