"""
Experiment runner: sweep the order checks (and optionally the randomized
sorter) over growing input sizes from a YAML config.

Usage (from repo root):
    python -m sortcheck.bench.runner experiments/configs/01_checker_scaling.yaml

Outputs in a new run directory:
    - config_resolved.yaml    # the config we actually used
    - meta.json               # environment info (python, numpy, cpu/ram, git commit)
    - results.jsonl           # one JSON line per completed sample, plus status lines
    - summary.csv             # median + IQR time and median comparisons per (checker, n)
    - (console) rich summary table

Design notes:
- For each size n, we generate ONE dataset and give the same input to every checker.
- Checkers are read-only and get the dataset as-is; sorters get a fresh copy per sample.
- On timeout/error for a checker at size n, we skip larger sizes for that checker.
"""

from __future__ import annotations

import argparse
import datetime as _dt
import json
import logging
import os
import platform
import subprocess
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import psutil
import yaml
from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from sortcheck.algorithms import randomized_sort
from sortcheck.bench.config import SORTERS, ExperimentConfig, load_config
from sortcheck.bench.measure import time_check_call
from sortcheck.datasets import make_dataset
from sortcheck.log import configure_logging, parse_log_level
from sortcheck.validate import ORACLE_NAME, get_checker

logger = logging.getLogger(__name__)
_console = Console()

SUMMARY_COLUMNS = [
    "checker",
    "n",
    "samples_ok",
    "median_ns",
    "iqr_ns",
    "min_ns",
    "max_ns",
    "median_comparisons",
]


# ------------------------- helpers: IO & meta ------------------------- #


def _write_yaml(obj: Dict[str, Any], path: Path) -> None:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def _append_jsonl(obj: Dict[str, Any], path: Path) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(obj, separators=(",", ":"), ensure_ascii=False))
        f.write("\n")


def _timestamp() -> str:
    return _dt.datetime.now().strftime("%Y%m%d_%H%M%S")


def _ensure_run_dir(base_dir: Path, experiment_name: str) -> Path:
    base_dir.mkdir(parents=True, exist_ok=True)
    run_dir = base_dir / f"{_timestamp()}_{experiment_name}"
    suffix = 1
    while run_dir.exists():
        suffix += 1
        run_dir = base_dir / f"{_timestamp()}_{experiment_name}_{suffix}"
    run_dir.mkdir(parents=False, exist_ok=False)
    return run_dir


def _git_commit_short() -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", "rev-parse", "--short", "HEAD"], stderr=subprocess.DEVNULL
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return out.decode("utf-8").strip()


def _gather_meta() -> Dict[str, Any]:
    return {
        "python": platform.python_version(),
        "numpy": np.__version__,
        "pandas": pd.__version__,
        "psutil": psutil.__version__,
        "git_commit": _git_commit_short(),
        "oracle": ORACLE_NAME,
        "machine": {
            "cpu": platform.processor() or platform.machine(),
            "cores_logical": psutil.cpu_count(logical=True),
            "cores_physical": psutil.cpu_count(logical=False),
            "ram_gb": round(psutil.virtual_memory().total / (1024**3), 2),
            "platform": platform.platform(),
        },
        "start_time": _dt.datetime.now().isoformat(timespec="seconds"),
        "pid": os.getpid(),
        "cwd": str(Path.cwd()),
    }


def _resolve_target(name: str, rng: np.random.Generator) -> Callable[[Any, Any], Any]:
    """Return a callable fn(seq, compare) for a checker or sorter name."""
    if name == "randomized_sort":
        return lambda seq, compare: randomized_sort(seq, compare, rng=rng)
    return get_checker(name)


# ------------------------- summary ------------------------- #


def _aggregate_summary(jsonl_path: Path) -> pd.DataFrame:
    if not jsonl_path.exists():
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = pd.read_json(jsonl_path, lines=True)
    # Status lines (timeout/error) carry no time_ns
    if "time_ns" not in df.columns:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    df = df[df["time_ns"].notna()]
    if df.empty:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)

    grouped = df.groupby(["checker", "n"])
    out = grouped.agg(
        samples_ok=("time_ns", "count"),
        median_ns=("time_ns", "median"),
        min_ns=("time_ns", "min"),
        max_ns=("time_ns", "max"),
        median_comparisons=("comparisons", "median"),
    )
    out["iqr_ns"] = grouped["time_ns"].quantile(0.75) - grouped["time_ns"].quantile(0.25)
    out = out.reset_index()
    int_cols = ["n", "samples_ok", "median_ns", "iqr_ns", "min_ns", "max_ns", "median_comparisons"]
    out[int_cols] = out[int_cols].astype("int64")
    return out[SUMMARY_COLUMNS].sort_values(["checker", "n"], ignore_index=True)


def _print_rich_summary(summary: pd.DataFrame, sizes: List[int]) -> None:
    table = Table(title="Checker Summary (median ± IQR in ms / median comparisons)")
    table.add_column("Checker", style="bold")
    picks: List[Tuple[str, int]] = []
    if sizes:
        first, mid, last = sizes[0], sizes[len(sizes) // 2], sizes[-1]
        # dict.fromkeys keeps order and drops repeats for short size lists
        picks = [(f"n={n}", n) for n in dict.fromkeys([first, mid, last])]
    for hdr, _ in picks:
        table.add_column(hdr, justify="right")

    for checker in summary["checker"].unique():
        row = [f"[bold]{checker}[/]"]
        for _, npick in picks:
            s = summary[(summary["checker"] == checker) & (summary["n"] == npick)]
            if s.empty:
                row.append("—")
                continue
            median_ms = int(s["median_ns"].values[0]) / 1e6
            iqr_ms = int(s["iqr_ns"].values[0]) / 1e6
            comps = int(s["median_comparisons"].values[0])
            row.append(f"{median_ms:.3f} ± {iqr_ms:.3f} / {comps}")
        table.add_row(*row)
    _console.print()
    _console.print(table)
    _console.print()


# ------------------------- core runner ------------------------- #


def run_experiment(config_path: Path) -> Path:
    cfg, raw = load_config(config_path)
    return run_config(cfg, raw)


def run_config(cfg: ExperimentConfig, raw: Optional[Dict[str, Any]] = None) -> Path:
    """Run a parsed experiment and return the run directory."""
    run_dir = _ensure_run_dir(cfg.output_dir, cfg.experiment_name)
    results_path = run_dir / "results.jsonl"
    summary_path = run_dir / "summary.csv"
    meta_path = run_dir / "meta.json"
    cfg_resolved_path = run_dir / "config_resolved.yaml"

    # Persist resolved config early
    resolved = dict(raw) if raw is not None else {}
    resolved.update(
        {
            "output_dir": str(cfg.output_dir),
            "sizes": list(cfg.sizes),
            "checkers": [{"name": c} for c in cfg.checkers],
            "comparator": cfg.comparator,
        }
    )
    _write_yaml(resolved, cfg_resolved_path)

    with meta_path.open("w", encoding="utf-8") as f:
        json.dump(_gather_meta(), f, indent=2)

    rng = np.random.default_rng(cfg.seed)
    targets = {name: _resolve_target(name, rng) for name in cfg.checkers}
    per_target_skip = {name: False for name in cfg.checkers}

    logger.info("Run directory: %s", run_dir)
    logger.info("Experiment: %s", cfg.experiment_name)
    logger.info("Checkers: %s", ", ".join(cfg.checkers))

    for n in tqdm(cfg.sizes, desc="Sizes", unit="n"):
        base_a = make_dataset(int(n), cfg.dataset, rng)

        for name, fn in targets.items():
            if per_target_skip[name]:
                continue

            res = time_check_call(
                name=name,
                fn=fn,
                a=base_a,
                compare=cfg.compare,
                repeats=cfg.repeats,
                warmup=cfg.warmup,
                disable_gc=cfg.disable_gc,
                timeout_seconds=cfg.timeout_seconds,
                defensive_copy=name in SORTERS,
            )

            for trial_idx, (t_ns, comps) in enumerate(zip(res["samples_ns"], res["comparisons"])):
                _append_jsonl(
                    {
                        "checker": name,
                        "n": int(n),
                        "dataset": cfg.dataset,
                        "trial": int(trial_idx),
                        "time_ns": int(t_ns),
                        "comparisons": int(comps),
                        "verdict": res["verdict"],
                    },
                    results_path,
                )

            status = res.get("status", "ok")
            if status in ("timeout", "error"):
                per_target_skip[name] = True
                logger.warning("%s: %s at n=%d; skipping larger sizes", name, status, n)
                _append_jsonl(
                    {
                        "checker": name,
                        "n": int(n),
                        "status": status,
                        "timed_out_on_repeat": res.get("timed_out_on_repeat"),
                        "error": res.get("error"),
                    },
                    results_path,
                )

    summary_df = _aggregate_summary(results_path)
    summary_df.to_csv(summary_path, index=False)

    _print_rich_summary(summary_df, list(cfg.sizes))

    _console.print("[bold green]Done.[/bold green] Wrote:")
    for p in (results_path, summary_path, meta_path, cfg_resolved_path):
        _console.print(f" - {p}")

    return run_dir


# ------------------------- CLI ------------------------- #


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Run an order-check benchmark from a YAML config.")
    p.add_argument("config", type=str, help="Path to YAML experiment config")
    p.add_argument("--log-level", type=parse_log_level, default=logging.INFO, help="Console log level")
    p.add_argument("--debug", action="store_true", help="Verbose logging with source paths")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    configure_logging(level=args.log_level, debug_mode=args.debug)
    config_path = Path(args.config).resolve()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    try:
        run_experiment(config_path)
    except Exception as e:
        _console.print(f"[bold red]Runner failed:[/bold red] {e!r}")
        raise


if __name__ == "__main__":
    main()
