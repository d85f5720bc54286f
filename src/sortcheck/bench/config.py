"""
Experiment configuration: load a YAML file into a validated, frozen dataclass.

Example (experiments/configs/01_checker_scaling.yaml):

    experiment_name: checker_scaling
    output_dir: experiments/runs
    seed: 12345
    repeats: 5
    warmup: true
    disable_gc: true
    timeout_seconds: 2.0
    comparator: ascending
    dataset:
      dist: sorted
    sizes: [1000, 10000, 100000]
    checkers:
      - name: linear
      - name: cocktail
      - name: divided
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from sortcheck.datasets import SUPPORTED_DISTS
from sortcheck.validate import CHECKERS, compare_max_to_min, compare_min_to_max
from sortcheck.validate.comparisons import Comparator

__all__ = [
    "REQUIRED_KEYS",
    "SORTERS",
    "COMPARATORS",
    "ExperimentConfig",
    "load_config",
    "parse_config",
]

REQUIRED_KEYS = [
    "experiment_name",
    "output_dir",
    "seed",
    "repeats",
    "warmup",
    "disable_gc",
    "timeout_seconds",
    "dataset",
    "sizes",
    "checkers",
]

# Targets that mutate their input and therefore need a fresh copy per sample
SORTERS = {"randomized_sort"}

COMPARATORS: Dict[str, Comparator] = {
    "ascending": compare_min_to_max,
    "descending": compare_max_to_min,
}


@dataclass(frozen=True)
class ExperimentConfig:
    experiment_name: str
    output_dir: Path
    seed: int
    repeats: int
    warmup: bool
    disable_gc: bool
    timeout_seconds: float
    dataset: Dict[str, Any]
    sizes: Tuple[int, ...]
    checkers: Tuple[str, ...]
    comparator: str = "ascending"

    @property
    def compare(self) -> Comparator:
        return COMPARATORS[self.comparator]


def load_config(path: Path) -> Tuple[ExperimentConfig, Dict[str, Any]]:
    """Read `path` and return (parsed config, raw mapping as loaded)."""
    with path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    return parse_config(raw), raw


def parse_config(raw: Any) -> ExperimentConfig:
    """
    Validate a raw config mapping.

    Raises
    ------
    ValueError
        On missing keys, unknown checkers/comparators/distributions, or
        out-of-range numbers.
    """
    if not isinstance(raw, dict):
        raise ValueError("Experiment config must be a YAML mapping")

    missing = [k for k in REQUIRED_KEYS if k not in raw]
    if missing:
        raise ValueError(f"Missing required config keys: {missing}")

    sizes_raw = raw["sizes"]
    if not isinstance(sizes_raw, (list, tuple)) or not all(
        isinstance(n, int) and not isinstance(n, bool) for n in sizes_raw
    ):
        raise ValueError("Config 'sizes' must be a list of integers")
    sizes = [int(n) for n in sizes_raw]
    if not sizes or any(n < 0 for n in sizes):
        raise ValueError("Config 'sizes' must be a non-empty list of nonnegative integers")

    repeats = int(raw["repeats"])
    if repeats < 1:
        raise ValueError("Config 'repeats' must be >= 1")

    timeout_seconds = float(raw["timeout_seconds"])
    if timeout_seconds <= 0:
        raise ValueError("Config 'timeout_seconds' must be positive")

    dataset = raw["dataset"]
    if not isinstance(dataset, dict) or dataset.get("dist") not in SUPPORTED_DISTS:
        raise ValueError(
            f"Config 'dataset.dist' must be one of {sorted(SUPPORTED_DISTS)}"
        )

    comparator = str(raw.get("comparator", "ascending"))
    if comparator not in COMPARATORS:
        raise ValueError(
            f"Unknown comparator: {comparator!r}. Supported: {sorted(COMPARATORS)}"
        )

    return ExperimentConfig(
        experiment_name=str(raw["experiment_name"]),
        output_dir=Path(raw["output_dir"]),
        seed=int(raw["seed"]),
        repeats=repeats,
        warmup=bool(raw["warmup"]),
        disable_gc=bool(raw["disable_gc"]),
        timeout_seconds=timeout_seconds,
        dataset=dict(dataset),
        sizes=tuple(sizes),
        checkers=tuple(_parse_checkers(raw["checkers"])),
        comparator=comparator,
    )


def _parse_checkers(entries: Any) -> List[str]:
    if not isinstance(entries, list) or not entries:
        raise ValueError("Config 'checkers' must be a non-empty list")
    known = set(CHECKERS) | SORTERS
    names: List[str] = []
    for entry in entries:
        name = entry.get("name") if isinstance(entry, dict) else entry
        if not name or not isinstance(name, str):
            raise ValueError("Each checker must have a string 'name' field")
        if name not in known:
            raise ValueError(f"Unknown checker: {name!r}. Supported: {sorted(known)}")
        if name in names:
            raise ValueError(f"Duplicate checker name in config: {name}")
        names.append(name)
    return names
