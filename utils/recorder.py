from __future__ import annotations

import csv
import json
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence


@dataclass
class RunConfig:
    """Minimal run configuration metadata to store with each run."""
    algorithm: str          # "pso" or "sma"
    functions: List[str]    # e.g. ["ackley", "rastrigin"]
    pop_size: int
    iterations: int
    dim: int
    seed: Optional[int]
    swarm_count: Optional[int] = None
    migration_threshold: Optional[float] = None
    try_count: Optional[int] = None


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def create_run_dir(root: Path, algorithm: str, mode: str = "single") -> Path:
    """
    Create and return a unique directory for one invocation.

    Structure:
        {root}/{algorithm}/{mode}/run_YYYYmmdd_HHMMSS_XXXX/

    algorithm : "pso" or "sma"
    mode : "single" or "batch"
    """
    if algorithm not in {"pso", "sma"}:
        raise ValueError(f"Unknown algorithm: {algorithm}")
    if mode not in {"single", "batch"}:
        raise ValueError(f"Unknown mode: {mode}")

    base = Path(root) / algorithm / mode
    _ensure_dir(base)

    now = datetime.now()
    timestamp = now.strftime("%Y%m%d_%H%M%S")
    # short suffix from microseconds to avoid collisions
    suffix = now.strftime("%f")[-4:]
    run_dir = base / f"run_{timestamp}_{suffix}"
    _ensure_dir(run_dir)
    return run_dir


def save_convergence_csv(run_dir: Path, function: str, best_history: Sequence[float]) -> Path:
    """
    Save best-so-far history to CSV:
        iter, gbest_f
    """
    path = Path(run_dir) / f"{function}_convergence.csv"
    with path.open("w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["iter", "gbest_f"])
        for i, b in enumerate(best_history, 1):
            writer.writerow([i, f"{b:.12e}"])
    return path


def save_batch_summary(run_dir: Path, rows: Iterable[Dict[str, Any]], filename: str = "summary.csv") -> Path:
    """
    Write one row per benchmark function (fn_name, count, min, mean, max).
    """
    path = Path(run_dir) / filename
    rows = list(rows)
    if not rows:
        return path

    fieldnames: List[str] = list(rows[0].keys())
    with path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
    return path


def save_run_metadata(run_dir: Path, config: RunConfig, extra: Dict[str, Any] | None = None) -> Path:
    """
    Save run configuration and optional extra info to metadata.json.
    """
    meta: Dict[str, Any] = asdict(config)
    if extra:
        meta.update(extra)

    path = Path(run_dir) / "metadata.json"
    with path.open("w") as f:
        json.dump(meta, f, indent=2)
    return path
