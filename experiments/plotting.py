import os
from typing import List

try:
    import pandas as pd
except ImportError:
    pd = None
try:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt
except ImportError:
    plt = None


def _ensure_dir(path: str):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)


def read_log(csv_path: str):
    """Read one convergence CSV written by utils/recorder.py."""
    if pd is None:
        raise ImportError("pandas is required for reading logs but is not installed.")
    df = pd.read_csv(csv_path)
    # values are written as formatted strings
    df["gbest_f"] = pd.to_numeric(df["gbest_f"], errors="coerce")
    return df


def plot_convergence(csv_path: str, outpath: str = None):
    """
    Semilogy convergence curve for a single run, saved next to the CSV.
    Falls back to a linear axis when the curve touches 0.
    """
    if plt is None or pd is None:
        print("Skipping plot_convergence (matplotlib/pandas missing)")
        return None

    df = read_log(csv_path)
    fig = plt.figure()
    ax = plt.gca()
    vals = df["gbest_f"]
    if (vals <= 0).any():
        ax.plot(df["iter"], vals)
    else:
        ax.semilogy(df["iter"], vals)
    ax.set_xlabel("Iteration")
    ax.set_ylabel("Best objective value")
    ax.grid(True, which="both", linestyle=":")
    base = os.path.splitext(os.path.basename(csv_path))[0]
    ax.set_title(f"Convergence ({base.replace('_convergence', '')})")

    if outpath is None:
        outpath = os.path.join(os.path.dirname(csv_path), "figures", f"{base}.png")
    _ensure_dir(outpath)
    fig.savefig(outpath, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return outpath


def plot_convergence_overlay(csv_paths: List[str], outpath: str):
    """
    Overlay several runs (e.g. PSO vs SMA, or different seeds) on one plot.
    """
    if plt is None or pd is None:
        return None

    fig = plt.figure()
    ax = plt.gca()
    positive = True
    for p in csv_paths:
        df = read_log(p)
        positive = positive and bool((df["gbest_f"] > 0).all())
        ax.plot(df["iter"], df["gbest_f"], alpha=0.7,
                label=os.path.splitext(os.path.basename(p))[0])
    if positive:
        ax.set_yscale("log")
    ax.set_xlabel("Iteration")
    ax.set_ylabel("Best objective value")
    ax.grid(True, which="both", linestyle=":")
    ax.legend(fontsize="small")
    ax.set_title("Convergence overlay")

    _ensure_dir(outpath)
    fig.savefig(outpath, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return outpath
