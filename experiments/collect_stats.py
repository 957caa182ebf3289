# experiments/collect_stats.py
"""
Collect batch result lines printed by experiments/run_bench.py into one CSV.

Each input file holds the stdout of one batch invocation and is named like
    sma_<z_parameter>_mig_<migration_threshold>
e.g. output_slime/slime_0.03_mig_0.5.txt
"""
import argparse
import glob
import os
import re
import sys
from typing import Dict, List, Optional

import pandas as pd

COLUMNS = ["z_parameter", "migration_threshold", "fn_name", "max_solution", "avg_solution", "min_solution"]

_NUM = r"(-?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?|-?inf|nan)"
FILENAME_RE = re.compile(r".*_(\d*\.\d*)_.*_(\d*\.\d*)")
LINE_RE = re.compile(
    r"^(?P<name>[^:]+): Finished \d+ runs\. "
    rf"Max solution is {_NUM}\. Average solution is {_NUM}\. Min solution is {_NUM}\.\s*$"
)


def parse_filename(path: str) -> Optional[Dict[str, float]]:
    """Extract (z_parameter, migration_threshold) from a result file name."""
    m = FILENAME_RE.match(os.path.basename(path))
    if not m:
        return None
    return {"z_parameter": float(m.group(1)), "migration_threshold": float(m.group(2))}


def parse_line(line: str) -> Optional[Dict[str, object]]:
    m = LINE_RE.match(line.strip())
    if not m:
        return None
    return {
        "fn_name": m.group("name"),
        "max_solution": float(m.group(2)),
        "avg_solution": float(m.group(3)),
        "min_solution": float(m.group(4)),
    }


def collect(pattern: str) -> pd.DataFrame:
    rows: List[Dict[str, object]] = []
    for path in sorted(glob.glob(pattern)):
        meta = parse_filename(path)
        if meta is None:
            print(f"Skipping {path}: name does not carry parameters", file=sys.stderr)
            continue
        with open(path) as fh:
            for line in fh:
                parsed = parse_line(line)
                if parsed is not None:
                    rows.append({**meta, **parsed})
    return pd.DataFrame(rows, columns=COLUMNS)


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--pattern", type=str, default=os.path.join("output_slime", "*"),
                    help="Glob pattern of result files")
    ap.add_argument("--out", type=str, default=None, help="CSV path (stdout if omitted)")
    args = ap.parse_args(argv)

    df = collect(args.pattern)
    if args.out:
        df.to_csv(args.out, index=False)
        print("Saved:", args.out)
    else:
        df.to_csv(sys.stdout, index=False)


if __name__ == "__main__":
    main()
