import argparse
import glob
import os
from experiments.plotting import plot_convergence, plot_convergence_overlay


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument(
        "--pattern",
        type=str,
        default=os.path.join("results", "*", "single", "*", "*_convergence.csv"),
        help="Glob pattern to pick convergence CSVs written by run_bench --out",
    )
    ap.add_argument("--out", type=str, default=os.path.join("results", "figures", "convergence_overlay.png"))
    ap.add_argument("--single", type=str, default=None, help="Path to one CSV for single-run convergence")
    args = ap.parse_args(argv)

    csvs = sorted(glob.glob(args.pattern))
    if args.single:
        print("Saved:", plot_convergence(args.single))
    if len(csvs) >= 2:
        print("Saved:", plot_convergence_overlay(csvs, args.out))
    elif not args.single and len(csvs) == 1:
        print("Saved:", plot_convergence(csvs[0]))
    elif not csvs:
        print("No CSVs matched. Adjust --pattern.")


if __name__ == "__main__":
    main()
