import os, subprocess, sys

FUNCTIONS = "ackley,schwefel,brown,rastrigin,schwefel2,solomon"
Z_VALUES = ["0.01", "0.03", "0.1"]
THRESHOLDS = ["0.1", "1.0", "10.0"]


def run(cmd, stdout=None):
    print(">", " ".join(cmd))
    subprocess.check_call(cmd, stdout=stdout)


def main():
    out_dir = "output_slime"
    os.makedirs(out_dir, exist_ok=True)

    # 1) multi-swarm SMA sweep over z-parameter x migration threshold
    for z in Z_VALUES:
        for thr in THRESHOLDS:
            with open(os.path.join(out_dir, f"slime_{z}_mig_{thr}.txt"), "w") as fh:
                run([sys.executable, "-m", "experiments.run_bench",
                     "--functions", FUNCTIONS, "--iterations", "500", "--pop-size", "40",
                     "--try-count", "100", "--swarm-count", "4", "--migration-threshold", thr,
                     "--log-level", "WARNING",
                     "slime", "--z-parameter", z], stdout=fh)

    # 2) one table for the whole sweep
    run([sys.executable, "-m", "experiments.collect_stats",
         "--pattern", os.path.join(out_dir, "*"), "--out", os.path.join(out_dir, "summary.csv")])

    # 3) single PSO runs with convergence figures
    run([sys.executable, "-m", "experiments.run_bench",
         "--functions", FUNCTIONS, "--iterations", "500", "--pop-size", "40", "--seed", "1",
         "--out", "results", "--plot",
         "pso", "--social-coeff", "1.6", "--cognitive-coeff", "1.6", "--inertia-coeff", "0.72"])


if __name__ == "__main__":
    main()
