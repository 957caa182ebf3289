import os
import json
import argparse
from datetime import datetime

from optimizer.pso import PSORule
from optimizer.sma import SMARule
from experiments.run_bench import BenchConfig, run_batch


def study_configs(iterations: int, pop: int, dim: int):
    """Settings compared by the study: single vs multi swarm, PSO vs SMA."""
    pso = PSORule(social=1.6, cognitive=1.6, inertia=0.72)
    configs = [
        ("PSO_Single", BenchConfig(rule=pso, pop=pop, dim=dim, iterations=iterations)),
        ("PSO_Multi4", BenchConfig(rule=pso, pop=pop, dim=dim, iterations=iterations,
                                   swarm_count=4, migration_threshold=1.0)),
    ]
    # Effect of the re-seed probability
    for z in (0.01, 0.03, 0.1):
        sma = SMARule(z=z, iterations=iterations)
        configs.append((f"SMA_z{z}", BenchConfig(rule=sma, pop=pop, dim=dim, iterations=iterations)))
        configs.append((f"SMA_z{z}_Multi4", BenchConfig(rule=sma, pop=pop, dim=dim, iterations=iterations,
                                                        swarm_count=4, migration_threshold=1.0)))
    return configs


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument("--functions", type=str, default="ackley,rastrigin,solomon")
    parser.add_argument("--iterations", type=int, default=300)
    parser.add_argument("--pop", type=int, default=40)
    parser.add_argument("--dim", type=int, default=5)
    parser.add_argument("--tries", type=int, default=20, help="Trials per setting and function")
    parser.add_argument("--workers", type=int, default=os.cpu_count() or 1)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--out", type=str, default=os.path.join("results", "study"))
    parser.add_argument("--test", action="store_true", help="Run shortened smoke test")
    args = parser.parse_args(argv)

    iterations = 10 if args.test else args.iterations
    tries = 2 if args.test else args.tries
    functions = [f for f in args.functions.split(",") if f]

    results = []
    for label, cfg in study_configs(iterations, args.pop, args.dim):
        for fn in functions:
            print(f"--- Running {label} on {fn} ({tries} trials) ---")
            stats = run_batch(cfg, fn, tries, workers=args.workers, seed=args.seed)
            results.append({"config": label, "function": fn, **stats.as_dict()})

    os.makedirs(args.out, exist_ok=True)
    summary_path = os.path.join(args.out, f"summary_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json")
    with open(summary_path, "w") as f:
        json.dump(results, f, indent=2)
    print(f"Study complete. Summary saved to {summary_path}")

    print("\n=== Summary of Results ===")
    for r in results:
        print(f"{r['config']:>18} {r['function']:>10}: mean best {r['mean']:.6e} (min {r['min']:.6e}, max {r['max']:.6e})")


if __name__ == "__main__":
    main()
