from __future__ import annotations
import logging
import math
from typing import Dict, List, Optional, Sequence, Union

import numpy as np

from benchmarks.functions import BenchmarkFunction
from .base import ConfigurationError, MovementRule, spawn_seeds
from .swarm import Swarm
from .vector import FixedVector

logger = logging.getLogger(__name__)


class MultiSwarmOptimizer:
    """
    Island model: several independent swarms sharing one function and rule,
    with a migration pass between iterations.

    Migration visits every pair (i, j), i < j, in lexicographic order and
    rewrites the two populations in place, so later pairs see the result of
    earlier ones. For a pair whose best values differ by more than
    migration_threshold, count = floor(diff / max(best_i, best_j) * pop)
    members move: the best `count` of swarm i and the best `pop - count` of
    swarm j end up in swarm j, the rest in swarm i.
    """
    def __init__(
        self,
        function: Union[str, BenchmarkFunction],
        rule: MovementRule,
        swarms: int = 2,
        migration_threshold: float = 0.0,
        pop: int = 40,
        dim: int = 5,
        domain: Optional[Sequence[float]] = None,
        seed=None,
    ):
        if int(swarms) < 2:
            raise ConfigurationError(f"Multi-swarm needs at least 2 swarms, got {swarms}")
        if not float(migration_threshold) >= 0.0:
            raise ConfigurationError(f"Migration threshold must be >= 0, got {migration_threshold}")

        self.migration_threshold: float = float(migration_threshold)
        # last child seed drives the migration shuffles, the others one swarm each
        seeds = spawn_seeds(seed, int(swarms) + 1)
        self.rng: np.random.Generator = np.random.default_rng(seeds[-1])
        self.swarms: List[Swarm] = [
            Swarm(function, rule, pop=pop, dim=dim, domain=domain, seed=s) for s in seeds[:-1]
        ]
        self.function = self.swarms[0].function
        self.rule = rule
        self.pop: int = self.swarms[0].pop
        self.iteration: int = 0
        self.history: List[float] = []
        self.migrations: int = 0

        self.best_x: FixedVector = FixedVector.zeros(self.swarms[0].D)
        self.best_f: float = np.inf
        self.update_best()

    def update_best(self) -> None:
        for swarm in self.swarms:
            if swarm.best_f < self.best_f:
                self.best_f = swarm.best_f
                self.best_x = swarm.best_x.copy()

    def migration_count(self, best_i: float, best_j: float) -> int:
        diff = abs(best_j - best_i)
        if not diff > self.migration_threshold:
            return 0
        scale = max(best_i, best_j)
        if scale == 0 or not math.isfinite(scale) or not math.isfinite(diff):
            return 0
        count = math.floor(diff / scale * self.pop)
        return min(max(count, 0), self.pop)

    def _migrate_pair(self, i: int, j: int) -> int:
        first, second = self.swarms[i], self.swarms[j]
        count = self.migration_count(first.best_f, second.best_f)
        if count == 0:
            return 0

        ranked_first = sorted(first.population, key=lambda m: m.f)                 # best first
        ranked_second = sorted(second.population, key=lambda m: m.f, reverse=True)  # worst first
        head_first, tail_first = ranked_first[:count], ranked_first[count:]
        head_second, tail_second = ranked_second[:count], ranked_second[count:]

        new_first = tail_first + head_second
        new_second = head_first + tail_second
        self.rng.shuffle(new_first)
        self.rng.shuffle(new_second)

        first.population = new_first
        second.population = new_second
        first.update_best()
        second.update_best()
        return count

    def migrate(self) -> int:
        moved = 0
        n = len(self.swarms)
        for i in range(n - 1):
            for j in range(i + 1, n):
                moved += self._migrate_pair(i, j)
        if moved:
            self.migrations += 1
            logger.debug("Migration pass %d moved %d members", self.migrations, moved)
        return moved

    def step(self) -> None:
        for swarm in self.swarms:
            swarm.step()
        self.migrate()
        self.update_best()
        self.iteration += 1
        self.history.append(self.best_f)

    def run(self, iterations: int) -> Dict:
        for _ in range(int(iterations)):
            self.step()
        return self.best()

    def reset(self) -> None:
        for swarm in self.swarms:
            swarm.reset()
        self.best_f = np.inf
        self.best_x = FixedVector.zeros(self.swarms[0].D)
        self.iteration = 0
        self.history = []
        self.migrations = 0
        self.update_best()

    @property
    def best_position(self) -> FixedVector:
        return self.best_x.copy()

    @property
    def best_value(self) -> float:
        return float(self.best_f)

    def best(self) -> Dict:
        return {"x": self.best_x.copy(), "f": float(self.best_f)}

    def population_size(self) -> int:
        return sum(len(s.population) for s in self.swarms)

    def state(self) -> Dict:
        f_arr = np.concatenate([s.fitness() for s in self.swarms])
        return {
            "iter": self.iteration,
            "evals_total": sum(s.state()["evals_total"] for s in self.swarms),
            "f_best": float(np.min(f_arr)),
            "f_mean": float(np.mean(f_arr)),
            "f_std": float(np.std(f_arr)),
            "gbest_f": float(self.best_f),
            "swarm_best_f": [s.best_value for s in self.swarms],
            "migrations": self.migrations,
        }
