from __future__ import annotations
import logging
from typing import Dict, List, Optional, Sequence, Union
import numpy as np

from benchmarks.functions import BenchmarkFunction
from .base import ConfigurationError, Domain, MovementRule, check_domain, uniform_position
from .vector import FixedVector

logger = logging.getLogger(__name__)


def resolve_function(function: Union[str, BenchmarkFunction]) -> BenchmarkFunction:
    if isinstance(function, BenchmarkFunction):
        return function
    return BenchmarkFunction.from_name(function)


class Swarm:
    """
    Single-population optimizer (minimisation).

    Generic over the member variant: the movement rule decides how members
    are spawned and moved, the swarm keeps the population, the best-so-far
    tracking and the iteration loop.

    - function: BenchmarkFunction or its name
    - rule: a MovementRule (PSORule / SMARule)
    - pop: population size
    - dim: dimension of the search space
    - domain: (lower, upper), defaults to the function's canonical domain
    - seed: int, SeedSequence or Generator; None draws fresh entropy
    """
    def __init__(
        self,
        function: Union[str, BenchmarkFunction],
        rule: MovementRule,
        pop: int = 40,
        dim: int = 5,
        domain: Optional[Sequence[float]] = None,
        seed=None,
    ):
        self.function: BenchmarkFunction = resolve_function(function)
        if int(pop) <= 0:
            raise ConfigurationError(f"Population size must be positive, got {pop}")
        if int(dim) <= 0:
            raise ConfigurationError(f"Dimension must be positive, got {dim}")
        rule.validate()

        self.rule = rule
        self.pop: int = int(pop)
        self.D: int = int(dim)
        self.domain: Domain = check_domain(domain if domain is not None else self.function.bounds)
        self.rng: np.random.Generator = np.random.default_rng(seed)

        self.population: List = []
        self.best_x: FixedVector = FixedVector.zeros(self.D)
        self.best_f: float = np.inf
        self.iteration: int = 0
        self.history: List[float] = []
        self._evals_total = 0
        self._init_population()

    def _init_population(self) -> None:
        self.population = []
        for _ in range(self.pop):
            x = uniform_position(self.rng, self.D, self.domain)
            self.population.append(self.rule.spawn(x, self.evaluate(x)))
        self.best_x = FixedVector.zeros(self.D)
        self.best_f = np.inf
        self.iteration = 0
        self.history = []
        self.update_best()
        self.rule.prepare(self)

    def evaluate(self, x: FixedVector) -> float:
        self._evals_total += 1
        return self.function(x)

    def random_position(self) -> FixedVector:
        return uniform_position(self.rng, self.D, self.domain)

    def update_best(self) -> None:
        """Fold the current population into the best-so-far tracking (strict improvement only)."""
        for m in self.population:
            if m.f < self.best_f:
                self.best_f = m.f
                self.best_x = m.x.copy()
            self.rule.observe(m)

    def step(self) -> None:
        # members move against a frozen copy of the pre-iteration population
        snapshot = [m.copy() for m in self.population] if self.rule.needs_snapshot else None
        for m in self.population:
            self.rule.move(m, self, snapshot)
        self.update_best()
        self.rule.finish_iteration(self)
        self.iteration += 1
        self.history.append(self.best_f)

    def run(self, iterations: int) -> Dict:
        for _ in range(int(iterations)):
            self.step()
        return self.best()

    def reset(self) -> None:
        """Fresh random population and best tracking; configuration is kept."""
        logger.debug("Resetting %s swarm on %s", self.rule.name, self.function.value)
        self._init_population()

    @property
    def best_position(self) -> FixedVector:
        return self.best_x.copy()

    @property
    def best_value(self) -> float:
        return float(self.best_f)

    def best(self) -> Dict:
        return {"x": self.best_x.copy(), "f": float(self.best_f)}

    def fitness(self) -> np.ndarray:
        return np.array([m.f for m in self.population], dtype=float)

    def state(self) -> Dict:
        f_arr = self.fitness()
        return {
            "iter": self.iteration,
            "evals_total": self._evals_total,
            "f_best": float(np.min(f_arr)),
            "f_mean": float(np.mean(f_arr)),
            "f_std": float(np.std(f_arr)),
            "gbest_f": float(self.best_f),
        }
