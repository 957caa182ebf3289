from __future__ import annotations
from dataclasses import dataclass
import math
import numpy as np

from .base import ConfigurationError, MovementRule
from .swarm import Swarm
from .vector import FixedVector


@dataclass
class Mold:
    x: FixedVector
    weight: float
    f: float

    def copy(self) -> "Mold":
        return Mold(self.x.copy(), self.weight, self.f)


@dataclass(frozen=True)
class SMARule(MovementRule):
    """
    Slime Mould Algorithm.

    Options:
    - z: probability of a fully random re-seed move
    - iterations: planned run length T, drives the exploitation radius
      a = atanh(1 - (k + 1) / T) and the contraction range 1 - k / T
    """
    z: float = 0.03
    iterations: int = 1000

    name = "sma"

    def validate(self) -> None:
        if not 0.0 <= self.z <= 1.0:
            raise ConfigurationError(f"z parameter must lie in [0, 1], got {self.z}")
        if int(self.iterations) <= 0:
            raise ConfigurationError(f"Iteration count must be positive, got {self.iterations}")

    def exploitation_radius(self, k: int) -> float:
        # runs longer than T keep a = 0 instead of leaving atanh's domain
        return math.atanh(max(1.0 - (k + 1) / self.iterations, 0.0))

    def progress(self, k: int) -> float:
        return k / self.iterations

    def spawn(self, x: FixedVector, f: float) -> Mold:
        return Mold(x=x, weight=0.0, f=f)

    def prepare(self, swarm: Swarm) -> None:
        recalculate_weights(swarm.population, swarm.rng)

    def move(self, mold: Mold, swarm: Swarm, snapshot) -> None:
        rng = swarm.rng
        lo, hi = swarm.domain
        k = swarm.iteration
        # radius is refreshed at the end of every iteration, so iteration k sees a(k - 1)
        a = self.exploitation_radius(max(k - 1, 0))

        if rng.random() < self.z:
            mold.x = swarm.random_position()
        else:
            p_value = math.tanh(abs(mold.f - swarm.best_f))
            if rng.random() < p_value:
                first = snapshot[rng.integers(len(snapshot))]
                second = snapshot[rng.integers(len(snapshot))]
                vb = rng.uniform(-a, a)
                mold.x = first.x + (second.x * mold.weight - first.x) * vb
            else:
                r = max(1.0 - self.progress(k), 0.0)
                mold.x = mold.x * rng.uniform(-r, r)

        mold.x.clamp(lo, hi)
        mold.f = swarm.evaluate(mold.x)

    def finish_iteration(self, swarm: Swarm) -> None:
        recalculate_weights(swarm.population, swarm.rng)


def recalculate_weights(population, rng: np.random.Generator) -> None:
    """
    Rank molds by fitness (best first) and assign
    weight = 1 +/- r * log10((best - f_i) / (best - worst) + 1),
    plus for the better half of the ranking, minus for the rest.
    """
    values = np.array([m.f for m in population], dtype=float)
    order = np.argsort(values, kind="stable")
    n = len(order)
    best = values[order[0]]
    worst = values[order[-1]]
    span = best - worst
    # all fitness values tied: no ranking information, weights stay at 1
    degenerate = span == 0 or not np.isfinite(span)

    for rank, idx in enumerate(order):
        if degenerate:
            delta = 0.0
        else:
            delta = rng.random() * math.log10((best - values[idx]) / span + 1.0)
        population[idx].weight = 1.0 + delta if rank < n / 2 else 1.0 - delta


def SMA(function, pop: int = 40, dim: int = 5, domain=None, seed=None,
        z: float = 0.03, iterations: int = 1000) -> Swarm:
    """Build a single-population slime mould swarm."""
    return Swarm(function, SMARule(z=float(z), iterations=int(iterations)),
                 pop=pop, dim=dim, domain=domain, seed=seed)
