from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import numpy as np

from .base import ConfigurationError, MovementRule
from .swarm import Swarm
from .vector import FixedVector


@dataclass
class Particle:
    x: FixedVector
    v: FixedVector
    pbest_x: FixedVector
    pbest_f: float
    f: float

    def copy(self) -> "Particle":
        return Particle(self.x.copy(), self.v.copy(), self.pbest_x.copy(), self.pbest_f, self.f)


@dataclass(frozen=True)
class PSORule(MovementRule):
    """
    Particle Swarm Optimisation (continuous, gbest topology)
    - social: pull towards the swarm best
    - cognitive: pull towards the particle's personal best
    - inertia: share of the previous velocity kept
    - vmax_frac: optional velocity clamp as a fraction of the domain span
    """
    social: float = 1.6
    cognitive: float = 1.6
    inertia: float = 0.72
    vmax_frac: Optional[float] = None

    name = "pso"
    needs_snapshot = False

    def validate(self) -> None:
        if self.vmax_frac is not None and self.vmax_frac <= 0:
            raise ConfigurationError("vmax_frac must be > 0.")

    def spawn(self, x: FixedVector, f: float) -> Particle:
        return Particle(x=x, v=FixedVector.zeros(x.dim), pbest_x=x.copy(), pbest_f=f, f=f)

    def move(self, p: Particle, swarm: Swarm, snapshot) -> None:
        lo, hi = swarm.domain
        r1 = swarm.rng.random()
        r2 = swarm.rng.random()
        p.v = (p.v * self.inertia
               + (swarm.best_x - p.x) * (self.social * r1)
               + (p.pbest_x - p.x) * (self.cognitive * r2))

        if self.vmax_frac is not None:
            vmax = self.vmax_frac * (hi - lo)
            p.v.clamp(-vmax, vmax)

        p.x = (p.x + p.v).clamp(lo, hi)
        p.f = swarm.evaluate(p.x)

    def observe(self, p: Particle) -> None:
        if p.f < p.pbest_f:
            p.pbest_f = p.f
            p.pbest_x = p.x.copy()


def PSO(function, pop: int = 40, dim: int = 5, domain=None, seed=None,
        social: float = 1.6, cognitive: float = 1.6, inertia: float = 0.72,
        vmax_frac: Optional[float] = None) -> Swarm:
    """Build a single-population PSO swarm."""
    rule = PSORule(social=float(social), cognitive=float(cognitive),
                   inertia=float(inertia), vmax_frac=vmax_frac)
    return Swarm(function, rule, pop=pop, dim=dim, domain=domain, seed=seed)


def personal_bests(swarm: Swarm) -> np.ndarray:
    return np.array([p.pbest_f for p in swarm.population], dtype=float)
