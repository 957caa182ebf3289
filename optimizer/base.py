from __future__ import annotations
from typing import List, Sequence, Tuple
import numpy as np

from .vector import FixedVector

Domain = Tuple[float, float]


class ConfigurationError(ValueError):
    """Invalid optimizer setup. Raised at construction time, never recovered."""


def check_domain(domain: Sequence[float]) -> Domain:
    try:
        lo, hi = (float(b) for b in domain)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Domain must be a (lower, upper) pair, got {domain!r}") from exc
    if not lo < hi:
        raise ConfigurationError(f"Incorrect order of bounds or zero size: ({lo}, {hi})")
    return lo, hi


def uniform_position(rng: np.random.Generator, dim: int, domain: Domain) -> FixedVector:
    lo, hi = domain
    return FixedVector(rng.uniform(lo, hi, size=dim))


def spawn_seeds(seed, n: int) -> List[np.random.SeedSequence]:
    """Independent child seeds, one per sub-optimizer. Accepts an int, None or a SeedSequence."""
    if not isinstance(seed, np.random.SeedSequence):
        seed = np.random.SeedSequence(seed)
    return seed.spawn(n)


class MovementRule:
    """
    Variant-specific part of a swarm: how members are created and moved.

    The swarm owns population, best tracking and the iteration loop; a rule
    only has to implement spawn() and move(). The remaining hooks default
    to doing nothing.
    """
    name: str = "rule"
    # move() reads a frozen copy of the population
    needs_snapshot: bool = True

    def validate(self) -> None:
        pass

    def spawn(self, x: FixedVector, f: float):
        raise NotImplementedError

    def prepare(self, swarm) -> None:
        """Called once the population has been (re)initialised."""

    def move(self, member, swarm, snapshot) -> None:
        raise NotImplementedError

    def observe(self, member) -> None:
        """Called for every member while the swarm updates its best."""

    def finish_iteration(self, swarm) -> None:
        """Called after moves and best update of one iteration."""
