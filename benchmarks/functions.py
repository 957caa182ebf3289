from __future__ import annotations
from enum import Enum
from typing import Tuple
import numpy as np

from optimizer.base import ConfigurationError


def ackley(x) -> float:
    """
    Ackley function.
    Global minimum at x = 0, f = 0. Bounds used here [-32, 32]^D.
    """
    x = np.asarray(x, dtype=float)
    n = x.size
    mean_sq = np.sum(x * x) / n
    mean_cos = np.sum(np.cos(2.0 * np.pi * x)) / n
    return float(-20.0 * np.exp(-0.2 * np.sqrt(mean_sq)) - np.exp(mean_cos) + np.e + 20.0)


def schwefel(x) -> float:
    """Schwefel 2.22: sum of squares of |x| plus their product. Minimum 0 at x = 0."""
    a = np.abs(np.asarray(x, dtype=float))
    return float(np.sum(a * a) + np.prod(a))


def brown(x) -> float:
    """
    Brown function over adjacent coordinate pairs.
    With a_i = x_i^2: sum a_i^(a_{i+1} + 1) + a_{i+1}^(a_i + 1).
    Needs D >= 2 to be non-trivial; D = 1 gives 0 everywhere.
    """
    sq = np.asarray(x, dtype=float) ** 2
    a, a_next = sq[:-1], sq[1:]
    return float(np.sum(a ** (a_next + 1.0) + a_next ** (a + 1.0)))


def rastrigin(x) -> float:
    x = np.asarray(x, dtype=float)
    return float(np.sum(x * x - 10.0 * np.cos(2.0 * np.pi * x) + 10.0))


def schwefel2(x) -> float:
    """Sine variant of Schwefel: sum |x sin(sqrt|x|)|. Minimum 0 at x = 0."""
    x = np.asarray(x, dtype=float)
    return float(np.sum(np.abs(x * np.sin(np.sqrt(np.abs(x))))))


def solomon(x) -> float:
    """Solomon (Salomon) function, radially symmetric. Minimum 0 at x = 0."""
    x = np.asarray(x, dtype=float)
    r = np.sqrt(np.sum(x * x))
    return float(1.0 - np.cos(2.0 * np.pi * r) + 0.1 * r)


class BenchmarkFunction(Enum):
    ACKLEY = "ackley"
    SCHWEFEL = "schwefel"
    BROWN = "brown"
    RASTRIGIN = "rastrigin"
    SCHWEFEL2 = "schwefel2"
    SOLOMON = "solomon"

    @classmethod
    def from_name(cls, name: str) -> "BenchmarkFunction":
        try:
            return cls(name)
        except ValueError:
            raise ConfigurationError(
                f"Nonexistent function passed: `{name}` (known: {', '.join(names())})"
            ) from None

    @property
    def bounds(self) -> Tuple[float, float]:
        return _BOUNDS[self]

    @property
    def known_minimum(self) -> float:
        # every function in the catalogue reaches 0 at the origin
        return 0.0

    def __call__(self, x) -> float:
        return _EVALUATORS[self](x)


_EVALUATORS = {
    BenchmarkFunction.ACKLEY: ackley,
    BenchmarkFunction.SCHWEFEL: schwefel,
    BenchmarkFunction.BROWN: brown,
    BenchmarkFunction.RASTRIGIN: rastrigin,
    BenchmarkFunction.SCHWEFEL2: schwefel2,
    BenchmarkFunction.SOLOMON: solomon,
}

_BOUNDS = {
    BenchmarkFunction.ACKLEY: (-32.0, 32.0),
    BenchmarkFunction.SCHWEFEL: (-10.0, 10.0),
    BenchmarkFunction.BROWN: (-1.0, 4.0),
    BenchmarkFunction.RASTRIGIN: (-5.12, 5.12),
    BenchmarkFunction.SCHWEFEL2: (-100.0, 100.0),
    BenchmarkFunction.SOLOMON: (-100.0, 100.0),
}


def names():
    return [f.value for f in BenchmarkFunction]
