from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterable, Union


@dataclass
class BatchStatistics:
    """
    Min / max / mean / count over repeated trial results.

    Merging is count-weighted, so folding samples one by one, or merging
    partial accumulators from parallel workers in any grouping, gives the
    same numbers up to floating-point rounding.
    """
    min: float = math.inf
    max: float = -math.inf
    mean: float = 0.0
    count: int = 0

    def add(self, x: float) -> "BatchStatistics":
        x = float(x)
        if x > self.max:
            self.max = x
        if x < self.min:
            self.min = x
        previous_sum = self.mean * self.count
        self.count += 1
        self.mean = (previous_sum + x) / self.count
        return self

    def merge(self, other: "BatchStatistics") -> "BatchStatistics":
        if other.max > self.max:
            self.max = other.max
        if other.min < self.min:
            self.min = other.min
        total = self.count + other.count
        if total == 0:
            return self
        self.mean = (self.mean * self.count + other.mean * other.count) / total
        self.count = total
        return self

    def __iadd__(self, other: Union["BatchStatistics", float]) -> "BatchStatistics":
        if isinstance(other, BatchStatistics):
            return self.merge(other)
        return self.add(other)

    def __add__(self, other: Union["BatchStatistics", float]) -> "BatchStatistics":
        result = BatchStatistics(self.min, self.max, self.mean, self.count)
        result += other
        return result

    __radd__ = __add__

    @classmethod
    def from_samples(cls, samples: Iterable[float]) -> "BatchStatistics":
        acc = cls()
        for x in samples:
            acc.add(x)
        return acc

    @classmethod
    def combine(cls, parts: Iterable["BatchStatistics"]) -> "BatchStatistics":
        acc = cls()
        for part in parts:
            acc.merge(part)
        return acc

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
