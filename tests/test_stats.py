import itertools
import math

import numpy as np
import pytest

from utils.stats import BatchStatistics


def test_fold_samples():
    s = BatchStatistics()
    for x in (3.0, 1.0, 5.0):
        s += x
    assert (s.min, s.max, s.mean, s.count) == (1.0, 5.0, 3.0, 3)


def test_merge_with_fresh_fold():
    s = BatchStatistics(min=1.0, max=5.0, mean=3.0, count=3)
    other = BatchStatistics()
    other += 7.0
    s += other
    assert (s.min, s.max, s.mean, s.count) == (1.0, 7.0, 4.0, 4)


def test_empty_accumulator():
    s = BatchStatistics()
    assert s.count == 0 and s.mean == 0.0
    assert s.min == math.inf and s.max == -math.inf
    merged = BatchStatistics() + BatchStatistics()
    assert merged.count == 0 and merged.mean == 0.0
    # merging an empty part changes nothing
    full = BatchStatistics.from_samples([2.0, 4.0])
    full += BatchStatistics()
    assert (full.min, full.max, full.mean, full.count) == (2.0, 4.0, 3.0, 2)


def test_merge_is_associative_and_commutative():
    rng = np.random.default_rng(0)
    samples = list(rng.normal(size=12) * 10)
    reference = BatchStatistics.from_samples(samples)
    assert reference.mean == pytest.approx(float(np.mean(samples)))

    for cuts in itertools.combinations(range(1, 12), 3):
        bounds = (0,) + cuts + (12,)
        parts = [BatchStatistics.from_samples(samples[a:b]) for a, b in zip(bounds, bounds[1:])]
        for merged in (BatchStatistics.combine(parts), BatchStatistics.combine(reversed(parts)),
                       sum(parts[1:], parts[0])):
            assert merged.count == reference.count
            assert merged.min == reference.min and merged.max == reference.max
            assert merged.mean == pytest.approx(reference.mean)


def test_mean_between_min_and_max():
    s = BatchStatistics.from_samples([0.1, 100.0, 3.3, 0.0001])
    assert s.min <= s.mean <= s.max


def test_add_does_not_mutate_operands():
    a = BatchStatistics.from_samples([1.0])
    b = BatchStatistics.from_samples([3.0])
    c = a + b
    assert (a.count, b.count, c.count) == (1, 1, 2)
    assert c.as_dict() == {"min": 1.0, "max": 3.0, "mean": 2.0, "count": 2}
