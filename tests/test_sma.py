import math

import numpy as np
import pytest

from conftest import ScriptedRng
from optimizer.base import ConfigurationError
from optimizer.sma import SMA, Mold, SMARule, recalculate_weights
from optimizer.vector import FixedVector


def test_sma_converges_on_schwefel():
    opt = SMA("schwefel", pop=30, dim=2, seed=5, z=0.03, iterations=200)
    best = opt.run(200)
    assert best["f"] < 1e-2, f"SMA did not converge on Schwefel 2D, f_best={best['f']}"


def test_exploitation_radius():
    rule = SMARule(z=0.03, iterations=10)
    assert rule.exploitation_radius(0) == pytest.approx(math.atanh(0.9))
    assert rule.exploitation_radius(9) == 0.0
    # longer runs than planned stay at 0 instead of failing
    assert rule.exploitation_radius(25) == 0.0


def test_runs_past_planned_iterations():
    opt = SMA("ackley", pop=10, dim=2, seed=1, iterations=5)
    opt.run(12)
    assert np.isfinite(opt.best_value)
    assert len(opt.history) == 12


def _single_mold_swarm():
    opt = SMA("rastrigin", pop=1, dim=2, seed=0, z=0.0, iterations=10)
    m = opt.population[0]
    m.x = FixedVector([2.0, -1.0])
    m.f = opt.function(m.x)
    m.weight = 1.5
    opt.best_f = m.f
    return opt, m


def test_contraction_move():
    opt, m = _single_mold_swarm()
    # p = tanh(0) = 0, so the second draw always picks contraction
    opt.rng = ScriptedRng(randoms=[0.5, 0.5], uniforms=[0.5])
    opt.rule.move(m, opt, [m.copy()])
    assert m.x.to_list() == [1.0, -0.5]
    assert m.f == pytest.approx(opt.function(m.x))


def test_exploitation_move():
    opt, m = _single_mold_swarm()
    opt.best_f = m.f - 10.0
    a = Mold(FixedVector([1.0, 1.0]), 0.0, 0.0)
    b = Mold(FixedVector([2.0, -2.0]), 0.0, 0.0)
    opt.rng = ScriptedRng(randoms=[0.5, 0.5], uniforms=[0.5], integers=[0, 1])
    opt.rule.move(m, opt, [a, b])
    # first + (second * weight - first) * vb
    expected = np.array([1.0, 1.0]) + (np.array([3.0, -3.0]) - np.array([1.0, 1.0])) * 0.5
    assert np.allclose(np.asarray(m.x), expected)


def test_reseed_move():
    opt, m = _single_mold_swarm()
    opt.rule = SMARule(z=1.0, iterations=10)
    opt.rng = ScriptedRng(randoms=[0.5], uniforms=[3.0])
    opt.rule.move(m, opt, [m.copy()])
    assert m.x.to_list() == [3.0, 3.0]


def test_weights_split_at_half():
    pop = [Mold(FixedVector([0.0]), 0.0, f) for f in (3.0, 1.0, 4.0, 2.0)]
    recalculate_weights(pop, ScriptedRng(randoms=[1.0] * 4))
    w = {m.f: m.weight for m in pop}
    assert w[1.0] == pytest.approx(1.0)
    assert w[2.0] == pytest.approx(1.0 + math.log10(1.0 / 3.0 + 1.0))
    assert w[3.0] == pytest.approx(1.0 - math.log10(2.0 / 3.0 + 1.0))
    assert w[4.0] == pytest.approx(1.0 - math.log10(2.0))


def test_weights_all_tied():
    pop = [Mold(FixedVector([0.0]), 0.0, 7.0) for _ in range(5)]
    recalculate_weights(pop, np.random.default_rng(0))
    assert all(m.weight == 1.0 for m in pop)


def test_invalid_parameters():
    with pytest.raises(ConfigurationError):
        SMA("ackley", z=1.5)
    with pytest.raises(ConfigurationError):
        SMA("ackley", iterations=0)


def test_step_hands_population_copy_to_moves():
    seen = []

    class Recording(SMARule):
        def move(self, mold, swarm, snapshot):
            seen.append(snapshot)
            super().move(mold, swarm, snapshot)

    opt = SMA("ackley", pop=4, dim=2, seed=0, iterations=10)
    opt.rule = Recording(iterations=10)
    before = [m.x.copy() for m in opt.population]
    opt.step()
    assert len(seen) == 4
    assert seen[0] is seen[-1]
    assert [m.x for m in seen[0]] == before
