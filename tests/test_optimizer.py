import numpy as np
import pytest

from benchmarks.functions import BenchmarkFunction
from optimizer.base import ConfigurationError
from optimizer.pso import PSO, PSORule
from optimizer.sma import SMA, SMARule
from optimizer.swarm import Swarm


def _rules():
    return [PSORule(social=1.4, cognitive=1.4, inertia=0.7), SMARule(z=0.03, iterations=50)]


@pytest.mark.parametrize("rule", _rules(), ids=["pso", "sma"])
def test_best_value_monotone(rule):
    opt = Swarm("ackley", rule, pop=20, dim=5, seed=3)
    previous = opt.best_value
    for _ in range(50):
        opt.step()
        assert opt.best_value <= previous
        previous = opt.best_value
    assert opt.history == sorted(opt.history, reverse=True)


@pytest.mark.parametrize("rule", _rules(), ids=["pso", "sma"])
def test_best_matches_position(rule):
    opt = Swarm("rastrigin", rule, pop=15, dim=3, seed=8)
    opt.run(30)
    assert opt.function(opt.best_position) == pytest.approx(opt.best_value)
    assert opt.best_value <= opt.fitness().min()
    for m in opt.population:
        # cached fitness is never stale
        assert m.f == pytest.approx(opt.function(m.x))
        assert np.all(np.asarray(m.x) >= opt.domain[0]) and np.all(np.asarray(m.x) <= opt.domain[1])


@pytest.mark.parametrize("rule", _rules(), ids=["pso", "sma"])
def test_reproducible_with_seed(rule):
    res1 = Swarm("solomon", rule, pop=15, dim=4, seed=42).run(40)
    res2 = Swarm("solomon", rule, pop=15, dim=4, seed=42).run(40)
    assert np.allclose(np.asarray(res1["x"]), np.asarray(res2["x"]))
    assert np.isclose(res1["f"], res2["f"])


def test_reset_keeps_configuration():
    opt = PSO("brown", pop=12, dim=3, seed=9, social=1.1, cognitive=1.2, inertia=0.6)
    opt.run(25)
    opt.reset()
    assert opt.pop == 12 and len(opt.population) == 12
    assert opt.domain == BenchmarkFunction.BROWN.bounds
    assert opt.rule == PSORule(social=1.1, cognitive=1.2, inertia=0.6)
    assert opt.iteration == 0 and opt.history == []
    assert np.isfinite(opt.best_value)
    assert opt.best_value == pytest.approx(opt.fitness().min())
    for p in opt.population:
        assert p.v.to_list() == [0.0, 0.0, 0.0]
        assert p.pbest_f == p.f


def test_reset_then_rerun_from_seed_reproduces_trajectory():
    a = SMA("ackley", pop=10, dim=3, seed=5, iterations=30)
    a.run(30)
    a.reset()
    a.rng = np.random.default_rng(123)
    a.reset()
    a.run(30)

    b = SMA("ackley", pop=10, dim=3, seed=5, iterations=30)
    b.rng = np.random.default_rng(123)
    b.reset()
    b.run(30)
    assert a.history == b.history


def test_custom_domain_and_state():
    opt = PSO("ackley", pop=8, dim=2, domain=(-1.0, 1.0), seed=0)
    opt.run(5)
    st = opt.state()
    assert st["iter"] == 5
    assert st["evals_total"] == 8 * 6
    assert st["gbest_f"] == opt.best_value
    assert st["f_best"] >= st["gbest_f"]


def test_configuration_errors():
    with pytest.raises(ConfigurationError):
        PSO("ackley", domain=(1.0, 1.0))
    with pytest.raises(ConfigurationError):
        PSO("ackley", domain=(2.0, -2.0))
    with pytest.raises(ConfigurationError):
        PSO("ackley", pop=0)
    with pytest.raises(ConfigurationError):
        PSO("nope")
    with pytest.raises(ConfigurationError):
        PSO("ackley", vmax_frac=0.0)
