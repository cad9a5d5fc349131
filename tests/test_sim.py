import numpy as np
import pytest

from contlife.config import ConfigurationError, SimConfig
from contlife.experiments.scenarios import SCENARIOS, scenario
from contlife.experiments.sim import Simulation, initialize, read, run, step


def test_initialize_is_deterministic():
    a = initialize(100, 100, seed=444, seed_fraction=0.01)
    b = initialize(100, 100, seed=444, seed_fraction=0.01)
    assert np.array_equal(a.cells, b.cells)
    assert a.dimensions() == (100, 100)
    assert 0 < a.occupied_count() <= 100 * 7
    assert set(np.unique(a.cells)) <= {0.0, 1.0}


def test_initialize_depends_on_seed():
    a = initialize(50, 50, seed=1)
    b = initialize(50, 50, seed=2)
    assert not np.array_equal(a.cells, b.cells)


@pytest.mark.parametrize("kw", [{"width": 0}, {"height": -3}, {"seed_fraction": -0.1},
                                {"dtype": "int8"}])
def test_initialize_rejects_bad_configuration(kw):
    with pytest.raises(ConfigurationError):
        initialize(**kw)


def test_read_and_step_contract():
    g = initialize(20, 20, seed=3, seed_fraction=0.02)
    nxt = step(g)
    assert nxt.dimensions() == (20, 20)
    for x in range(20):
        assert read(nxt, x, 0) == nxt.get(x, 0)
        assert read(nxt, x - 20, 20) == nxt.get(x, 0)


def test_simulation_owns_grid_and_counts_generations():
    sim = Simulation(SimConfig(width=30, height=30, seed=5, seed_fraction=0.02))
    first = sim.grid
    sim.step()
    sim.step()
    assert sim.generation == 2
    assert sim.grid is not first
    assert np.array_equal(sim.grid.cells, step(step(first)).cells)
    assert sim.read(0, 0) == sim.grid.get(0, 0)
    stats = sim.stats()
    assert stats['t'] == 2
    assert stats['occupied'] == sim.grid.occupied_count()


def test_run_log_has_one_row_per_generation():
    log = run(T=5, config=scenario('small'), stop_when_extinct=False)
    assert log['t'] == list(range(6))
    assert all(len(v) == 6 for v in log.values())
    assert all(0.0 <= v <= 1.0 for v in log['max_value'])


def test_run_stops_on_extinction():
    log = run(T=50, config=SimConfig(width=10, height=10, seed_fraction=0.0))
    assert log['t'] == [0, 1]
    assert log['extinct'][-1] is True


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("CONTLIFE_WIDTH", "12")
    monkeypatch.setenv("CONTLIFE_SEED", "9")
    monkeypatch.setenv("CONTLIFE_DTYPE", "float32")
    cfg = SimConfig.from_env()
    assert (cfg.width, cfg.height, cfg.seed) == (12, 100, 9)
    assert cfg.np_dtype is np.float32


def test_config_from_env_rejects_garbage(monkeypatch):
    monkeypatch.setenv("CONTLIFE_WIDTH", "wide")
    with pytest.raises(ConfigurationError):
        SimConfig.from_env()


def test_scenarios():
    assert set(SCENARIOS) >= {'default', 'dense', 'sparse', 'small'}
    assert scenario('default') == SimConfig()
    small = scenario('small', seed=1)
    assert (small.width, small.height, small.seed) == (10, 10, 1)
    with pytest.raises(ConfigurationError):
        scenario('huge')
    with pytest.raises(ConfigurationError):
        scenario('small', width=0)
