import logging

from ..ca.grid import Grid
from ..ca.update import TransitionEngine, is_extinct
from ..ca.seed import glider_count, seed_random
from ..analysis.metrics import cluster_count
from ..config import SimConfig

logger = logging.getLogger(__name__)

_engine = TransitionEngine()


def initialize(width=100, height=100, seed=444, seed_fraction=0.01, dtype="float64") -> Grid:
    """Zero grid with floor(width*height*seed_fraction) gliders seeded from `seed`."""
    cfg = SimConfig(width=width, height=height, seed=seed,
                    seed_fraction=seed_fraction, dtype=dtype).validate()
    return _initialize(cfg)


def _initialize(cfg: SimConfig) -> Grid:
    grid = Grid(cfg.width, cfg.height, dtype=cfg.np_dtype)
    count = glider_count(cfg.width, cfg.height, cfg.seed_fraction)
    seed_random(grid, cfg.seed, count)
    logger.info("initialized %dx%d grid, seed=%d, %d gliders", cfg.width, cfg.height, cfg.seed, count)
    return grid


def step(grid: Grid, engine: TransitionEngine = None) -> Grid:
    return (engine or _engine).step(grid)


def read(grid: Grid, x: int, y: int) -> float:
    return grid.get(x, y)


class Simulation:
    """Host-loop state: one grid, one engine, and the generation counter."""

    def __init__(self, config: SimConfig = None):
        self.config = (config or SimConfig()).validate()
        self.engine = TransitionEngine.from_config(self.config)
        self.grid = _initialize(self.config)
        self.generation = 0

    def step(self) -> Grid:
        self.grid = self.engine.step(self.grid)
        self.generation += 1
        return self.grid

    def read(self, x, y): return read(self.grid, x, y)
    def extinct(self): return is_extinct(self.grid)

    def stats(self) -> dict:
        g = self.grid
        return {'t': self.generation, 'mean_vitality': g.mean_vitality(),
                'occupied': g.occupied_count(), 'live': g.live_count(),
                'clusters': cluster_count(g), 'min_value': g.min_value(),
                'max_value': g.max_value(), 'extinct': self.extinct()}


def run(T=200, config: SimConfig = None, stop_when_extinct=True):
    """Run T generations and return a column log; generation 0 is the seeded grid."""
    sim = Simulation(config)
    log = {k: [] for k in ['t', 'mean_vitality', 'occupied', 'live', 'clusters',
                           'min_value', 'max_value', 'extinct']}

    def record():
        for k, v in sim.stats().items():
            log[k].append(v)

    record()
    for _ in range(T):
        sim.step()
        record()
        if stop_when_extinct and log['extinct'][-1]:
            logger.info("extinct at generation %d", sim.generation)
            break
    return log
