import logging

import numpy as np
from scipy.signal import convolve2d

from ..config import ConfigurationError
from .grid import Grid

logger = logging.getLogger(__name__)

NEAR_RADIUS = 1
DISTANT_RADIUS = 3
LIVE_MAX = 0.8
BIRTH_MIN = 0.275

# 8-neighbor (Moore) kernel without center
NEIGH = np.array([[1, 1, 1],
                  [1, 0, 1],
                  [1, 1, 1]], dtype=int)


def ring_size(radius: int) -> int:
    """Cells in the (2r+1)x(2r+1) block around a center, center excluded."""
    if radius < 1:
        raise ConfigurationError(f"ring radius must be >= 1, got {radius}")
    return (2 * radius + 1) ** 2 - 1


def _offsets(radius):
    for i in range(-radius, radius + 1):
        for j in range(-radius, radius + 1):
            if i == 0 and j == 0:
                continue
            yield i, j


def average_in_ring(grid: Grid, x: int, y: int, radius: int) -> float:
    """Mean vitality of the ring of Chebyshev radius `radius` around (x, y), wrapping at the edges."""
    n = ring_size(radius)
    total = 0.0
    for i, j in _offsets(radius):
        total += grid.get(x + i, y + j)
    return total / n


def ring_means(cells: np.ndarray, radius: int) -> np.ndarray:
    """
    Vectorized average_in_ring for every cell at once (toroidal).
    Sums in the same offset order as the scalar form, in float64, so both agree bit for bit.
    Grids smaller than the ring simply count wrapped cells more than once.
    """
    n = ring_size(radius)
    total = np.zeros(cells.shape, dtype=np.float64)
    for i, j in _offsets(radius):
        total += np.roll(cells, shift=(-i, -j), axis=(0, 1))
    return total / n


def live_neighbor_count(grid: Grid, x: int, y: int) -> int:
    """Number of Moore neighbors that are exactly 1."""
    return sum(1 for i, j in _offsets(1) if grid.get(x + i, y + j) == 1)


def live_neighbor_counts(cells: np.ndarray) -> np.ndarray:
    """Fast live-neighbor counts via 2D convolution (wrapping boundary)."""
    live = (cells == 1).astype(int)
    return convolve2d(live, NEIGH, mode='same', boundary='wrap')


def next_value(current: float, near: float, distant: float,
               live_max: float = LIVE_MAX, birth_min: float = BIRTH_MIN) -> float:
    """
    Scalar transition rule.
    Only a value of exactly 1 counts as live; anything else, 0.5 included, takes the dead branch.
    """
    combined = (near + distant) / 2
    if current == 1:
        return (1 + combined) / 2 if combined <= live_max else 0.0
    return (1 + combined) / 2 if combined >= birth_min else 0.0


def is_extinct(grid: Grid) -> bool:
    """All-zero grids are a fixed point of the rule."""
    return not np.any(grid.cells)


class TransitionEngine:
    def __init__(self, near_radius=NEAR_RADIUS, distant_radius=DISTANT_RADIUS,
                 live_max=LIVE_MAX, birth_min=BIRTH_MIN):
        ring_size(near_radius)
        ring_size(distant_radius)
        if not 0.0 <= birth_min <= 1.0 or not 0.0 <= live_max <= 1.0:
            raise ConfigurationError(f"thresholds must lie in [0,1], got live_max={live_max}, birth_min={birth_min}")
        self.near_radius, self.distant_radius = near_radius, distant_radius
        self.live_max, self.birth_min = live_max, birth_min

    @classmethod
    def from_config(cls, cfg):
        return cls(cfg.near_radius, cfg.distant_radius, cfg.live_max, cfg.birth_min)

    def step_cell(self, grid: Grid, x: int, y: int) -> float:
        """Next value of one cell computed directly from the scalar sampler."""
        near = average_in_ring(grid, x, y, self.near_radius)
        distant = average_in_ring(grid, x, y, self.distant_radius)
        return next_value(grid.get(x, y), near, distant, self.live_max, self.birth_min)

    def step(self, grid: Grid) -> Grid:
        """
        One generation. Reads only `grid` and writes a fresh, frozen grid,
        so the cell update order can never leak into the result.
        """
        c = grid.cells
        near = ring_means(c, self.near_radius)
        distant = ring_means(c, self.distant_radius)
        combined = (near + distant) / 2
        grown = (1 + combined) / 2

        live = c == 1
        survive = live & (combined <= self.live_max)
        born = ~live & (combined >= self.birth_min)

        new = Grid(grid.w, grid.h, dtype=c.dtype)
        new.cells[...] = np.where(survive | born, grown, 0.0)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("step: occupied %d -> %d, mean %.4f",
                         grid.occupied_count(), new.occupied_count(), new.mean_vitality())
        return new.freeze()

    def evolve(self, grid: Grid, n: int):
        """Yield the next n generations."""
        for _ in range(n):
            grid = self.step(grid)
            yield grid


_default_engine = TransitionEngine()


def step(grid: Grid) -> Grid:
    return _default_engine.step(grid)
