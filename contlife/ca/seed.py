import logging
import math

import numpy as np

from .grid import Grid

logger = logging.getLogger(__name__)

# 2x2 body plus a three-cell diagonal tail trailing up-left of the anchor
GLIDER = ((0, 0), (1, 0), (0, 1), (1, 1),
          (-1, -1), (-2, -2), (-3, -3))


def glider_count(width: int, height: int, seed_fraction: float) -> int:
    return int(math.floor(width * height * seed_fraction))


def place_glider(grid: Grid, x: int, y: int) -> None:
    """Set the seven glider cells around anchor (x, y) to 1.0, wrapping at the edges."""
    for dx, dy in GLIDER:
        grid.set(x + dx, y + dy, 1.0)


def seed_random(grid: Grid, rng, count: int):
    """
    Place `count` gliders at uniformly drawn anchors, x drawn before y for each one.
    `rng` is a numpy Generator or an int seed. Overlapping gliders overwrite
    each other in draw order. Returns the anchors.
    """
    rng = np.random.default_rng(rng)
    w, h = grid.dimensions()
    anchors = []
    for _ in range(count):
        x = int(rng.integers(0, w))
        y = int(rng.integers(0, h))
        place_glider(grid, x, y)
        anchors.append((x, y))
    logger.debug("seeded %d gliders on %dx%d grid", count, w, h)
    return anchors
