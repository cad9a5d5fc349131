import numpy as np

from contlife.ca.grid import Grid
from contlife.ca.seed import GLIDER, glider_count, place_glider, seed_random


def test_place_glider_sets_exactly_seven_cells():
    g = Grid.from_array(np.full((20, 20), 0.3))
    place_glider(g, 10, 10)
    ones = {(int(x), int(y)) for x, y in zip(*np.nonzero(g.cells == 1.0))}
    assert ones == {(10 + dx, 10 + dy) for dx, dy in GLIDER}
    assert np.count_nonzero(g.cells == 0.3) == 400 - 7


def test_place_glider_wraps_tail_across_corner():
    g = Grid(10, 10)
    place_glider(g, 1, 1)
    for x, y in [(1, 1), (2, 1), (1, 2), (2, 2), (0, 0), (9, 9), (8, 8)]:
        assert g.get(x, y) == 1.0
    assert g.occupied_count() == 7


def test_overlapping_gliders_overwrite():
    g = Grid(10, 10)
    place_glider(g, 5, 5)
    place_glider(g, 5, 5)
    assert g.occupied_count() == 7
    place_glider(g, 6, 6)
    # second glider adds only (7,6),(6,7),(7,7)
    assert g.occupied_count() == 10


def test_glider_count_floors():
    assert glider_count(100, 100, 0.01) == 100
    assert glider_count(10, 10, 0.05) == 5
    assert glider_count(3, 3, 0.01) == 0
    assert glider_count(15, 15, 0.01) == 2


def test_seed_random_is_reproducible():
    a, b = Grid(30, 30), Grid(30, 30)
    anchors_a = seed_random(a, 444, 9)
    anchors_b = seed_random(b, np.random.default_rng(444), 9)
    assert anchors_a == anchors_b
    assert np.array_equal(a.cells, b.cells)
    assert len(anchors_a) == 9
    assert all(0 <= x < 30 and 0 <= y < 30 for x, y in anchors_a)


def test_seed_random_draws_x_then_y():
    g = Grid(40, 25)
    anchors = seed_random(g, 7, 3)
    rng = np.random.default_rng(7)
    expected = []
    for _ in range(3):
        x = int(rng.integers(0, 40))
        y = int(rng.integers(0, 25))
        expected.append((x, y))
    assert anchors == expected


def test_seed_random_zero_count_leaves_grid_empty():
    g = Grid(10, 10)
    assert seed_random(g, 1, 0) == []
    assert not g.cells.any()
