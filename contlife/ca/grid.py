import numpy as np

from ..config import ConfigurationError


class Grid:
    """Toroidal field of cell vitalities in [0,1], stored column-major as cells[x, y]."""

    def __init__(self, w=100, h=100, dtype=np.float64):
        if w <= 0 or h <= 0:
            raise ConfigurationError(f"grid must be at least 1x1, got {w}x{h}")
        self.w, self.h = int(w), int(h)
        self.cells = np.zeros((self.w, self.h), dtype=dtype)

    @classmethod
    def from_array(cls, cells, dtype=np.float64):
        arr = np.asarray(cells, dtype=dtype)
        if arr.ndim != 2:
            raise ConfigurationError(f"grid needs a 2D array, got shape {arr.shape}")
        g = cls(arr.shape[0], arr.shape[1], dtype=dtype)
        g.cells[...] = arr
        return g

    def dimensions(self): return self.w, self.h

    def wrap(self, x, y):
        # Python's % already maps negatives into [0, extent)
        return int(x) % self.w, int(y) % self.h

    def get(self, x, y) -> float:
        return float(self.cells[self.wrap(x, y)])

    def set(self, x, y, value) -> None:
        self.cells[self.wrap(x, y)] = value

    @property
    def frozen(self) -> bool:
        return not self.cells.flags.writeable

    def freeze(self) -> "Grid":
        self.cells.setflags(write=False)
        return self

    def copy(self) -> "Grid":
        return Grid.from_array(self.cells, dtype=self.cells.dtype)

    def mean_vitality(self): return float(self.cells.mean())
    def live_count(self): return int(np.count_nonzero(self.cells == 1))
    def occupied_count(self): return int(np.count_nonzero(self.cells > 0))
    def min_value(self): return float(self.cells.min())
    def max_value(self): return float(self.cells.max())

    def __repr__(self):
        return f"Grid({self.w}x{self.h}, occupied={self.occupied_count()}, frozen={self.frozen})"
