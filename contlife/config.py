import os
from dataclasses import dataclass, replace

import numpy as np

DTYPES = {"float32": np.float32, "float64": np.float64}


class ConfigurationError(ValueError):
    """Invalid simulation parameters (dimensions, radii, thresholds, ...)."""


@dataclass(frozen=True)
class SimConfig:
    width: int = 100
    height: int = 100
    seed: int = 444
    seed_fraction: float = 0.01      # share of cells that receive a glider anchor
    near_radius: int = 1
    distant_radius: int = 3
    live_max: float = 0.8            # live cells survive while combined <= live_max
    birth_min: float = 0.275         # dead cells grow once combined >= birth_min
    dtype: str = "float64"

    def validate(self) -> "SimConfig":
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(f"grid must be at least 1x1, got {self.width}x{self.height}")
        if self.seed_fraction < 0:
            raise ConfigurationError(f"seed_fraction must be >= 0, got {self.seed_fraction}")
        if self.near_radius < 1 or self.distant_radius < 1:
            raise ConfigurationError("ring radii must be >= 1")
        if self.dtype not in DTYPES:
            raise ConfigurationError(f"dtype must be one of {sorted(DTYPES)}, got {self.dtype!r}")
        return self

    @property
    def np_dtype(self):
        return DTYPES[self.dtype]

    def with_overrides(self, **kw) -> "SimConfig":
        return replace(self, **kw).validate()

    @classmethod
    def from_env(cls, prefix: str = "CONTLIFE_") -> "SimConfig":
        """Build a config from CONTLIFE_* environment variables, falling back to defaults."""
        base = cls()
        try:
            cfg = cls(
                width=int(os.getenv(prefix + "WIDTH", base.width)),
                height=int(os.getenv(prefix + "HEIGHT", base.height)),
                seed=int(os.getenv(prefix + "SEED", base.seed)),
                seed_fraction=float(os.getenv(prefix + "SEED_FRACTION", base.seed_fraction)),
                dtype=os.getenv(prefix + "DTYPE", base.dtype),
            )
        except ValueError as e:
            raise ConfigurationError(f"bad {prefix}* environment value: {e}") from e
        return cfg.validate()
