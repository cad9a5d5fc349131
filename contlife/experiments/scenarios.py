from ..config import ConfigurationError, SimConfig

SCENARIOS = {
    'default': {},
    'dense': {'seed_fraction': 0.05},
    'sparse': {'seed_fraction': 0.002},
    'small': {'width': 10, 'height': 10, 'seed_fraction': 0.05},
}


def scenario(name, **overrides) -> SimConfig:
    if name not in SCENARIOS:
        raise ConfigurationError(f"unknown scenario {name!r}; choose from {sorted(SCENARIOS)}")
    return SimConfig().with_overrides(**{**SCENARIOS[name], **overrides})
