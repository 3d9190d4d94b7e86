import math
import yaml
from dataclasses import dataclass, fields, asdict
from pathlib import Path

DEFAULT_CONFIG = Path(__file__).resolve().parents[1] / "configs" / "default.yaml"

# camelCase names used by the batch job configuration
ALIASES = {
    "Q": "q",
    "pheromoneInit": "pheromone_init",
    "explorationRate": "exploration_rate",
    "antCountFactor": "ant_count_factor",
    "randomSeed": "random_seed",
    "distanceOffset": "distance_offset",
    "earlyStop": "early_stop",
    "logInterval": "log_interval",
}

POWER_MODES = ("exact", "fast")


class ConfigError(ValueError):
    pass


def load_config(path=DEFAULT_CONFIG):
    with open(Path(path), "r") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"{path}: invalid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping, got {type(data).__name__}")
    return data


@dataclass(frozen=True)
class RunConfig:
    """Parameters of one Ant System run.

    Values are validated on construction; an out-of-domain value raises
    ConfigError before any solver state is built.
    """

    iterations: int = 2000
    alpha: float = 1.0
    beta: float = 5.0
    evaporation: float = 0.5
    q: float = 500.0
    pheromone_init: float = 1.0
    exploration_rate: float = 0.01
    ant_count_factor: float = 0.8
    ants: int | None = None
    random_seed: int | None = None
    distance_offset: float = 1.0
    power: str = "exact"
    workers: int = 1
    early_stop: int | None = None
    verbose: bool = False
    log_interval: int = 100

    def __post_init__(self):
        self._check_int("iterations", minimum=1)
        for name in ("alpha", "beta", "pheromone_init"):
            self._check_real(name, lower=0.0)
        self._check_real("q", lower=0.0, strict=True)
        self._check_real("ant_count_factor", lower=0.0, strict=True)
        self._check_real("distance_offset", lower=0.0, strict=True)

        self._check_real("evaporation", lower=0.0)
        if self.evaporation >= 1.0:
            raise ConfigError(f"evaporation must be in [0, 1), got {self.evaporation}")
        self._check_real("exploration_rate", lower=0.0)
        if self.exploration_rate > 1.0:
            raise ConfigError(f"exploration_rate must be in [0, 1], got {self.exploration_rate}")

        self._check_int("workers", minimum=1)
        self._check_int("log_interval", minimum=1)
        if self.ants is not None:
            self._check_int("ants", minimum=1)
        if self.early_stop is not None:
            self._check_int("early_stop", minimum=1)
        if self.random_seed is not None:
            self._check_int("random_seed", minimum=0)
        if self.power not in POWER_MODES:
            raise ConfigError(f"power must be one of {POWER_MODES}, got {self.power!r}")
        if not isinstance(self.verbose, bool):
            raise ConfigError(f"verbose must be a boolean, got {self.verbose!r}")

    def _check_int(self, name, minimum):
        value = getattr(self, name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"{name} must be an integer, got {value!r}")
        if value < minimum:
            raise ConfigError(f"{name} must be >= {minimum}, got {value}")

    def _check_real(self, name, lower, strict=False):
        value = getattr(self, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"{name} must be a number, got {value!r}")
        if not math.isfinite(value):
            raise ConfigError(f"{name} must be finite, got {value}")
        if value < lower or (strict and value == lower):
            op = ">" if strict else ">="
            raise ConfigError(f"{name} must be {op} {lower}, got {value}")

    @classmethod
    def from_dict(cls, data, base=None):
        """Build a config from a mapping, on top of `base` (or the defaults)."""
        known = {f.name for f in fields(cls)}
        merged = asdict(base) if base is not None else {}
        for key, value in (data or {}).items():
            name = ALIASES.get(key, key)
            if name not in known:
                raise ConfigError(f"unknown configuration key: {key!r}")
            merged[name] = value
        return cls(**merged)

    @classmethod
    def from_yaml(cls, path=DEFAULT_CONFIG):
        return cls.from_dict(load_config(path))

    def replace(self, **overrides):
        """Copy with the non-None overrides applied."""
        return RunConfig.from_dict({k: v for k, v in overrides.items() if v is not None}, base=self)

    def num_ants(self, towns):
        if self.ants is not None:
            return self.ants
        # round half up; at least one ant
        return max(1, int(math.floor(towns * self.ant_count_factor + 0.5)))
