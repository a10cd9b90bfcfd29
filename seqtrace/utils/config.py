"""Configuration utilities for the folding drivers."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping, TypeVar


@dataclass(frozen=True, slots=True)
class GeneticConfig:
    population_size: int = 18
    generations: int = 12
    mutation_rate: float = 0.001
    elite_fraction: float = 0.05

    def __post_init__(self) -> None:
        if self.population_size < 1:
            raise ValueError(f"population_size must be >= 1, got {self.population_size}")
        if self.generations < 0:
            raise ValueError(f"generations must be >= 0, got {self.generations}")
        if not (0.0 <= self.mutation_rate <= 1.0):
            raise ValueError(f"mutation_rate must be in [0.0, 1.0], got {self.mutation_rate}")
        if not (0.0 <= self.elite_fraction <= 1.0):
            raise ValueError(f"elite_fraction must be in [0.0, 1.0], got {self.elite_fraction}")

    def as_dict(self) -> dict[str, float | int]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class HillClimbConfig:
    iterations: int = 30
    restart_interval: int = 12

    def __post_init__(self) -> None:
        if self.iterations < 0:
            raise ValueError(f"iterations must be >= 0, got {self.iterations}")
        if self.restart_interval < 0:
            raise ValueError(f"restart_interval must be >= 0, got {self.restart_interval}")

    def as_dict(self) -> dict[str, float | int]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class AnnealingConfig:
    iterations: int = 40
    start_temperature: float = 6.0
    cooling_rate: float = 0.9

    def __post_init__(self) -> None:
        if self.iterations < 0:
            raise ValueError(f"iterations must be >= 0, got {self.iterations}")
        if self.start_temperature < 0:
            raise ValueError(f"start_temperature must be >= 0, got {self.start_temperature}")
        if not (0.0 < self.cooling_rate < 1.0):
            raise ValueError(f"cooling_rate must be in (0.0, 1.0), got {self.cooling_rate}")

    def as_dict(self) -> dict[str, float | int]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class ChouFasmanConfig:
    window_size: int = 6
    helix_threshold: float = 1.03
    sheet_threshold: float = 1.00

    def __post_init__(self) -> None:
        if self.window_size < 1:
            raise ValueError(f"window_size must be >= 1, got {self.window_size}")

    def as_dict(self) -> dict[str, float | int]:
        return asdict(self)


ConfigT = TypeVar("ConfigT", GeneticConfig, HillClimbConfig, AnnealingConfig, ChouFasmanConfig)


def config_from_mapping(config_cls: type[ConfigT], values: Mapping[str, Any] | None) -> ConfigT:
    """Build ``config_cls`` from a loose mapping, coercing values to field types.

    Keys may use either ``snake_case`` or ``kebab-case``. Unknown keys raise
    ``ValueError`` so typos in run files surface early.
    """
    if not values:
        return config_cls()
    known = {field.name: field for field in fields(config_cls)}
    kwargs: dict[str, Any] = {}
    for raw_key, raw_value in values.items():
        key = str(raw_key).replace("-", "_")
        if key not in known:
            msg = f"Unknown option for {config_cls.__name__}: {raw_key}. Available: {sorted(known)}"
            raise ValueError(msg)
        default = getattr(config_cls(), key)
        kwargs[key] = _coerce(default, raw_value, f"{config_cls.__name__}.{key}")
    return config_cls(**kwargs)


def _coerce(default: Any, raw_value: Any, name: str) -> Any:
    if isinstance(default, int):
        number = float(raw_value)
        if not number.is_integer():
            msg = f"{name} must be an integer, got {raw_value!r}"
            raise ValueError(msg)
        return int(number)
    return type(default)(raw_value)
