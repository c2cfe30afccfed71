"""Configuration data models."""

import math
import re
from dataclasses import asdict, dataclass, fields
from typing import Any

# Older dashboards exported the decay window under this name.
LEGACY_KEYS = {"recency_half_life_days": "recency_decay_days"}


class ConfigError(ValueError):
    """Invalid configuration values."""

    pass


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()


@dataclass(frozen=True)
class ScoringWeights:
    """Weights of the worklist triage score.

    Every term of the score is driven by one of these values so a ranking can
    be explained, and tests can swap them freely.
    """

    flag_weight: float = 100
    ai_high_bonus: float = 80
    ai_high_threshold: float = 90
    ai_factor: float = 0.6
    sim_factor: float = 0.8
    sim_high_bonus_threshold: float = 40
    sim_high_bonus: float = 20
    ungraded_bonus: float = 30
    recency_max_bonus: float = 30
    recency_decay_days: float = 7

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"Weight '{f.name}' must be a number, got {value!r}")
            if math.isnan(value) or value < 0:
                raise ConfigError(f"Weight '{f.name}' must be non-negative, got {value!r}")
        if self.recency_decay_days <= 0:
            raise ConfigError("Weight 'recency_decay_days' must be greater than zero")

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "ScoringWeights":
        """Create weights from a mapping with snake_case or camelCase keys.

        Missing keys keep their defaults; unknown keys are rejected.
        """
        if not data:
            return cls()

        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = _snake_case(str(key))
            name = LEGACY_KEYS.get(name, name)
            if name not in known:
                raise ConfigError(f"Unknown scoring weight: {key}")
            values[name] = value

        return cls(**values)

    def to_dict(self) -> dict[str, float]:
        return asdict(self)
