"""Configuration for the decision engine."""

import os
from dataclasses import dataclass

from stack_engine.errors import ConfigurationError

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}", setting=name)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}", setting=name)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}", setting=name)


@dataclass
class EngineConfig:
    """Configuration for the decision engine."""

    # Name matching
    fuzzy_min_confidence: float = 0.6

    # Scoring
    familiarity_bonus: float = 8.0
    single_score_floor_ratio: float = 0.7

    # Assembly
    apply_replacements: bool = True
    apply_pool_filters: bool = True

    # Collaborator prefetch
    fetch_workers: int = 4

    log_level: str = "INFO"

    def __post_init__(self):
        if not 0.0 <= self.fuzzy_min_confidence < 1.0:
            raise ConfigurationError(
                "fuzzy_min_confidence must be in [0, 1)", setting="fuzzy_min_confidence"
            )
        if self.fetch_workers < 1:
            raise ConfigurationError("fetch_workers must be >= 1", setting="fetch_workers")

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create configuration from environment variables."""
        return cls(
            fuzzy_min_confidence=_env_float("STACK_ENGINE_FUZZY_MIN_CONFIDENCE", 0.6),
            familiarity_bonus=_env_float("STACK_ENGINE_FAMILIARITY_BONUS", 8.0),
            single_score_floor_ratio=_env_float("STACK_ENGINE_SINGLE_SCORE_FLOOR_RATIO", 0.7),
            apply_replacements=_env_bool("STACK_ENGINE_APPLY_REPLACEMENTS", True),
            apply_pool_filters=_env_bool("STACK_ENGINE_APPLY_POOL_FILTERS", True),
            fetch_workers=_env_int("STACK_ENGINE_FETCH_WORKERS", 4),
            log_level=os.environ.get("STACK_ENGINE_LOG_LEVEL", "INFO").upper(),
        )
