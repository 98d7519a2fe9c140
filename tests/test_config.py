# tests/test_config.py
"""Tests for engine configuration."""

import pytest


def test_config_loads_defaults():
    from stack_engine.config import EngineConfig

    config = EngineConfig()

    assert config.fuzzy_min_confidence == 0.6
    assert config.familiarity_bonus == 8.0
    assert config.single_score_floor_ratio == 0.7
    assert config.apply_replacements is True
    assert config.apply_pool_filters is True
    assert config.fetch_workers == 4


def test_config_from_env(monkeypatch):
    from stack_engine.config import EngineConfig

    monkeypatch.setenv("STACK_ENGINE_FUZZY_MIN_CONFIDENCE", "0.75")
    monkeypatch.setenv("STACK_ENGINE_APPLY_REPLACEMENTS", "off")
    monkeypatch.setenv("STACK_ENGINE_FETCH_WORKERS", "2")
    monkeypatch.setenv("STACK_ENGINE_LOG_LEVEL", "debug")

    config = EngineConfig.from_env()

    assert config.fuzzy_min_confidence == 0.75
    assert config.apply_replacements is False
    assert config.fetch_workers == 2
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("name,value", [
    ("STACK_ENGINE_FAMILIARITY_BONUS", "lots"),
    ("STACK_ENGINE_FETCH_WORKERS", "2.5"),
    ("STACK_ENGINE_APPLY_POOL_FILTERS", "maybe"),
    ("STACK_ENGINE_FETCH_WORKERS", "0"),
    ("STACK_ENGINE_FUZZY_MIN_CONFIDENCE", "1.5"),
])
def test_config_rejects_invalid_env(monkeypatch, name, value):
    from stack_engine.config import EngineConfig
    from stack_engine.errors import ConfigurationError

    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigurationError) as exc_info:
        EngineConfig.from_env()

    assert exc_info.value.setting
