"""
Tests for configuration models and cache construction from config.
"""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from arena_lru import CacheConfig, EnvSettings, LRUCache


def test_cache_config_load(tmp_path: Path):
    """Test loading a cache config from a JSON file."""
    cfg_path = tmp_path / "cache.json"
    cfg_path.write_text(json.dumps({"capacity": 16}))

    cfg = CacheConfig.load(cfg_path)
    assert cfg.capacity == 16

    cache = LRUCache.from_config(cfg)
    assert cache.capacity == 16
    assert len(cache) == 0


def test_cache_config_rejects_zero_capacity(tmp_path: Path):
    """Test config validation enforces a positive capacity."""
    cfg_path = tmp_path / "cache.json"
    cfg_path.write_text(json.dumps({"capacity": 0}))

    with pytest.raises(ValidationError):
        CacheConfig.load(cfg_path)


def test_cache_config_requires_capacity():
    """Test capacity has no implicit default in file config."""
    with pytest.raises(ValidationError):
        CacheConfig.model_validate({})


def test_env_settings_defaults(monkeypatch):
    """Test settings defaults when no environment overrides exist."""
    monkeypatch.delenv("ARENA_LRU_CAPACITY", raising=False)
    monkeypatch.delenv("ARENA_LRU_LOG_LEVEL", raising=False)
    settings = EnvSettings(_env_file=None)  # type: ignore[call-arg]
    assert settings.capacity == 128
    assert settings.log_level == "INFO"


def test_env_settings_from_environment(monkeypatch):
    """Test settings are read from ARENA_LRU_-prefixed variables."""
    monkeypatch.setenv("ARENA_LRU_CAPACITY", "5")
    monkeypatch.setenv("ARENA_LRU_LOG_LEVEL", "DEBUG")
    settings = EnvSettings(_env_file=None)  # type: ignore[call-arg]
    assert settings.capacity == 5
    assert settings.log_level == "DEBUG"


def test_env_settings_reject_negative_capacity(monkeypatch):
    """Test an invalid environment capacity fails validation."""
    monkeypatch.setenv("ARENA_LRU_CAPACITY", "-3")
    with pytest.raises(ValidationError):
        EnvSettings(_env_file=None)  # type: ignore[call-arg]


def test_from_settings(monkeypatch):
    """Test building a cache from explicit and implicit settings."""
    settings = EnvSettings(capacity=3, _env_file=None)  # type: ignore[call-arg]
    assert LRUCache.from_settings(settings).capacity == 3

    monkeypatch.setenv("ARENA_LRU_CAPACITY", "7")
    assert LRUCache.from_settings().capacity == 7
