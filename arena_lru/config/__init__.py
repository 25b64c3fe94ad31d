"""Configuration models for arena_lru."""

from .models import CacheConfig, EnvSettings

__all__ = ["CacheConfig", "EnvSettings"]
