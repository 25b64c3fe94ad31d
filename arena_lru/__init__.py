"""
arena_lru package.

A fixed-capacity least-recently-used cache backed by a handle-indexed slot
arena, with pydantic configuration models and logging setup helpers.
"""

from .__version__ import __version__
from .cache import LRUCache
from .config.models import CacheConfig, EnvSettings
from .observability import setup_logging

__all__ = [
    "__version__",
    "CacheConfig",
    "EnvSettings",
    "LRUCache",
    "setup_logging",
]
