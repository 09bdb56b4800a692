"""Core configuration values for the expiring cache."""
from __future__ import annotations

from dataclasses import dataclass


DEFAULT_CONFIG_FILE = "expiring_cache.yaml"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class CacheConfig:
    """Behavioural switches of a single cache instance."""

    stats_enabled: bool = True


__all__ = ["CacheConfig", "DEFAULT_CONFIG_FILE", "DEFAULT_LOG_LEVEL"]
