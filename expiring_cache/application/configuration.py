"""Runtime configuration models and helpers."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from ..config import DEFAULT_LOG_LEVEL, CacheConfig
from .config_loader import _to_bool, create_config_loader

ENV_LOG_LEVEL = "EXPIRING_CACHE_LOG_LEVEL"
ENV_STATS_ENABLED = "EXPIRING_CACHE_STATS_ENABLED"


@dataclass(frozen=True)
class CacheSettings:
    """Top level configuration for a cache deployment."""

    log_level: str = DEFAULT_LOG_LEVEL
    cache: CacheConfig = field(default_factory=CacheConfig)

    @classmethod
    def load(
        cls,
        config_file: Optional[Union[str, Path]] = None,
        *,
        log_level: Optional[str] = None,
        stats_enabled: Optional[bool] = None,
    ) -> "CacheSettings":
        """Resolve settings from arguments, environment, config file and defaults.

        Priority: keyword arguments > environment variables > config file >
        built-in defaults.
        """

        config_loader = create_config_loader(config_file)
        file_cache = config_loader.get_cache_config()

        resolved_level = log_level or os.environ.get(ENV_LOG_LEVEL) or config_loader.get_log_level()

        if stats_enabled is None:
            stats_enabled = _to_bool(os.environ.get(ENV_STATS_ENABLED), default=file_cache.stats_enabled)

        return cls(
            log_level=str(resolved_level).upper(),
            cache=CacheConfig(stats_enabled=stats_enabled),
        )


__all__ = ["CacheSettings", "ENV_LOG_LEVEL", "ENV_STATS_ENABLED"]
