"""YAML configuration loader with environment variable substitution."""
from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..config import DEFAULT_CONFIG_FILE, DEFAULT_LOG_LEVEL, CacheConfig

_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")


class ConfigLoader:
    """Load cache configuration from a YAML file.

    String values may reference ``${VAR}`` or ``${VAR:-default}``.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self.config_path = Path(config_path) if config_path else Path(DEFAULT_CONFIG_FILE)
        self._config_cache: Optional[Dict[str, Any]] = None

    def load_config(self) -> Dict[str, Any]:
        if self._config_cache is not None:
            return self._config_cache

        if not self.config_path.exists():
            self._config_cache = self._get_default_config()
            return self._config_cache

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise RuntimeError(f"Failed to load config file {self.config_path}: {e}") from e
        if not isinstance(config, dict):
            raise RuntimeError(f"Config file {self.config_path} must contain a mapping")

        self._config_cache = self._process_env_vars(config)
        return self._config_cache

    def _get_default_config(self) -> Dict[str, Any]:
        return {
            "cache": {"stats_enabled": True},
            "logging": {"level": DEFAULT_LOG_LEVEL},
        }

    def _process_env_vars(self, config: Any) -> Any:
        if isinstance(config, dict):
            return {k: self._process_env_vars(v) for k, v in config.items()}
        elif isinstance(config, list):
            return [self._process_env_vars(item) for item in config]
        elif isinstance(config, str):
            return self._replace_env_vars(config)
        else:
            return config

    def _replace_env_vars(self, text: str) -> str:
        def replace_match(match):
            var_expr = match.group(1)
            if ":-" in var_expr:
                var_name, default_value = var_expr.split(":-", 1)
                return os.environ.get(var_name, default_value)
            else:
                return os.environ.get(var_expr, "")

        return _ENV_PATTERN.sub(replace_match, text)

    def get_log_level(self) -> str:
        config = self.load_config()
        return (config.get("logging") or {}).get("level", DEFAULT_LOG_LEVEL)

    def get_cache_config(self) -> CacheConfig:
        config = self.load_config()
        cache_config = config.get("cache") or {}
        return CacheConfig(
            stats_enabled=_to_bool(cache_config.get("stats_enabled"), default=True),
        )


def _to_bool(value: object, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"1", "true", "yes", "on"}:
        return True
    if text in {"0", "false", "no", "off"}:
        return False
    return default


def create_config_loader(config_path: Optional[Union[str, Path]] = None) -> ConfigLoader:
    return ConfigLoader(config_path)


__all__ = ["ConfigLoader", "create_config_loader"]
