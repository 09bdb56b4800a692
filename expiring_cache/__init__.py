"""In-process string cache with lazily checked expiration deadlines."""
from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple

__all__ = [
    "Cache",
    "CacheConfig",
    "CacheContainer",
    "CacheSettings",
    "CacheStats",
    "ReadWriteLock",
]

_LOOKUP: Dict[str, Tuple[str, str]] = {
    "Cache": ("expiring_cache.cache", "Cache"),
    "CacheStats": ("expiring_cache.cache", "CacheStats"),
    "CacheConfig": ("expiring_cache.config", "CacheConfig"),
    "CacheContainer": ("expiring_cache.application.container", "CacheContainer"),
    "CacheSettings": ("expiring_cache.application.configuration", "CacheSettings"),
    "ReadWriteLock": ("expiring_cache.utils.locks", "ReadWriteLock"),
}


def __getattr__(name: str) -> Any:  # pragma: no cover - thin wrapper
    try:
        module_name, attr_name = _LOOKUP[name]
    except KeyError as exc:  # pragma: no cover - preserve AttributeError semantics
        raise AttributeError(name) from exc
    module = import_module(module_name)
    return getattr(module, attr_name)
