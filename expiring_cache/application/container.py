"""Dependency container handing out one shared cache instance."""
from __future__ import annotations

import threading
from typing import Callable, Dict, Optional, Type, TypeVar

from ..cache import Cache, Clock
from ..utils.logging import get_logger
from .configuration import CacheSettings

T = TypeVar("T")


class CacheContainer:
    """Simple service locator with lazy initialisation.

    Every caller that receives the same container shares the same cache,
    including callers racing on the first lookup.
    """

    def __init__(self, settings: Optional[CacheSettings] = None, clock: Optional[Clock] = None) -> None:
        self.settings = settings or CacheSettings()
        self._clock = clock
        self._instances: Dict[str, object] = {}
        self._lock = threading.Lock()
        self._logger = get_logger(__name__, self.settings.log_level)

    def _get(self, key: str, factory: Callable[[], T]) -> T:
        with self._lock:
            if key not in self._instances:
                self._instances[key] = factory()
            return self._instances[key]  # type: ignore[return-value]

    def resolve(self, typ: Type[T], factory: Callable[[], T]) -> T:
        return self._get(typ.__name__, factory)

    # ------------------------------------------------------------------
    def cache(self) -> Cache:
        def factory() -> Cache:
            self._logger.info(
                "Creating cache (stats_enabled=%s)", self.settings.cache.stats_enabled
            )
            return Cache(config=self.settings.cache, clock=self._clock)

        return self.resolve(Cache, factory)


__all__ = ["CacheContainer"]
