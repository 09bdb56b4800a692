"""Application layer: configuration loading and cache wiring."""
from __future__ import annotations

from .configuration import CacheSettings
from .container import CacheContainer

__all__ = ["CacheContainer", "CacheSettings"]
