"""Thread-safe string cache with optional per-entry deadlines.

Expiry is lazy: an entry whose deadline has passed stays in the backing map
until a later write for the same key replaces it, but it is invisible to
:meth:`Cache.get` and :meth:`Cache.keys`.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Protocol, Tuple, Union

from .config import CacheConfig
from .utils.locks import ReadWriteLock
from .utils.logging import get_logger

Deadline = Union[datetime, int, float, None]
Clock = Callable[[], datetime]

_logger = get_logger(__name__)

# datetime.min itself is the zero sentinel, so start one day later.
EARLIEST_DEADLINE = datetime(1, 1, 2, tzinfo=timezone.utc)
LATEST_DEADLINE = datetime.max.replace(tzinfo=timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CacheBackend(Protocol):
    """Protocol implemented by string cache backends."""

    def get(self, key: str) -> Tuple[str, bool]:
        ...

    def put(self, key: str, value: str) -> None:
        ...

    def put_till(self, key: str, value: str, deadline: Deadline) -> None:
        ...

    def keys(self) -> List[str]:
        ...


def normalize_deadline(deadline: Deadline) -> Optional[datetime]:
    """Map every "never expires" spelling to ``None``.

    Numbers are POSIX timestamps; ``0`` and ``datetime.min`` are the zero
    sentinel. Timestamps the platform cannot represent are clamped: too far
    in the future never expires in practice, too far in the past (and NaN)
    is already expired.
    """

    if deadline is None:
        return None
    if isinstance(deadline, datetime):
        if deadline.replace(tzinfo=None) == datetime.min:
            return None
        return deadline
    if not deadline:
        return None
    try:
        return datetime.fromtimestamp(deadline, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        if deadline > 0:
            return LATEST_DEADLINE
        return EARLIEST_DEADLINE


def _comparable_now(now: datetime, deadline: datetime) -> datetime:
    # Naive deadlines are local wall-clock times.
    if deadline.tzinfo is None:
        return now.astimezone().replace(tzinfo=None) if now.tzinfo is not None else now
    return now if now.tzinfo is not None else now.astimezone()


@dataclass(frozen=True)
class _CacheEntry:
    value: str
    deadline: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        if self.deadline is None:
            return False
        return self.deadline <= _comparable_now(now, self.deadline)


@dataclass
class CacheStats:
    """Statistics describing cache utilisation."""

    hits: int = 0
    misses: int = 0
    stores: int = 0

    def snapshot(self) -> Dict[str, int]:
        """Return statistics as a serialisable dict."""

        return {"hits": self.hits, "misses": self.misses, "stores": self.stores}


class Cache(CacheBackend):
    """Shared mapping from string keys to string values.

    Reads (:meth:`get`, :meth:`keys`) run concurrently under a shared lock,
    writes (:meth:`put`, :meth:`put_till`) hold the lock exclusively.
    """

    def __init__(self, config: Optional[CacheConfig] = None, clock: Optional[Clock] = None) -> None:
        self.config = config or CacheConfig()
        self._clock: Clock = clock or utc_now
        self._entries: Dict[str, _CacheEntry] = {}
        self._lock = ReadWriteLock()
        self._stats_lock = threading.Lock()
        self.stats = CacheStats()

    # ------------------------------------------------------------------
    def get(self, key: str) -> Tuple[str, bool]:
        """Return ``(value, True)`` for a live entry, otherwise ``("", False)``."""

        with self._lock.read_locked():
            entry = self._entries.get(key)
            found = entry is not None and not entry.is_expired(self._clock())
        self._record(hits=int(found), misses=int(not found))
        if not found:
            return "", False
        return entry.value, True

    def put(self, key: str, value: str) -> None:
        """Store ``value`` under ``key`` without a deadline."""

        self._store(key, _CacheEntry(value=value))

    def put_till(self, key: str, value: str, deadline: Deadline) -> None:
        """Store ``value`` under ``key`` until ``deadline``.

        The entry is stored even when the deadline already passed; it is then
        invisible from the next read on. An unset deadline behaves like
        :meth:`put`.
        """

        entry = _CacheEntry(value=value, deadline=normalize_deadline(deadline))
        self._store(key, entry)
        if entry.deadline is not None and entry.is_expired(self._clock()):
            _logger.debug("Stored already expired entry for key %r", key)

    def keys(self) -> List[str]:
        """Return the keys of all live entries in no particular order."""

        with self._lock.read_locked():
            now = self._clock()
            return [key for key, entry in self._entries.items() if not entry.is_expired(now)]

    def size(self) -> int:
        """Number of stored entries, expired ones included."""

        with self._lock.read_locked():
            return len(self._entries)

    # ------------------------------------------------------------------
    def _store(self, key: str, entry: _CacheEntry) -> None:
        with self._lock.write_locked():
            previous = self._entries.get(key)
            self._entries[key] = entry
        if previous is not None and previous.deadline is not None and entry.deadline is None:
            _logger.debug("Cleared deadline of key %r", key)
        self._record(stores=1)

    def _record(self, hits: int = 0, misses: int = 0, stores: int = 0) -> None:
        if not self.config.stats_enabled:
            return
        with self._stats_lock:
            self.stats.hits += hits
            self.stats.misses += misses
            self.stats.stores += stores


__all__ = [
    "Cache",
    "CacheBackend",
    "CacheStats",
    "EARLIEST_DEADLINE",
    "LATEST_DEADLINE",
    "normalize_deadline",
    "utc_now",
]
