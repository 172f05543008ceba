"""In-memory cache with lazy, read-time expiry.

Stale entries are never returned but stay in the map until the same key is
written again. There is no capacity bound and no background sweep; each
worker process keeps its own copy.
"""

import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generic, TypeVar

CACHE_TTL_SECONDS = 60 * 60  # 1 hour

V = TypeVar("V")


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    value: V
    stored_at: float


class ReadWriteLock:
    """Many concurrent readers or a single writer. Waiting writers block new readers."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writing or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class ExpiringCache(Generic[V]):
    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self._entries: dict[str, CacheEntry[V]] = {}
        self._lock = ReadWriteLock()
        self._ttl = ttl_seconds
        self._clock = clock

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: str) -> tuple[V | None, bool]:
        """Return `(value, True)` for a fresh entry, `(None, False)` otherwise."""
        with self._lock.read():
            entry = self._entries.get(key)
        if entry is None:
            return None, False
        if self._clock() - entry.stored_at > self._ttl:
            return None, False
        return entry.value, True

    def set(self, key: str, value: V) -> None:
        entry = CacheEntry(value=value, stored_at=self._clock())
        with self._lock.write():
            self._entries[key] = entry

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._entries)
