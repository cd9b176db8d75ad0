# response_cache.py — кеш відповідей проксі в пам'яті процесу
import math
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from cachetools import LRUCache, TTLCache


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    stored_at: float


class ResponseCache:
    """
    In-process key -> normalized response store on top of cachetools.

    Entries expire ``ttl`` seconds after they were stored and are dropped
    lazily on the next ``get``. When ``max_entries`` is set, the least
    recently used entries are dropped on ``put`` once the bound is exceeded.
    A ``ttl`` or ``max_entries`` of 0/None disables that limit.
    """

    def __init__(self, ttl: Optional[float] = None, max_entries: Optional[int] = None,
                 clock: Callable[[], float] = time.monotonic):
        for name, value in (('ttl', ttl), ('max_entries', max_entries)):
            if value is not None and value < 0:
                raise ValueError(f'{name} must not be negative, got {value!r}')
        self.ttl = ttl or None
        self.max_entries = max_entries or None
        self._clock = clock
        maxsize = self.max_entries or math.inf
        if self.ttl is None:
            self._cache = LRUCache(maxsize=maxsize)
        else:
            self._cache = TTLCache(maxsize=maxsize, ttl=self.ttl, timer=clock)
        self._lock = threading.Lock()

    def _expire(self):
        if self.ttl is not None:
            self._cache.expire()

    def get(self, key: str) -> Optional[CacheEntry]:
        with self._lock:
            self._expire()
            return self._cache.get(key)

    def put(self, key: str, value: Any) -> CacheEntry:
        entry = CacheEntry(value=value, stored_at=self._clock())
        with self._lock:
            self._cache[key] = entry
        return entry

    def evict(self, key: str) -> bool:
        with self._lock:
            return self._cache.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def __len__(self) -> int:
        with self._lock:
            self._expire()
            return len(self._cache)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._cache
