"""
Purpose: In-memory store for resolved routes.
Bounded LRU keyed by cache_key(), with an optional time-to-live so
traffic-aware results can be refreshed. Not thread-safe on its own:
the resolver only touches it while holding its lock.
"""

from __future__ import annotations

import time
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from routing.models import RouteResult


class RouteCache:
    def __init__(self, max_entries: int = 10_000, ttl_seconds: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic):
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries = OrderedDict()  # type: OrderedDict[str, Tuple[float, RouteResult]]

    def get(self, key: str) -> Optional[RouteResult]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        stored_at, result = entry
        if self.ttl_seconds is not None and self._clock() - stored_at > self.ttl_seconds:
            del self._entries[key]
            return None

        self._entries.move_to_end(key)
        return result

    def put(self, key: str, result: RouteResult) -> None:
        self._entries[key] = (self._clock(), result)
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
