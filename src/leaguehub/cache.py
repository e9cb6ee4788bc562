"""In-memory row cache with time-based expiry and tag invalidation."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Protocol, Sequence


logger = logging.getLogger(__name__)

Rows = List[List[object]]

DEFAULT_TTL_SECONDS = 60.0


class RowCache(Protocol):
    def get(self, key: str) -> Optional[Rows]:
        ...

    def put(self, key: str, rows: Rows, tags: Iterable[str] = ()) -> None:
        ...

    def invalidate(self, tag: str) -> int:
        ...


@dataclass(frozen=True)
class _Entry:
    rows: Rows
    expires_at: float
    tags: frozenset[str]


class TTLRowCache:
    """Thread-safe cache keyed by sheet range.

    Entries expire ``ttl`` seconds after they are stored. ``invalidate``
    evicts every entry carrying the tag regardless of age.
    """

    def __init__(self, ttl: float = DEFAULT_TTL_SECONDS, *, clock: Callable[[], float] = time.monotonic):
        if ttl < 0:
            raise ValueError("ttl must be non-negative")
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Rows]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.debug("Cache miss for %s", key)
                return None
            if self._clock() >= entry.expires_at:
                del self._entries[key]
                logger.debug("Cache entry for %s expired", key)
                return None
            logger.debug("Cache hit for %s", key)
            return [list(row) for row in entry.rows]

    def put(self, key: str, rows: Sequence[Sequence[object]], tags: Iterable[str] = ()) -> None:
        entry = _Entry(
            rows=[list(row) for row in rows],
            expires_at=self._clock() + self.ttl,
            tags=frozenset(tags),
        )
        with self._lock:
            self._entries[key] = entry

    def invalidate(self, tag: str) -> int:
        with self._lock:
            doomed = [key for key, entry in self._entries.items() if tag in entry.tags]
            for key in doomed:
                del self._entries[key]
        logger.info("Invalidated %d cached ranges for tag %s", len(doomed), tag)
        return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["DEFAULT_TTL_SECONDS", "RowCache", "Rows", "TTLRowCache"]
