from __future__ import annotations

import threading
import time
from typing import Any, Callable

_DEFAULT_TTL = 3600  # 1 hour


class PromptCache:
    """
    In-memory prompt -> completion cache.

    Keys are the verbatim prompt text, so "pizza" and "Pizza" are different
    entries. Each entry lives ``ttl_seconds`` from the moment it was set.
    """

    def __init__(
        self,
        ttl_seconds: float = _DEFAULT_TTL,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, dict[str, Any]] = {}
        self._hits = 0
        self._misses = 0
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry and self._clock() - entry["created_at"] < self.ttl_seconds:
                self._hits += 1
                return entry["value"]
            if entry:
                del self._entries[key]
            self._misses += 1
            return None

    def set(self, key: str, value: str) -> None:
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            self._entries[key] = {"value": value, "created_at": now}

    def _purge_expired(self, now: float) -> None:
        expired = [
            k for k, entry in self._entries.items()
            if now - entry["created_at"] >= self.ttl_seconds
        ]
        for k in expired:
            del self._entries[k]

    def stats(self) -> dict:
        with self._lock:
            total = self._hits + self._misses
            return {
                "size": len(self._entries),
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
            }

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
