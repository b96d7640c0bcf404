"""In-memory implementation of the key-value store."""

from __future__ import annotations

import json
import time
from collections.abc import Callable
from typing import Any

from chromagen.repositories.interfaces import KeyValueStore

SWEEP_INTERVAL_SECONDS = 60.0


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store, used for development and tests.

    Values are kept as JSON text so every read returns an independent copy,
    the same as a remote store would. Expired entries are dropped when read
    and swept from ``put`` at most once per ``sweep_interval`` seconds, so
    identifiers that never come back do not pile up.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sweep_interval: float = SWEEP_INTERVAL_SECONDS,
    ) -> None:
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._next_sweep = clock() + sweep_interval
        self._data: dict[str, tuple[str, float | None]] = {}

    def get(self, key: str) -> Any | None:
        entry = self._data.get(key)
        if entry is None:
            return None
        payload, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._data[key]
            return None
        return json.loads(payload)

    def put(self, key: str, value: Any, ttl_seconds: int | None = None) -> None:
        now = self._clock()
        if now >= self._next_sweep:
            self.purge_expired()
        expires_at = now + ttl_seconds if ttl_seconds else None
        self._data[key] = (json.dumps(value), expires_at)

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def purge_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""
        now = self._clock()
        expired = [
            key
            for key, (_, expires_at) in self._data.items()
            if expires_at is not None and now >= expires_at
        ]
        for key in expired:
            del self._data[key]
        self._next_sweep = now + self._sweep_interval
        return len(expired)

    def __len__(self) -> int:
        return len(self._data)
