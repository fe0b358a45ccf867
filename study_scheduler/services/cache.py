"""
Small key-value cache used for per-user constraint snapshots.

Call sites only use get/set/delete, so the in-memory store can be swapped
for a persistent or shared one.
"""

import time
from typing import Any, Dict, Optional, Tuple


class KeyValueCache:
    """Interface for snapshot caches."""

    def get(self, key: str) -> Optional[Any]:
        raise NotImplementedError

    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        raise NotImplementedError

    def delete(self, key: str) -> None:
        raise NotImplementedError

    def clear(self) -> None:
        raise NotImplementedError


class InMemoryCache(KeyValueCache):
    """
    Process-local cache; entries expire after their TTL (None = never).

    Expiry uses the monotonic clock so wall-clock changes do not extend or
    cut short an entry's lifetime.
    """

    def __init__(self, default_ttl_seconds: Optional[int] = None, clock=time.monotonic):
        self.default_ttl_seconds = default_ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, Optional[float]]] = {}

    def get(self, key: str) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        ttl = self.default_ttl_seconds if ttl_seconds is None else ttl_seconds
        expires_at = self._clock() + ttl if ttl is not None else None
        self._entries[key] = (value, expires_at)

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
