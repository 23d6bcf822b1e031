# SKSYNC Read Cache
# Time-based cache for immutable or slowly changing read endpoints

import time
from collections.abc import Callable, Hashable
from typing import Any

# Keys are tuples of (operation, skill_id, *args)
CacheKey = tuple[Hashable, ...]


class TTLCache:
    """
    Explicit time-to-live cache owned by a client instance.

    Keys must start with the operation name followed by the skill id, so a
    single skill can be invalidated after a push. A ttl of 0 disables the
    cache entirely.
    """

    def __init__(self, ttl_seconds: float = 60.0, *, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[CacheKey, tuple[float, Any]] = {}

    @property
    def enabled(self) -> bool:
        return self.ttl_seconds > 0

    def get(self, key: CacheKey) -> Any | None:
        """Return the cached value, or None if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            del self._entries[key]
            return None
        return value

    def set(self, key: CacheKey, value: Any) -> None:
        if not self.enabled:
            return
        self._entries[key] = (self._clock() + self.ttl_seconds, value)

    def invalidate(self, skill_id: str) -> int:
        """Drop every entry for a skill. Returns the number removed."""
        stale = [key for key in self._entries if len(key) > 1 and key[1] == skill_id]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
