"""In-memory TTL cache with LRU eviction, used to hold open form sessions."""

import time
from collections import OrderedDict
from typing import Any


class TTLCache:
    """In-memory cache with time-to-live and max-size eviction.

    Reads refresh an entry's timestamp, so anything still in use stays
    alive; entries idle longer than ``ttl`` are dropped on access.

    Usage::

        cache = TTLCache(ttl=1800, max_size=500)
        cache.set("form-id", session)
        hit = cache.get("form-id")  # returns value or None if expired/missing
    """

    def __init__(self, ttl: float = 300, max_size: int = 100) -> None:
        self._ttl = ttl
        self._max_size = max_size
        # OrderedDict preserves insertion order for LRU eviction
        self._store: OrderedDict[str, tuple[Any, float]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._store)

    def get(self, key: str) -> Any | None:
        """Return the value if present and not idle past the TTL, else None."""
        entry = self._store.get(key)
        if entry is None:
            return None
        value, ts = entry
        now = time.time()
        if now - ts > self._ttl:
            del self._store[key]
            return None
        self._store[key] = (value, now)
        # Move to end (most recently used)
        self._store.move_to_end(key)
        return value

    def set(self, key: str, value: Any) -> None:
        """Store a value under *key*, evicting the oldest entry if at capacity."""
        if key in self._store:
            self._store.move_to_end(key)
        self._store[key] = (value, time.time())
        while len(self._store) > self._max_size:
            self._store.popitem(last=False)

    def pop(self, key: str) -> Any | None:
        """Remove *key* and return its value (expired or not), or None."""
        entry = self._store.pop(key, None)
        return None if entry is None else entry[0]

    def clear(self) -> None:
        self._store.clear()
