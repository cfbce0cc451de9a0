# cms_delivery/factories/cache.py
"""In-memory cache shared by the factories of one registry."""

import threading
import time
from typing import Any, Dict, Optional, Tuple


class CacheAgent:
    """
    Thread-safe key/value cache with a per-entry time to live.

    Entries expire lazily on read; ``ttl=0`` disables caching.
    """

    def __init__(self, ttl: int = 300):
        self.ttl = ttl
        self._entries: Dict[str, Tuple[float, Any]] = {}
        self._lock = threading.Lock()

    def load(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, value = entry
            if (time.time() - stored_at) >= self.ttl:
                del self._entries[key]
                return None
            return value

    def store(self, key: str, value: Any) -> None:
        if self.ttl <= 0:
            return
        with self._lock:
            self._entries[key] = (time.time(), value)

    def remove(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
