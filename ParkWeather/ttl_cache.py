"""Time-bounded key/value cache shared by every upstream fetcher."""
import logging
import time
from typing import Any, Callable, Dict, Hashable, Optional, Tuple


class TTLCache:
    """
    In-memory cache where every entry lives for the same fixed TTL.

    Expired entries are treated as missing on read and are simply overwritten
    by the next set() for the same key; nothing sweeps them. There is no size
    bound, so only use this for small key spaces (one entry per location).
    """

    def __init__(
        self,
        ttl_seconds: float,
        name: str = "cache",
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize cache.

        Args:
            ttl_seconds: Lifetime of every entry, in seconds
            name: Label used in log messages
            clock: Returns the current UTC time as epoch seconds
        """
        if ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be positive, got {ttl_seconds}")
        self.ttl_seconds = ttl_seconds
        self.name = name
        self._clock = clock
        self._entries: Dict[Hashable, Tuple[Any, float]] = {}

    def get(self, key: Hashable) -> Optional[Any]:
        """Return the cached value for key, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, stored_at = entry
        age = self._clock() - stored_at
        if age >= self.ttl_seconds:
            logging.debug(f"{self.name}: entry for {key!r} expired (age: {age:.1f}s, TTL: {self.ttl_seconds}s)")
            return None

        logging.debug(f"{self.name}: hit for {key!r} (age: {age:.1f}s)")
        return value

    def set(self, key: Hashable, value: Any) -> None:
        self._entries[key] = (value, self._clock())

    def __len__(self) -> int:
        return len(self._entries)
