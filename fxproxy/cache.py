from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from .models import Candle

logger = logging.getLogger("uvicorn.error")


@dataclass
class CacheEntry:
    data: List[Candle]
    stored_at: float


class TTLCache:
    """In-memory candle cache with one TTL for every entry.

    Expiry is lazy: a stale entry is dropped by the `get` that finds it,
    there is no background sweep and no capacity bound.
    """

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def get(self, key: str) -> Optional[List[Candle]]:
        item = self._entries.get(key)
        if item is None:
            return None

        if self._clock() - item.stored_at > self.ttl:
            del self._entries[key]
            return None

        logger.info(f"[CACHE HIT] {key}")
        return item.data

    def set(self, key: str, data: List[Candle]) -> None:
        self._entries[key] = CacheEntry(data=data, stored_at=self._clock())

    def clear(self) -> None:
        self._entries.clear()

    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: str) -> bool:
        return key in self._entries
