import asyncio
import time
from typing import Any, Dict, Optional
from src.app.services.stats_cache import StatsCache


class InMemoryStatsCache(StatsCache):
    """Process-local snapshot cache with a time-to-live"""

    def __init__(self, ttl_seconds: float = 60):
        self.ttl_seconds = ttl_seconds
        self._snapshot: Optional[Dict[str, Any]] = None
        self._stored_at = 0.0
        self._generation = 0
        self._lock = asyncio.Lock()

    async def get(self) -> Optional[Dict[str, Any]]:
        async with self._lock:
            if self._snapshot is None:
                return None
            if time.monotonic() - self._stored_at > self.ttl_seconds:
                self._snapshot = None
                return None
            return dict(self._snapshot)

    async def generation(self) -> int:
        async with self._lock:
            return self._generation

    async def set(self, snapshot: Dict[str, Any], generation: Optional[int] = None) -> bool:
        async with self._lock:
            if generation is not None and generation != self._generation:
                return False
            self._snapshot = dict(snapshot)
            self._stored_at = time.monotonic()
            return True

    async def invalidate(self) -> None:
        async with self._lock:
            self._generation += 1
            self._snapshot = None
