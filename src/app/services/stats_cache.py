from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class StatsCache(ABC):
    """Holds the latest statistics snapshot"""

    @abstractmethod
    async def get(self) -> Optional[Dict[str, Any]]:
        """Return the cached snapshot, or None when missing or expired"""
        pass

    @abstractmethod
    async def generation(self) -> int:
        """Counter bumped by every invalidate()"""
        pass

    @abstractmethod
    async def set(self, snapshot: Dict[str, Any], generation: Optional[int] = None) -> bool:
        """
        Store a snapshot.

        When ``generation`` is given and an invalidation happened since it
        was read, the snapshot is stale and is dropped. Returns whether it
        was stored.
        """
        pass

    @abstractmethod
    async def invalidate(self) -> None:
        """Drop the snapshot so the next read recomputes"""
        pass
