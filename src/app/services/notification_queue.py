from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from src.domain.enums import NotificationKind


class NotificationQueue(ABC):
    """Enqueue side of the notification dispatcher"""

    @abstractmethod
    async def enqueue(
        self,
        kind: NotificationKind,
        recipient_email: str,
        recipient_name: Optional[str],
        resource_type: str,
        resource_id: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Queue a notification for asynchronous delivery.

        Returns:
            The id of the queued job
        """
        pass
