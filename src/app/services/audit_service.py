from abc import ABC, abstractmethod
from typing import Dict, Any


class AuditService(ABC):
    """Service interface for audit event logging"""

    @abstractmethod
    async def log_event(
        self,
        event_type: str,
        actor_id: str,
        resource_type: str,
        resource_id: str,
        metadata: Dict[str, Any] = None,
    ) -> None:
        """
        Log an audit event

        Args:
            event_type: Type of event (e.g. "project_approved", "user_rejected")
            actor_id: Administrator who triggered the event
            resource_type: Type of resource ("project" or "user")
            resource_id: ID of the affected resource
            metadata: Additional event metadata (notes, reasons, previous status)
        """
        pass
