from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from src.domain import NotificationJob


class INotificationJobRepository(ABC):
    """Interface for NotificationJob repository"""

    @abstractmethod
    async def create(self, job: NotificationJob) -> NotificationJob:
        """Create a new notification job"""
        pass

    @abstractmethod
    async def get_by_id(self, job_id: str) -> Optional[NotificationJob]:
        """Get notification job by ID"""
        pass

    @abstractmethod
    async def update(self, job: NotificationJob) -> NotificationJob:
        """Update an existing notification job"""
        pass

    @abstractmethod
    async def get_pending_jobs(self, limit: int = 10) -> List[NotificationJob]:
        """Get pending notification jobs, oldest first"""
        pass

    @abstractmethod
    async def get_stale_processing_jobs(
        self, started_before: datetime, limit: int = 10
    ) -> List[NotificationJob]:
        """Get jobs stuck in processing since before ``started_before``"""
        pass
