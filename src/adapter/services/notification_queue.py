"""Database-backed notification queue.

Jobs are inserted through a dedicated session so the enqueue never shares
a transaction with the moderation change that triggered it.
"""
import logging
from typing import Any, Callable, Dict, Optional
from src.adapter.repositories.notification_job_repository import SqlAlchemyNotificationJobRepository
from src.app.services.notification_queue import NotificationQueue
from src.domain import NotificationJob, NotificationKind

logger = logging.getLogger(__name__)


class SqlAlchemyNotificationQueue(NotificationQueue):
    """Writes notification_jobs rows consumed by the notification worker"""

    def __init__(self, session_factory: Callable, max_retries: int = 3):
        self.session_factory = session_factory
        self.max_retries = max_retries

    async def enqueue(
        self,
        kind: NotificationKind,
        recipient_email: str,
        recipient_name: Optional[str],
        resource_type: str,
        resource_id: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> str:
        async with self.session_factory() as session:
            job = NotificationJob(
                kind=kind,
                recipient_email=recipient_email,
                recipient_name=recipient_name,
                resource_type=resource_type,
                resource_id=resource_id,
                context=context or {},
                max_retries=self.max_retries,
            )
            job = await SqlAlchemyNotificationJobRepository(session).create(job)
            job_id = job.id
            await session.commit()

        logger.debug(f"[NotificationQueue] Enqueued {kind} job {job_id} for {recipient_email}")
        return job_id
