import logging
from datetime import datetime, timedelta
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class ReclaimStaleNotificationJobsUseCase:
    """
    Use case: Reclaim stale notification jobs

    A job claimed by a worker that crashed or hung never leaves
    ``processing``. Once it has been there longer than the timeout it is
    queued again, or failed when its retries are spent.
    """

    def __init__(self, uow: UnitOfWork, timeout_seconds: int = 300, batch_size: int = 20):
        self.uow = uow
        self.timeout_seconds = timeout_seconds
        self.batch_size = batch_size

    async def execute(self) -> Result[int]:
        started_before = datetime.utcnow() - timedelta(seconds=self.timeout_seconds)

        async with self.uow:
            jobs = await self.uow.notification_jobs.get_stale_processing_jobs(
                started_before, limit=self.batch_size
            )
            for job in jobs:
                job.release_stale(f"Processing timed out after {self.timeout_seconds}s")
                await self.uow.notification_jobs.update(job)
                logger.warning(
                    f"[ReclaimNotifications] Job {job.id} released from processing, status: {job.status}"
                )
            if jobs:
                await self.uow.commit()

        return Return.ok(len(jobs))
