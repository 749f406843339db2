"""Notification Worker

Background worker that delivers queued notification emails.
Workflow actions only enqueue jobs; sending happens here so a slow or
failing mail service never blocks or undoes an admin action.
"""
import asyncio
import logging
from typing import Callable, List
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from src.adapter.repositories.notification_job_repository import SqlAlchemyNotificationJobRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.adapter.services.http_email_sender import HttpEmailSender, LoggingEmailSender
from src.app.services.email_sender import EmailSender
from src.app.services.email_templates import PlatformSettings
from src.app.use_cases.notifications import (
    ProcessNotificationJobUseCase,
    ReclaimStaleNotificationJobsUseCase,
)

logger = logging.getLogger(__name__)


class NotificationWorker:
    """
    Polls for pending notification jobs and processes them one by one.

    Each job runs in its own session so one bad job cannot poison the batch.
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        email_sender: EmailSender,
        settings: PlatformSettings,
        poll_interval: int = 10,
        batch_size: int = 20,
        processing_timeout: int = 300,
    ):
        self.session_factory = session_factory
        self.email_sender = email_sender
        self.settings = settings
        self.poll_interval = poll_interval
        self.batch_size = batch_size
        self.processing_timeout = processing_timeout
        self.running = False

    async def start(self):
        """Poll until stop() is called."""
        self.running = True
        logger.info("NotificationWorker started")

        while self.running:
            try:
                await self.process_pending_jobs()
            except Exception as e:
                logger.error(f"Error processing notification jobs: {e}")

            await asyncio.sleep(self.poll_interval)

    async def stop(self):
        self.running = False
        logger.info("NotificationWorker stopped")

    async def get_pending_job_ids(self) -> List[str]:
        async with self.session_factory() as session:
            repository = SqlAlchemyNotificationJobRepository(session)
            jobs = await repository.get_pending_jobs(limit=self.batch_size)
            return [job.id for job in jobs]

    async def reclaim_stale_jobs(self) -> int:
        """Requeue jobs stuck in processing past the timeout"""
        async with self.session_factory() as session:
            use_case = ReclaimStaleNotificationJobsUseCase(
                SqlAlchemyUnitOfWork(session),
                timeout_seconds=self.processing_timeout,
                batch_size=self.batch_size,
            )
            result = await use_case.execute()
        if result.value:
            logger.warning(f"Reclaimed {result.value} stale notification jobs")
        return result.value

    async def process_pending_jobs(self) -> int:
        """
        Process one batch of pending jobs.

        Returns:
            int: Number of emails sent
        """
        await self.reclaim_stale_jobs()
        job_ids = await self.get_pending_job_ids()
        if job_ids:
            logger.info(f"Found {len(job_ids)} pending notification jobs")

        sent = 0
        for job_id in job_ids:
            try:
                async with self.session_factory() as session:
                    use_case = ProcessNotificationJobUseCase(
                        SqlAlchemyUnitOfWork(session), self.email_sender, self.settings
                    )
                    result = await use_case.execute(job_id)
            except Exception as e:
                logger.error(f"Error processing notification job {job_id}: {e}")
                continue

            if result.is_err():
                logger.error(f"Notification job {job_id}: {result.error.message}")
            elif result.value:
                sent += 1

        return sent


async def run_notification_worker(config):
    """
    Main entry point for running the notification worker.

    Args:
        config: ApplicationConfig with database and email settings
    """
    engine = create_async_engine(config.DB_URI, echo=False)
    AsyncSessionLocal = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )

    if config.EMAIL_SERVICE_URL:
        email_sender = HttpEmailSender(
            base_url=config.EMAIL_SERVICE_URL,
            sender=config.EMAIL_FROM,
            api_key=config.EMAIL_API_KEY or None,
        )
    else:
        logger.warning("EMAIL_SERVICE_URL not set, emails will only be logged")
        email_sender = LoggingEmailSender()

    settings = PlatformSettings(
        platform_name=config.PLATFORM_NAME,
        frontend_url=config.FRONTEND_URL,
        support_email=config.SUPPORT_EMAIL,
    )

    worker = NotificationWorker(
        session_factory=AsyncSessionLocal,
        email_sender=email_sender,
        settings=settings,
        poll_interval=config.NOTIFICATION_POLL_INTERVAL,
        batch_size=config.NOTIFICATION_BATCH_SIZE,
        processing_timeout=config.NOTIFICATION_PROCESSING_TIMEOUT,
    )

    try:
        await worker.start()
    except (KeyboardInterrupt, asyncio.CancelledError):
        logger.info("Received shutdown signal")
        await worker.stop()
    finally:
        if isinstance(email_sender, HttpEmailSender):
            await email_sender.aclose()
        await engine.dispose()


if __name__ == "__main__":
    """
    Usage:
        python -m src.worker.notification_worker
    """
    from config import ApplicationConfig

    logging.basicConfig(
        level=getattr(logging, ApplicationConfig.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    logger.info(f"Starting NotificationWorker with DB: {ApplicationConfig.DB_URI[:50]}...")
    asyncio.run(run_notification_worker(ApplicationConfig))
