"""SQLAlchemy Notification Job Repository"""
from datetime import datetime
from typing import List, Optional
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel import select
from src.app.repositories.notification_job_repository import INotificationJobRepository
from src.domain.notification_job import NotificationJob
from src.domain.enums import NotificationJobStatus


class SqlAlchemyNotificationJobRepository(INotificationJobRepository):
    """SQLAlchemy implementation of NotificationJob repository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, job: NotificationJob) -> NotificationJob:
        """Create a new notification job"""
        self.session.add(job)
        await self.session.flush()
        await self.session.refresh(job)
        return job

    async def get_by_id(self, job_id: str) -> Optional[NotificationJob]:
        stmt = (
            select(NotificationJob)
            .where(NotificationJob.id == job_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def update(self, job: NotificationJob) -> NotificationJob:
        """Update an existing notification job"""
        self.session.add(job)
        await self.session.flush()
        await self.session.refresh(job)
        return job

    async def get_pending_jobs(self, limit: int = 10) -> List[NotificationJob]:
        """Get pending notification jobs for processing"""
        stmt = (
            select(NotificationJob)
            .where(NotificationJob.status == NotificationJobStatus.pending)
            .order_by(NotificationJob.created_at.asc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_stale_processing_jobs(
        self, started_before: datetime, limit: int = 10
    ) -> List[NotificationJob]:
        stmt = (
            select(NotificationJob)
            .where(NotificationJob.status == NotificationJobStatus.processing)
            .where(NotificationJob.started_at < started_before)
            .order_by(NotificationJob.started_at.asc())
            .limit(limit)
            .with_for_update(skip_locked=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
