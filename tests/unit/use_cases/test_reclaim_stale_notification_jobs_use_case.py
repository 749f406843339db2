import pytest
from datetime import datetime, timedelta
from unittest.mock import AsyncMock
from src.app.use_cases.notifications import ReclaimStaleNotificationJobsUseCase
from src.domain import NotificationJob, NotificationJobStatus, NotificationKind


def make_processing_job(**overrides):
    data = dict(
        id="job-1",
        kind=NotificationKind.project_approved,
        recipient_email="owner@example.com",
        resource_type="project",
        resource_id="project-1",
        status=NotificationJobStatus.processing,
        started_at=datetime.utcnow() - timedelta(minutes=30),
        max_retries=3,
    )
    data.update(overrides)
    return NotificationJob(**data)


@pytest.mark.asyncio
async def test_stuck_jobs_requeued_or_failed(mock_uow):
    retryable = make_processing_job(id="job-1", retry_count=0)
    spent = make_processing_job(id="job-2", retry_count=3)
    mock_uow.notification_jobs.get_stale_processing_jobs = AsyncMock(return_value=[retryable, spent])
    use_case = ReclaimStaleNotificationJobsUseCase(mock_uow, timeout_seconds=300, batch_size=10)

    result = await use_case.execute()

    assert result.is_ok()
    assert result.value == 2
    assert retryable.status == NotificationJobStatus.pending
    assert retryable.retry_count == 1
    assert spent.status == NotificationJobStatus.failed
    assert "timed out" in spent.error_message
    mock_uow.commit.assert_called_once()

    started_before = mock_uow.notification_jobs.get_stale_processing_jobs.call_args[0][0]
    assert datetime.utcnow() - started_before >= timedelta(seconds=300)
    assert mock_uow.notification_jobs.get_stale_processing_jobs.call_args[1]["limit"] == 10


@pytest.mark.asyncio
async def test_nothing_stale_commits_nothing(mock_uow):
    mock_uow.notification_jobs.get_stale_processing_jobs = AsyncMock(return_value=[])
    use_case = ReclaimStaleNotificationJobsUseCase(mock_uow)

    result = await use_case.execute()

    assert result.value == 0
    mock_uow.commit.assert_not_called()
