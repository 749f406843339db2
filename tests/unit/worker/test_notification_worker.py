"""Unit tests for NotificationWorker"""
import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from libs.result import Error, Return
from src.app.services.email_templates import PlatformSettings
from src.worker.notification_worker import NotificationWorker


@pytest.fixture
def session_factory():
    session = MagicMock()
    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=session)
    context.__aexit__ = AsyncMock(return_value=None)
    return MagicMock(return_value=context)


@pytest.fixture
def worker(session_factory):
    return NotificationWorker(
        session_factory=session_factory,
        email_sender=MagicMock(),
        settings=PlatformSettings("Zuvomo", "http://localhost:3000", "support@zuvomo.com"),
        poll_interval=0,
        batch_size=5,
    )


@pytest.mark.asyncio
async def test_process_pending_jobs_counts_sent(worker):
    worker.reclaim_stale_jobs = AsyncMock(return_value=0)
    worker.get_pending_job_ids = AsyncMock(return_value=["job-1", "job-2", "job-3"])
    results = [Return.ok(True), Return.ok(False), Return.err(Error("NOTIFICATION_JOB_NOT_FOUND", "gone"))]

    with patch("src.worker.notification_worker.ProcessNotificationJobUseCase") as MockUseCase:
        MockUseCase.return_value.execute = AsyncMock(side_effect=results)

        sent = await worker.process_pending_jobs()

    assert sent == 1
    assert MockUseCase.return_value.execute.call_count == 3


@pytest.mark.asyncio
async def test_one_crashing_job_does_not_stop_batch(worker):
    worker.reclaim_stale_jobs = AsyncMock(return_value=0)
    worker.get_pending_job_ids = AsyncMock(return_value=["job-1", "job-2"])

    with patch("src.worker.notification_worker.ProcessNotificationJobUseCase") as MockUseCase:
        MockUseCase.return_value.execute = AsyncMock(
            side_effect=[RuntimeError("db hiccup"), Return.ok(True)]
        )

        sent = await worker.process_pending_jobs()

    assert sent == 1


@pytest.mark.asyncio
async def test_get_pending_job_ids_uses_batch_size(worker):
    job = MagicMock(id="job-1")

    with patch("src.worker.notification_worker.SqlAlchemyNotificationJobRepository") as MockRepo:
        MockRepo.return_value.get_pending_jobs = AsyncMock(return_value=[job])

        job_ids = await worker.get_pending_job_ids()

    assert job_ids == ["job-1"]
    MockRepo.return_value.get_pending_jobs.assert_called_once_with(limit=5)


@pytest.mark.asyncio
async def test_start_stops_when_flag_cleared(worker):
    async def process_once():
        await worker.stop()
        return 0

    worker.process_pending_jobs = AsyncMock(side_effect=process_once)

    await worker.start()

    assert worker.running is False
    worker.process_pending_jobs.assert_called_once()


@pytest.mark.asyncio
async def test_stale_jobs_reclaimed_before_polling(worker):
    calls = []
    worker.reclaim_stale_jobs = AsyncMock(side_effect=lambda: calls.append("reclaim") or 1)
    worker.get_pending_job_ids = AsyncMock(side_effect=lambda: calls.append("poll") or [])

    sent = await worker.process_pending_jobs()

    assert sent == 0
    assert calls == ["reclaim", "poll"]


@pytest.mark.asyncio
async def test_reclaim_stale_jobs_uses_processing_timeout(worker):
    with patch("src.worker.notification_worker.ReclaimStaleNotificationJobsUseCase") as MockUseCase:
        MockUseCase.return_value.execute = AsyncMock(return_value=Return.ok(2))

        reclaimed = await worker.reclaim_stale_jobs()

    assert reclaimed == 2
    assert MockUseCase.call_args[1]["timeout_seconds"] == 300
    assert MockUseCase.call_args[1]["batch_size"] == 5
