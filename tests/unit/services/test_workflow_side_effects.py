"""Side effects must never fail the moderation action that triggered them"""
import pytest
from unittest.mock import AsyncMock, MagicMock
from src.app.services.workflow_side_effects import NotificationRequest, WorkflowSideEffects
from src.domain import NotificationKind


@pytest.fixture
def audit_service():
    service = MagicMock()
    service.log_event = AsyncMock()
    return service


@pytest.fixture
def notification_queue():
    queue = MagicMock()
    queue.enqueue = AsyncMock(return_value="job-1")
    return queue


@pytest.fixture
def stats_cache():
    cache = MagicMock()
    cache.invalidate = AsyncMock()
    return cache


def make_notification():
    return NotificationRequest(
        kind=NotificationKind.project_rejected,
        recipient_email="owner@example.com",
        recipient_name="Grace Hopper",
        resource_type="project",
        resource_id="project-1",
        context={"reason": "Missing deck"},
    )


@pytest.mark.asyncio
async def test_all_side_effects_succeed(audit_service, notification_queue, stats_cache):
    side_effects = WorkflowSideEffects(audit_service, notification_queue, stats_cache)

    report = await side_effects.run(
        actor_id="admin-1",
        event_type="project_rejected",
        resource_type="project",
        resource_id="project-1",
        metadata={"rejection_reason": "Missing deck"},
        notification=make_notification(),
    )

    assert report.notification_queued is True
    assert report.audit_logged is True
    assert report.stats_invalidated is True
    assert report.failures == []

    enqueue_kwargs = notification_queue.enqueue.call_args[1]
    assert enqueue_kwargs["kind"] == NotificationKind.project_rejected
    assert enqueue_kwargs["context"] == {"reason": "Missing deck"}

    audit_kwargs = audit_service.log_event.call_args[1]
    assert audit_kwargs["actor_id"] == "admin-1"
    assert audit_kwargs["event_type"] == "project_rejected"
    stats_cache.invalidate.assert_called_once()


@pytest.mark.asyncio
async def test_failures_are_collected_not_raised(audit_service, notification_queue, stats_cache):
    notification_queue.enqueue.side_effect = ConnectionError("queue down")
    audit_service.log_event.side_effect = RuntimeError("mongo down")
    side_effects = WorkflowSideEffects(audit_service, notification_queue, stats_cache)

    report = await side_effects.run(
        actor_id="admin-1",
        event_type="user_approved",
        resource_type="user",
        resource_id="user-1",
        notification=make_notification(),
    )

    assert report.notification_queued is False
    assert report.audit_logged is False
    assert report.stats_invalidated is True
    assert report.failures == ["notification: queue down", "audit: mongo down"]


@pytest.mark.asyncio
async def test_no_notification_requested(audit_service, notification_queue, stats_cache):
    side_effects = WorkflowSideEffects(audit_service, notification_queue, stats_cache)

    report = await side_effects.run(
        actor_id="admin-1",
        event_type="project_featured",
        resource_type="project",
        resource_id="project-1",
    )

    assert report.notification_queued is False
    assert report.failures == []
    notification_queue.enqueue.assert_not_called()
    assert audit_service.log_event.call_args[1]["metadata"] == {}
