import pytest
from unittest.mock import AsyncMock, MagicMock
from src.adapter.services.audit_service import MongoAuditService


@pytest.mark.asyncio
async def test_log_event_inserts_document():
    collection = MagicMock()
    collection.insert_one = AsyncMock()
    database = MagicMock()
    database.__getitem__.return_value = collection
    client = MagicMock()
    client.__getitem__.return_value = database

    service = MongoAuditService(client, "audit_db")
    await service.log_event(
        event_type="project_approved",
        actor_id="admin-1",
        resource_type="project",
        resource_id="project-1",
        metadata={"previous_status": "pending"},
    )

    client.__getitem__.assert_called_with("audit_db")
    database.__getitem__.assert_called_with("audit_events")
    document = collection.insert_one.call_args[0][0]
    assert document["event_type"] == "project_approved"
    assert document["actor_id"] == "admin-1"
    assert document["metadata"] == {"previous_status": "pending"}
    assert "timestamp" in document
