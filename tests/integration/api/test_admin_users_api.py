import pytest
from httpx import AsyncClient
from sqlmodel import select
from src.domain import ApprovalStatus, NotificationJob, UserRole


@pytest.mark.asyncio
async def test_list_users_with_filters(client: AsyncClient, create_user):
    await create_user(email="ada@example.com", first_name="Ada", role=UserRole.investor)
    await create_user(email="alan@example.com", first_name="Alan", role=UserRole.project_owner)
    await create_user(
        email="grace@example.com",
        first_name="Grace",
        role=UserRole.investor,
        approval_status=ApprovalStatus.approved,
    )

    response = await client.get("/admin/users", params={"role": "investor", "status": "pending"})

    assert response.status_code == 200
    data = response.json()
    assert [user["email"] for user in data["users"]] == ["ada@example.com"]
    assert data["pagination"]["total"] == 1
    assert data["pagination"]["per_page"] == 10


@pytest.mark.asyncio
async def test_list_users_sorted_by_email(client: AsyncClient, create_user):
    for email in ("c@example.com", "a@example.com", "b@example.com"):
        await create_user(email=email)

    response = await client.get("/admin/users", params={"sort": "email"})

    assert [user["email"] for user in response.json()["users"]] == [
        "a@example.com",
        "b@example.com",
        "c@example.com",
    ]


@pytest.mark.asyncio
async def test_pending_queue_oldest_first(client: AsyncClient, create_user, minutes_after_base):
    await create_user(email="newer@example.com", created_at=minutes_after_base(10))
    await create_user(email="older@example.com", created_at=minutes_after_base(1))
    await create_user(
        email="done@example.com",
        approval_status=ApprovalStatus.approved,
        created_at=minutes_after_base(0),
    )

    response = await client.get("/admin/users/pending")

    assert response.status_code == 200
    users = response.json()["users"]
    assert [user["email"] for user in users] == ["older@example.com", "newer@example.com"]
    assert users[0]["days_waiting"] > 0


@pytest.mark.asyncio
async def test_get_user_not_found(client: AsyncClient):
    response = await client.get("/admin/users/nobody")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_approve_user_then_approve_again(client: AsyncClient, create_user, session_factory):
    user = await create_user(email="ada@example.com")

    approved = await client.put(f"/admin/users/{user.id}/approve", json={})
    again = await client.put(f"/admin/users/{user.id}/approve", json={})

    assert approved.status_code == 200
    assert approved.json()["user"]["approval_status"] == "approved"
    assert approved.json()["side_effects"]["notification_queued"] is True
    assert again.status_code == 400
    assert again.json()["error"]["code"] == "INVALID_TRANSITION"

    async with session_factory() as session:
        jobs = (await session.execute(select(NotificationJob))).scalars().all()
    assert [job.kind for job in jobs] == ["user_welcome"]


@pytest.mark.asyncio
async def test_reject_user(client: AsyncClient, create_user):
    user = await create_user()

    missing_reason = await client.put(f"/admin/users/{user.id}/reject", json={"rejection_reason": ""})
    rejected = await client.put(
        f"/admin/users/{user.id}/reject", json={"rejection_reason": "Incomplete profile"}
    )
    approve_after = await client.put(f"/admin/users/{user.id}/approve", json={})

    assert missing_reason.status_code == 400
    assert missing_reason.json()["error"]["code"] == "VALIDATION_ERROR"
    assert rejected.status_code == 200
    assert rejected.json()["user"]["rejection_reason"] == "Incomplete profile"
    assert approve_after.status_code == 400
    assert approve_after.json()["error"]["code"] == "INVALID_TRANSITION"


@pytest.mark.asyncio
async def test_reject_user_stale_version(client: AsyncClient, create_user):
    user = await create_user()

    response = await client.put(
        f"/admin/users/{user.id}/reject",
        json={"rejection_reason": "No", "expected_version": 7},
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_bulk_approve_mixed(client: AsyncClient, create_user):
    first = await create_user()
    rejected = await create_user(approval_status=ApprovalStatus.rejected)
    second = await create_user()

    response = await client.post(
        "/admin/users/bulk-approve",
        json={"user_ids": [first.id, rejected.id, second.id, first.id, "ghost"]},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["approved_count"] == 2
    assert data["emails_sent"] == 2
    assert data["approved_ids"] == [first.id, second.id]
    failures = {failure["id"]: failure["code"] for failure in data["failures"]}
    assert failures == {rejected.id: "INVALID_TRANSITION", "ghost": "USER_NOT_FOUND"}

    fetched = await client.get(f"/admin/users/{rejected.id}")
    assert fetched.json()["approval_status"] == "rejected"


@pytest.mark.asyncio
async def test_bulk_approve_empty(client: AsyncClient):
    response = await client.post("/admin/users/bulk-approve", json={"user_ids": []})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_create_user(client: AsyncClient):
    payload = {
        "email": "New.Investor@Example.com",
        "first_name": "New",
        "last_name": "Investor",
        "role": "investor",
    }

    created = await client.post("/admin/users", json=payload)
    duplicate = await client.post("/admin/users", json=payload)

    assert created.status_code == 201
    user = created.json()["user"]
    assert user["email"] == "new.investor@example.com"
    assert user["approval_status"] == "approved"
    assert user["is_verified"] is True

    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["code"] == "EMAIL_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_create_user_missing_field(client: AsyncClient):
    response = await client.post("/admin/users", json={"email": "x@example.com"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_update_user_profile_and_deactivate(client: AsyncClient, create_user, audit_service):
    user = await create_user(email="ada@example.com", company="Old Co")

    response = await client.put(
        f"/admin/users/{user.id}",
        json={"company": "Analytical Engines", "is_active": False, "expected_version": 1},
    )

    assert response.status_code == 200
    data = response.json()
    assert sorted(data["changed_fields"]) == ["company", "is_active"]
    assert data["user"]["version"] == 2

    fetched = (await client.get(f"/admin/users/{user.id}")).json()
    assert fetched["company"] == "Analytical Engines"
    assert fetched["is_active"] is False
    assert fetched["approval_status"] == "pending"
    assert [event["event_type"] for event in audit_service.events] == ["user_deactivated"]


@pytest.mark.asyncio
async def test_update_user_refuses_workflow_fields(client: AsyncClient, create_user):
    user = await create_user()

    status_change = await client.put(f"/admin/users/{user.id}", json={"approval_status": "approved"})
    email_change = await client.put(f"/admin/users/{user.id}", json={"email": "x@example.com"})
    stale = await client.put(
        f"/admin/users/{user.id}", json={"first_name": "New", "expected_version": 5}
    )
    missing = await client.put("/admin/users/nobody", json={"first_name": "New"})

    assert status_change.status_code == 400
    assert status_change.json()["error"]["code"] == "PROTECTED_FIELD"
    assert email_change.json()["error"]["code"] == "PROTECTED_FIELD"
    assert stale.status_code == 409
    assert missing.status_code == 404

    fetched = (await client.get(f"/admin/users/{user.id}")).json()
    assert fetched["approval_status"] == "pending"
    assert fetched["version"] == 1
