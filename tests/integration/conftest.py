import pytest
import pytest_asyncio
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, List
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.adapter.services.notification_queue import SqlAlchemyNotificationQueue
from src.adapter.services.stats_cache import InMemoryStatsCache
from src.app.services.audit_service import AuditService
from src.domain import ApprovalStatus, generate_uuid, Project, ProjectStatus, User, UserRole

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0)


class RecordingAuditService(AuditService):
    """Audit service for integration tests - keeps events in memory"""

    def __init__(self):
        self.events: List[Dict[str, Any]] = []

    async def log_event(
        self,
        event_type: str,
        actor_id: str,
        resource_type: str,
        resource_id: str,
        metadata: Dict[str, Any] = None,
    ) -> None:
        self.events.append(
            {
                "event_type": event_type,
                "actor_id": actor_id,
                "resource_type": resource_type,
                "resource_id": resource_id,
                "metadata": metadata or {},
            }
        )


@pytest_asyncio.fixture
async def engine():
    # In-memory SQLite shared by every session through StaticPool
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
def audit_service():
    return RecordingAuditService()


@pytest.fixture
def stats_cache():
    return InMemoryStatsCache(ttl_seconds=60)


def _build_app(session_factory, audit_service, stats_cache, authenticated: bool):
    from src.api.app import create_app
    from config import ApplicationConfig
    from src.depends import (
        get_unit_of_work,
        get_audit_service,
        get_notification_queue,
        get_stats_cache,
        get_current_user,
    )

    app = create_app(ApplicationConfig)

    # New session per request
    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    async def override_get_audit_service():
        return audit_service

    def override_get_notification_queue():
        return SqlAlchemyNotificationQueue(session_factory, max_retries=3)

    def override_get_stats_cache():
        return stats_cache

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_audit_service] = override_get_audit_service
    app.dependency_overrides[get_notification_queue] = override_get_notification_queue
    app.dependency_overrides[get_stats_cache] = override_get_stats_cache

    if authenticated:
        async def override_get_current_user():
            return {"user_id": "admin-1", "email": "admin@example.com", "role": "admin"}

        app.dependency_overrides[get_current_user] = override_get_current_user

    return app


@pytest_asyncio.fixture
async def client(session_factory, audit_service, stats_cache):
    app = _build_app(session_factory, audit_service, stats_cache, authenticated=True)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def anonymous_client(session_factory, audit_service, stats_cache):
    """Client that goes through real bearer-token authentication"""
    app = _build_app(session_factory, audit_service, stats_cache, authenticated=False)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def create_user(session_factory):
    """Factory inserting a user row; returns the committed User"""

    async def _create(**overrides) -> User:
        data = dict(
            email=f"user-{generate_uuid()[:8]}@example.com",
            first_name="Test",
            last_name="User",
            role=UserRole.project_owner,
            approval_status=ApprovalStatus.pending,
        )
        data.update(overrides)
        async with session_factory() as session:
            user = User(**data)
            session.add(user)
            await session.commit()
            return user

    return _create


@pytest.fixture
def create_project(session_factory):
    """Factory inserting a project row; returns the committed Project"""

    async def _create(owner_id: str = "owner-1", **overrides) -> Project:
        data = dict(
            owner_id=owner_id,
            title="Test Project",
            industry="Technology",
            funding_goal=Decimal("10000"),
            status=ProjectStatus.pending,
        )
        data.update(overrides)
        async with session_factory() as session:
            project = Project(**data)
            session.add(project)
            await session.commit()
            return project

    return _create


@pytest.fixture
def minutes_after_base():
    def _at(minutes: int) -> datetime:
        return BASE_TIME + timedelta(minutes=minutes)

    return _at
