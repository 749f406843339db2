import logging
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from motor.motor_asyncio import AsyncIOMotorClient
from config import ApplicationConfig
from libs.result import Error
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.adapter.services.audit_service import MongoAuditService
from src.adapter.services.notification_queue import SqlAlchemyNotificationQueue
from src.adapter.services.stats_cache import InMemoryStatsCache
from src.app.services.audit_service import AuditService
from src.app.services.notification_queue import NotificationQueue
from src.app.services.stats_cache import StatsCache
from src.app.services.workflow_side_effects import WorkflowSideEffects
from src.api.error import ClientError
from src.api.utils.jwt import verify_jwt
from src.domain.enums import UserRole

logger = logging.getLogger(__name__)

# PostgreSQL engine
engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# MongoDB client
mongo_client = AsyncIOMotorClient(ApplicationConfig.MONGODB_URI)

# Shared by every request in this process
stats_cache = InMemoryStatsCache(ttl_seconds=ApplicationConfig.STATS_CACHE_TTL_SECONDS)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


async def get_audit_service() -> AuditService:
    return MongoAuditService(mongo_client, ApplicationConfig.MONGODB_DB_NAME)


def get_notification_queue() -> NotificationQueue:
    return SqlAlchemyNotificationQueue(
        AsyncSessionLocal, max_retries=ApplicationConfig.NOTIFICATION_MAX_RETRIES
    )


def get_stats_cache() -> StatsCache:
    return stats_cache


def get_side_effects(
    audit_service: AuditService = Depends(get_audit_service),
    notification_queue: NotificationQueue = Depends(get_notification_queue),
    cache: StatsCache = Depends(get_stats_cache),
) -> WorkflowSideEffects:
    return WorkflowSideEffects(audit_service, notification_queue, cache)


# Security
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """
    Dependency to extract and validate JWT token from Authorization header

    Returns:
        dict: Decoded JWT payload with user_id, email, role

    Raises:
        ClientError: 401 if token is missing or invalid
    """
    if ApplicationConfig.AUTH_DISABLED:
        # For testing/development - return mock admin
        return {"user_id": "test-admin-id", "email": "admin@example.com", "role": "admin"}

    if credentials is None:
        logger.warning("Request without bearer token")
        raise ClientError(Error(code="UNAUTHORIZED", message="No authorization header"))

    payload = verify_jwt(credentials.credentials)

    if payload is None:
        raise ClientError(Error(code="UNAUTHORIZED", message="Invalid or expired token"))

    return payload


async def require_admin(current_user: dict = Depends(get_current_user)) -> dict:
    """Only administrators may use the moderation API"""
    if current_user.get("role") != UserRole.admin.value:
        logger.warning(f"Non-admin user {current_user.get('user_id')} denied admin access")
        raise ClientError(Error(code="FORBIDDEN", message="Administrator access required"))
    return current_user
