from src.adapter.services.audit_service import MongoAuditService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.adapter.services.notification_queue import SqlAlchemyNotificationQueue
from src.adapter.services.http_email_sender import HttpEmailSender, LoggingEmailSender
from src.adapter.services.stats_cache import InMemoryStatsCache

__all__ = [
    "MongoAuditService",
    "SqlAlchemyUnitOfWork",
    "SqlAlchemyNotificationQueue",
    "HttpEmailSender",
    "LoggingEmailSender",
    "InMemoryStatsCache",
]
