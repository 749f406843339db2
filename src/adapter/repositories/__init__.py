from src.adapter.repositories.project_repository import SqlAlchemyProjectRepository
from src.adapter.repositories.user_repository import SqlAlchemyUserRepository
from src.adapter.repositories.notification_job_repository import SqlAlchemyNotificationJobRepository

__all__ = [
    "SqlAlchemyProjectRepository",
    "SqlAlchemyUserRepository",
    "SqlAlchemyNotificationJobRepository",
]
