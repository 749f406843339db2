from src.app.repositories.project_repository import ProjectRepository, ProjectWithOwner
from src.app.repositories.user_repository import UserRepository
from src.app.repositories.notification_job_repository import INotificationJobRepository

__all__ = [
    "ProjectRepository",
    "ProjectWithOwner",
    "UserRepository",
    "INotificationJobRepository",
]
