from abc import ABC, abstractmethod
from src.app.repositories import ProjectRepository, UserRepository, INotificationJobRepository


class UnitOfWork(ABC):
    """Transaction boundary grouping the repositories of one request"""

    projects: ProjectRepository
    users: UserRepository
    notification_jobs: INotificationJobRepository

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
