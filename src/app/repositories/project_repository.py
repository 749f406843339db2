from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from src.domain import Project, User
from src.domain.query import PageRequest, ProjectFilter, ProjectSort

# (project, owner) pairs; owner is None when the owner row is missing
ProjectWithOwner = Tuple[Project, Optional[User]]


class ProjectRepository(ABC):
    """Repository interface for Project entity"""

    @abstractmethod
    async def create(self, project: Project) -> Project:
        """Create a new project"""
        pass

    @abstractmethod
    async def get_by_id(self, project_id: str, for_update: bool = False) -> Optional[Project]:
        """Get project by ID, locking the row when ``for_update`` is set"""
        pass

    @abstractmethod
    async def get_many(self, project_ids: List[str]) -> List[Project]:
        """Projects with the given ids in request order; unknown ids are skipped"""
        pass

    @abstractmethod
    async def get_with_owner(self, project_id: str) -> Optional[ProjectWithOwner]:
        """Get project by ID together with its owner"""
        pass

    @abstractmethod
    async def update(self, project: Project) -> Project:
        """Update an existing project"""
        pass

    @abstractmethod
    async def search(
        self, filters: ProjectFilter, sort: ProjectSort, page: PageRequest
    ) -> Tuple[List[ProjectWithOwner], int]:
        """Filtered, sorted page of projects plus the total matching count"""
        pass

    @abstractmethod
    async def get_aggregate_rows(self) -> List[tuple]:
        """(status, industry, funding_goal, current_funding, funding_from_other_sources) for every project"""
        pass

    @abstractmethod
    async def get_recent(self, limit: int = 10) -> List[ProjectWithOwner]:
        """Newest projects with their owners"""
        pass
