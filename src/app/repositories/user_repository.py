from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from src.domain import User
from src.domain.query import PageRequest, UserFilter, UserSort


class UserRepository(ABC):
    """Repository interface for User entity"""

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str, for_update: bool = False) -> Optional[User]:
        """Get user by ID, locking the row when ``for_update`` is set"""
        pass

    @abstractmethod
    async def get_many(self, user_ids: List[str]) -> List[User]:
        """Users with the given ids in request order; unknown ids are skipped"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive lookup by email"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update an existing user"""
        pass

    @abstractmethod
    async def search(
        self, filters: UserFilter, sort: UserSort, page: PageRequest
    ) -> Tuple[List[User], int]:
        """Filtered, sorted page of users plus the total matching count"""
        pass

    @abstractmethod
    async def list_pending(self, page: PageRequest) -> Tuple[List[User], int]:
        """Pending users, oldest first"""
        pass

    @abstractmethod
    async def count_by_role_and_status(self) -> List[tuple]:
        """(role, approval_status, count) groups"""
        pass
