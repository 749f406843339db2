from typing import List, Optional, Tuple
from sqlalchemy import func, or_
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel import select
from src.app.repositories import UserRepository
from src.domain import ApprovalStatus, User
from src.domain.query import PageRequest, UserFilter, UserSort
from .filters import LIKE_ESCAPE, contains_pattern

SORT_ORDER = {
    UserSort.created_at: (User.created_at.desc(),),
    UserSort.name: (User.last_name.asc(), User.first_name.asc()),
    UserSort.email: (User.email.asc(),),
    UserSort.status: (User.approval_status.asc(), User.created_at.desc()),
}


def _conditions(filters: UserFilter) -> list:
    conditions = []
    if filters.search:
        pattern = contains_pattern(filters.search)
        conditions.append(
            or_(
                User.first_name.ilike(pattern, escape=LIKE_ESCAPE),
                User.last_name.ilike(pattern, escape=LIKE_ESCAPE),
                User.email.ilike(pattern, escape=LIKE_ESCAPE),
                User.company.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
    if filters.role:
        conditions.append(User.role == filters.role)
    if filters.status:
        conditions.append(User.approval_status == filters.status)
    if filters.created_from:
        conditions.append(User.created_at >= filters.created_from)
    if filters.created_to:
        conditions.append(User.created_at <= filters.created_to)
    return conditions


class SqlAlchemyUserRepository(UserRepository):
    """SQLAlchemy implementation of UserRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: str, for_update: bool = False) -> Optional[User]:
        """Get user by ID; ``for_update`` takes a row lock and reloads the row"""
        stmt = select(User).where(User.id == user_id)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_many(self, user_ids: List[str]) -> List[User]:
        if not user_ids:
            return []
        result = await self.session.execute(select(User).where(User.id.in_(user_ids)))
        by_id = {user.id: user for user in result.scalars().all()}
        return [by_id[user_id] for user_id in dict.fromkeys(user_ids) if user_id in by_id]

    async def get_by_email(self, email: str) -> Optional[User]:
        stmt = select(User).where(func.lower(User.email) == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def update(self, user: User) -> User:
        """Update an existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def search(
        self, filters: UserFilter, sort: UserSort, page: PageRequest
    ) -> Tuple[List[User], int]:
        conditions = _conditions(filters)

        count_stmt = select(func.count(User.id)).where(*conditions)
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = (
            select(User)
            .where(*conditions)
            .order_by(*SORT_ORDER[sort], User.id.asc())
            .offset(page.offset)
            .limit(page.page_size)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def list_pending(self, page: PageRequest) -> Tuple[List[User], int]:
        pending = User.approval_status == ApprovalStatus.pending

        total = (await self.session.execute(select(func.count(User.id)).where(pending))).scalar_one()

        stmt = (
            select(User)
            .where(pending)
            .order_by(User.created_at.asc(), User.id.asc())
            .offset(page.offset)
            .limit(page.page_size)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total

    async def count_by_role_and_status(self) -> List[tuple]:
        stmt = select(User.role, User.approval_status, func.count(User.id)).group_by(
            User.role, User.approval_status
        )
        result = await self.session.execute(stmt)
        return [tuple(row) for row in result.all()]
