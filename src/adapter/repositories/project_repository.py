from typing import List, Optional, Tuple
from sqlalchemy import func, or_
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlmodel import select
from src.app.repositories import ProjectRepository, ProjectWithOwner
from src.domain import Project, User
from src.domain.query import PageRequest, ProjectFilter, ProjectSort
from .filters import LIKE_ESCAPE, contains_pattern

SORT_ORDER = {
    ProjectSort.created_at: (Project.created_at.desc(),),
    ProjectSort.title: (Project.title.asc(),),
    ProjectSort.status: (Project.status.asc(), Project.created_at.desc()),
    ProjectSort.funding_goal: (Project.funding_goal.desc(),),
    ProjectSort.owner: (User.company.asc(), User.first_name.asc()),
}


def _conditions(filters: ProjectFilter) -> list:
    conditions = []
    if filters.search:
        pattern = contains_pattern(filters.search)
        conditions.append(
            or_(
                Project.title.ilike(pattern, escape=LIKE_ESCAPE),
                Project.description.ilike(pattern, escape=LIKE_ESCAPE),
                User.first_name.ilike(pattern, escape=LIKE_ESCAPE),
                User.last_name.ilike(pattern, escape=LIKE_ESCAPE),
                User.email.ilike(pattern, escape=LIKE_ESCAPE),
                User.company.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )
    if filters.status:
        conditions.append(Project.status == filters.status)
    if filters.category:
        conditions.append(Project.industry == filters.category)
    if filters.owner_id:
        conditions.append(Project.owner_id == filters.owner_id)
    if filters.created_from:
        conditions.append(Project.created_at >= filters.created_from)
    if filters.created_to:
        conditions.append(Project.created_at <= filters.created_to)
    return conditions


class SqlAlchemyProjectRepository(ProjectRepository):
    """SQLAlchemy implementation of ProjectRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, project: Project) -> Project:
        """Create a new project"""
        self.session.add(project)
        await self.session.flush()
        await self.session.refresh(project)
        return project

    async def get_by_id(self, project_id: str, for_update: bool = False) -> Optional[Project]:
        """Get project by ID; ``for_update`` takes a row lock and reloads the row"""
        stmt = select(Project).where(Project.id == project_id)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_many(self, project_ids: List[str]) -> List[Project]:
        if not project_ids:
            return []
        result = await self.session.execute(select(Project).where(Project.id.in_(project_ids)))
        by_id = {project.id: project for project in result.scalars().all()}
        return [by_id[project_id] for project_id in dict.fromkeys(project_ids) if project_id in by_id]

    async def get_with_owner(self, project_id: str) -> Optional[ProjectWithOwner]:
        stmt = (
            select(Project, User)
            .outerjoin(User, User.id == Project.owner_id)
            .where(Project.id == project_id)
        )
        result = await self.session.execute(stmt)
        row = result.first()
        return (row[0], row[1]) if row else None

    async def update(self, project: Project) -> Project:
        """Update an existing project"""
        self.session.add(project)
        await self.session.flush()
        await self.session.refresh(project)
        return project

    async def search(
        self, filters: ProjectFilter, sort: ProjectSort, page: PageRequest
    ) -> Tuple[List[ProjectWithOwner], int]:
        conditions = _conditions(filters)

        count_stmt = (
            select(func.count(Project.id))
            .select_from(Project)
            .outerjoin(User, User.id == Project.owner_id)
            .where(*conditions)
        )
        total = (await self.session.execute(count_stmt)).scalar_one()

        stmt = (
            select(Project, User)
            .outerjoin(User, User.id == Project.owner_id)
            .where(*conditions)
            .order_by(*SORT_ORDER[sort], Project.id.asc())
            .offset(page.offset)
            .limit(page.page_size)
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()], total

    async def get_aggregate_rows(self) -> List[tuple]:
        stmt = select(
            Project.status,
            Project.industry,
            Project.funding_goal,
            Project.current_funding,
            Project.funding_from_other_sources,
        )
        result = await self.session.execute(stmt)
        return [tuple(row) for row in result.all()]

    async def get_recent(self, limit: int = 10) -> List[ProjectWithOwner]:
        stmt = (
            select(Project, User)
            .outerjoin(User, User.id == Project.owner_id)
            .order_by(Project.created_at.desc(), Project.id.asc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]
