"""Batch lookups by id against the SQLite-backed repositories"""
import pytest
from src.adapter.repositories.project_repository import SqlAlchemyProjectRepository
from src.adapter.repositories.user_repository import SqlAlchemyUserRepository


@pytest.mark.asyncio
async def test_projects_get_many_keeps_request_order(session_factory, create_project):
    first = await create_project(title="First")
    second = await create_project(title="Second")
    await create_project(title="Not asked for")

    async with session_factory() as session:
        projects = await SqlAlchemyProjectRepository(session).get_many(
            [second.id, "missing", first.id, second.id]
        )

    assert [project.title for project in projects] == ["Second", "First"]


@pytest.mark.asyncio
async def test_users_get_many(session_factory, create_user):
    ada = await create_user(email="ada@example.com")
    alan = await create_user(email="alan@example.com")

    async with session_factory() as session:
        repository = SqlAlchemyUserRepository(session)
        users = await repository.get_many([alan.id, ada.id, "ghost"])
        empty = await repository.get_many([])

    assert [user.email for user in users] == ["alan@example.com", "ada@example.com"]
    assert empty == []
