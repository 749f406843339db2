import pytest
from unittest.mock import AsyncMock, MagicMock
from src.app.services.workflow_side_effects import SideEffectsReport


@pytest.fixture
def mock_uow():
    """Unit of work whose repositories are AsyncMocks"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=None)
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.projects = MagicMock()
    uow.projects.get_by_id = AsyncMock(return_value=None)
    uow.projects.get_with_owner = AsyncMock(return_value=None)
    uow.projects.update = AsyncMock(side_effect=lambda project: project)
    uow.projects.search = AsyncMock(return_value=([], 0))
    uow.projects.get_aggregate_rows = AsyncMock(return_value=[])
    uow.projects.get_recent = AsyncMock(return_value=[])

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.search = AsyncMock(return_value=([], 0))
    uow.users.list_pending = AsyncMock(return_value=([], 0))
    uow.users.count_by_role_and_status = AsyncMock(return_value=[])

    uow.notification_jobs = MagicMock()
    uow.notification_jobs.get_by_id = AsyncMock(return_value=None)
    uow.notification_jobs.update = AsyncMock(side_effect=lambda job: job)
    return uow


@pytest.fixture
def mock_side_effects():
    """WorkflowSideEffects stand-in reporting full success"""
    side_effects = MagicMock()
    side_effects.run = AsyncMock(
        return_value=SideEffectsReport(
            notification_queued=True, audit_logged=True, stats_invalidated=True
        )
    )
    return side_effects
