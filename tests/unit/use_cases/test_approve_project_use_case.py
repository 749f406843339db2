import pytest
from decimal import Decimal
from src.app.use_cases.projects import ApproveProjectUseCase
from src.domain import NotificationKind, Project, ProjectStatus, User, UserRole


def make_project(status=ProjectStatus.pending, version=1):
    return Project(
        id="project-1",
        owner_id="owner-1",
        title="Solar Roof Kit",
        funding_goal=Decimal("10000"),
        status=status,
        version=version,
    )


def make_owner():
    return User(
        id="owner-1",
        email="owner@example.com",
        first_name="Grace",
        last_name="Hopper",
        role=UserRole.project_owner,
    )


@pytest.mark.asyncio
async def test_approve_project_success(mock_uow, mock_side_effects):
    """Approving a pending project commits and queues the owner notification"""
    # Arrange
    project = make_project()
    mock_uow.projects.get_by_id.return_value = project
    mock_uow.users.get_by_id.return_value = make_owner()
    use_case = ApproveProjectUseCase(mock_uow, mock_side_effects, "admin-1")

    # Act
    result = await use_case.execute("project-1", admin_notes="Great pitch")

    # Assert
    assert result.is_ok()
    assert result.value.changed is True
    assert result.value.project.status == "approved"
    assert result.value.project.owner_email == "owner@example.com"
    assert result.value.side_effects.notification_queued is True

    mock_uow.projects.get_by_id.assert_called_once_with("project-1", for_update=True)
    mock_uow.commit.assert_called_once()

    kwargs = mock_side_effects.run.call_args[1]
    assert kwargs["event_type"] == "project_approved"
    assert kwargs["actor_id"] == "admin-1"
    assert kwargs["metadata"]["previous_status"] == "pending"
    assert kwargs["notification"].kind == NotificationKind.project_approved
    assert kwargs["notification"].recipient_email == "owner@example.com"


@pytest.mark.asyncio
async def test_approve_already_approved_is_noop(mock_uow, mock_side_effects):
    project = make_project(status=ProjectStatus.approved, version=4)
    mock_uow.projects.get_by_id.return_value = project
    use_case = ApproveProjectUseCase(mock_uow, mock_side_effects, "admin-1")

    result = await use_case.execute("project-1")

    assert result.is_ok()
    assert result.value.changed is False
    assert result.value.project.version == 4
    mock_uow.commit.assert_not_called()
    mock_side_effects.run.assert_not_called()


@pytest.mark.asyncio
async def test_approve_project_not_found(mock_uow, mock_side_effects):
    use_case = ApproveProjectUseCase(mock_uow, mock_side_effects, "admin-1")

    result = await use_case.execute("missing")

    assert result.is_err()
    assert result.error.code == "PROJECT_NOT_FOUND"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_approve_with_stale_version_conflicts(mock_uow, mock_side_effects):
    mock_uow.projects.get_by_id.return_value = make_project(version=3)
    use_case = ApproveProjectUseCase(mock_uow, mock_side_effects, "admin-1")

    result = await use_case.execute("project-1", expected_version=2)

    assert result.is_err()
    assert result.error.code == "CONFLICT"
    mock_uow.commit.assert_not_called()
    mock_side_effects.run.assert_not_called()


@pytest.mark.asyncio
async def test_approve_funded_project_is_invalid(mock_uow, mock_side_effects):
    mock_uow.projects.get_by_id.return_value = make_project(status=ProjectStatus.funded)
    use_case = ApproveProjectUseCase(mock_uow, mock_side_effects, "admin-1")

    result = await use_case.execute("project-1")

    assert result.is_err()
    assert result.error.code == "INVALID_TRANSITION"


@pytest.mark.asyncio
async def test_approve_without_owner_skips_notification(mock_uow, mock_side_effects):
    mock_uow.projects.get_by_id.return_value = make_project()
    use_case = ApproveProjectUseCase(mock_uow, mock_side_effects, "admin-1")

    result = await use_case.execute("project-1")

    assert result.is_ok()
    assert mock_side_effects.run.call_args[1]["notification"] is None
