import pytest
from src.domain import ProjectAction, ProjectStatus, ApprovalStatus, UserAction, InvalidTransition
from src.domain.state_machine import (
    PROJECT_TRANSITIONS,
    allowed_project_actions,
    next_project_status,
    next_user_status,
)


@pytest.mark.parametrize(
    "status",
    ["pending", "submitted", "under_review", "pending_update", "draft", "rejected", "approved"],
)
def test_approve_sources(status):
    assert next_project_status(status, ProjectAction.approve) == ProjectStatus.approved


@pytest.mark.parametrize("status", ["funded", "completed"])
def test_terminal_statuses_have_no_admin_transitions(status):
    for action in ProjectAction:
        with pytest.raises(InvalidTransition):
            next_project_status(status, action)
    assert allowed_project_actions(status) == []


def test_delist_only_from_approved():
    assert next_project_status("approved", ProjectAction.delist) == ProjectStatus.rejected
    with pytest.raises(InvalidTransition):
        next_project_status("pending", ProjectAction.delist)


def test_unknown_status_is_invalid_transition():
    with pytest.raises(InvalidTransition) as exc:
        next_project_status("archived", ProjectAction.approve)

    assert "archived" in exc.value.message


def test_every_transition_targets_a_known_status():
    assert set(PROJECT_TRANSITIONS.values()) <= set(ProjectStatus)


def test_allowed_actions_for_approved():
    actions = allowed_project_actions(ProjectStatus.approved)

    assert set(actions) == {ProjectAction.approve, ProjectAction.reject, ProjectAction.delist}


def test_user_transitions():
    assert next_user_status("pending", UserAction.approve) == ApprovalStatus.approved
    assert next_user_status("pending", UserAction.reject) == ApprovalStatus.rejected
    with pytest.raises(InvalidTransition):
        next_user_status("rejected", UserAction.approve)
