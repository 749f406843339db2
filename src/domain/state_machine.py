"""Moderation state machines.

Every legal move is a row in a transition table keyed by
``(current_status, action)``. Anything missing from a table is an
``InvalidTransition``.
"""
from typing import Dict, Tuple, Union
from src.domain.enums import (
    ApprovalStatus,
    ProjectAction,
    ProjectStatus,
    UserAction,
)
from src.domain.exceptions import InvalidTransition

P = ProjectStatus

PROJECT_TRANSITIONS: Dict[Tuple[ProjectStatus, ProjectAction], ProjectStatus] = {
    # Submission
    (P.draft, ProjectAction.submit): P.submitted,
    (P.draft, ProjectAction.start_review): P.under_review,
    (P.submitted, ProjectAction.start_review): P.under_review,
    (P.pending, ProjectAction.start_review): P.under_review,
    # Approval, including reconsideration of a rejected project
    (P.draft, ProjectAction.approve): P.approved,
    (P.submitted, ProjectAction.approve): P.approved,
    (P.pending, ProjectAction.approve): P.approved,
    (P.under_review, ProjectAction.approve): P.approved,
    (P.pending_update, ProjectAction.approve): P.approved,
    (P.rejected, ProjectAction.approve): P.approved,
    (P.approved, ProjectAction.approve): P.approved,
    # Rejection; rejecting an approved project takes it off the listing
    (P.draft, ProjectAction.reject): P.rejected,
    (P.submitted, ProjectAction.reject): P.rejected,
    (P.pending, ProjectAction.reject): P.rejected,
    (P.under_review, ProjectAction.reject): P.rejected,
    (P.pending_update, ProjectAction.reject): P.rejected,
    (P.approved, ProjectAction.reject): P.rejected,
    (P.approved, ProjectAction.delist): P.rejected,
}

# funded/completed are reached through payment completion, never by an admin
PROJECT_TERMINAL_STATUSES = frozenset({P.funded, P.completed})

USER_TRANSITIONS: Dict[Tuple[ApprovalStatus, UserAction], ApprovalStatus] = {
    (ApprovalStatus.pending, UserAction.approve): ApprovalStatus.approved,
    (ApprovalStatus.pending, UserAction.reject): ApprovalStatus.rejected,
}


def _value(item: Union[str, ProjectStatus, ApprovalStatus]) -> str:
    return item.value if hasattr(item, "value") else str(item)


def next_project_status(
    current: Union[str, ProjectStatus], action: ProjectAction
) -> ProjectStatus:
    """Resolve the status a project moves to, or raise InvalidTransition"""
    try:
        key = (ProjectStatus(_value(current)), action)
    except ValueError:
        raise InvalidTransition("project", _value(current), action.value)
    if key not in PROJECT_TRANSITIONS:
        raise InvalidTransition("project", _value(current), action.value)
    return PROJECT_TRANSITIONS[key]


def next_user_status(
    current: Union[str, ApprovalStatus], action: UserAction
) -> ApprovalStatus:
    """Resolve the approval status a user moves to, or raise InvalidTransition"""
    try:
        key = (ApprovalStatus(_value(current)), action)
    except ValueError:
        raise InvalidTransition("user", _value(current), action.value)
    if key not in USER_TRANSITIONS:
        raise InvalidTransition("user", _value(current), action.value)
    return USER_TRANSITIONS[key]


def allowed_project_actions(current: Union[str, ProjectStatus]) -> list:
    """Actions an operator may take on a project in ``current`` status"""
    status = ProjectStatus(_value(current))
    return [action for (source, action) in PROJECT_TRANSITIONS if source == status]
