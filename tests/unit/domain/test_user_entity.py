import pytest
from src.domain import User, UserRole, ApprovalStatus, ValidationError, InvalidTransition


def make_user(status=ApprovalStatus.pending, **overrides):
    data = dict(
        id="user-1",
        email="ada@example.com",
        first_name="Ada",
        last_name="Lovelace",
        role=UserRole.project_owner,
        approval_status=status,
    )
    data.update(overrides)
    return User(**data)


def test_approve_pending_user():
    user = make_user()

    user.approve()

    assert user.approval_value() == "approved"
    assert user.approved_at is not None
    assert user.version == 2


def test_reject_pending_user_requires_reason():
    user = make_user()

    with pytest.raises(ValidationError):
        user.reject("")

    assert user.approval_value() == "pending"


def test_reject_pending_user():
    user = make_user()

    user.reject(" Incomplete profile ")

    assert user.approval_value() == "rejected"
    assert user.rejection_reason == "Incomplete profile"


@pytest.mark.parametrize("status", [ApprovalStatus.approved, ApprovalStatus.rejected])
def test_only_pending_users_move(status):
    user = make_user(status=status)

    with pytest.raises(InvalidTransition):
        user.approve()
    with pytest.raises(InvalidTransition):
        user.reject("reason")


def test_apply_changes_refuses_email():
    user = make_user()

    with pytest.raises(ValidationError) as exc:
        user.apply_changes({"email": "other@example.com"})

    assert exc.value.code == "PROTECTED_FIELD"


def test_apply_changes_refuses_approval_shortcut():
    user = make_user()

    with pytest.raises(ValidationError) as exc:
        user.apply_changes({"approval_status": "approved"})

    assert exc.value.code == "PROTECTED_FIELD"


def test_apply_changes_updates_profile():
    user = make_user()

    changed = user.apply_changes({"company": " Analytical Engines ", "first_name": "Ada"})

    assert changed == ["company"]
    assert user.company == "Analytical Engines"


def test_full_name():
    assert make_user().full_name == "Ada Lovelace"


def test_apply_changes_refuses_overlong_values():
    user = make_user()

    with pytest.raises(ValidationError):
        user.apply_changes({"last_name": "L" * 101})
    with pytest.raises(ValidationError):
        user.apply_changes({"company": "C" * 256})

    assert user.last_name == "Lovelace"
    assert user.company is None
