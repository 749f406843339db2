from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, Field
from src.app.services.workflow_side_effects import SideEffectsReport
from src.app.use_cases.shared_dtos import PaginationDTO
from src.domain import ApprovalStatus, User


def _enum_value(item) -> Optional[str]:
    return item.value if hasattr(item, "value") else item


class UserDTO(BaseModel):
    """User as shown in the admin console"""

    id: str
    email: str
    first_name: str
    last_name: str
    full_name: str
    role: str
    approval_status: str
    company: Optional[str] = None
    location: Optional[str] = None
    is_verified: bool
    is_active: bool
    rejection_reason: Optional[str] = None
    approved_at: Optional[datetime] = None
    version: int
    created_at: datetime
    updated_at: datetime
    days_waiting: Optional[int] = None

    @classmethod
    def from_entity(cls, user: User) -> "UserDTO":
        status = _enum_value(user.approval_status)
        days_waiting = None
        if status == ApprovalStatus.pending.value:
            days_waiting = max((datetime.utcnow() - user.created_at).days, 0)
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            full_name=user.full_name,
            role=_enum_value(user.role),
            approval_status=status,
            company=user.company,
            location=user.location,
            is_verified=bool(user.is_verified),
            is_active=bool(user.is_active),
            rejection_reason=user.rejection_reason,
            approved_at=user.approved_at,
            version=user.version,
            created_at=user.created_at,
            updated_at=user.updated_at,
            days_waiting=days_waiting,
        )


class ListUsersQuery(BaseModel):
    """Query DTO for the admin user listing"""

    search: Optional[str] = None
    role: Optional[str] = None
    status: Optional[str] = None
    created_from: Optional[date] = None
    created_to: Optional[date] = None
    sort: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None


class ListUsersResponse(BaseModel):
    users: List[UserDTO]
    pagination: PaginationDTO


class ApproveUserRequest(BaseModel):
    admin_notes: Optional[str] = None
    expected_version: Optional[int] = None


class RejectUserRequest(BaseModel):
    """Request DTO for rejecting a user; the reason is validated by the domain"""

    rejection_reason: Optional[str] = None
    admin_notes: Optional[str] = None
    expected_version: Optional[int] = None


class UserActionResponse(BaseModel):
    user: UserDTO
    side_effects: SideEffectsReport = Field(default_factory=SideEffectsReport)


class BulkApproveRequest(BaseModel):
    user_ids: List[str] = Field(default_factory=list)
    admin_notes: Optional[str] = None


class BulkFailureDTO(BaseModel):
    id: str
    code: str
    reason: str


class BulkApproveResponse(BaseModel):
    """Per-id outcome of a bulk approval"""

    approved_count: int
    emails_sent: int
    approved_ids: List[str] = Field(default_factory=list)
    failures: List[BulkFailureDTO] = Field(default_factory=list)


class CreateUserRequest(BaseModel):
    """Request DTO for an admin-created account"""

    email: str
    first_name: str
    last_name: str
    role: str
    company: Optional[str] = None
    location: Optional[str] = None


class UpdateUserRequest(BaseModel):
    """
    Request DTO for an admin edit of a user's profile; only fields that
    are sent are applied. ``is_active = false`` deactivates the account.

    Workflow and identity fields are accepted so that attempts to change
    them are rejected with PROTECTED_FIELD instead of silently ignored.
    """

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    is_verified: Optional[bool] = None
    is_active: Optional[bool] = None
    email: Optional[str] = None
    role: Optional[str] = None
    approval_status: Optional[str] = None
    expected_version: Optional[int] = None

    def changes(self) -> dict:
        return {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if name != "expected_version"
        }


class UpdateUserResponse(BaseModel):
    user: UserDTO
    changed_fields: List[str] = Field(default_factory=list)
    side_effects: SideEffectsReport = Field(default_factory=SideEffectsReport)
