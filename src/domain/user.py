from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlmodel import Field
from src.domain.base import BaseModel, VersionedMixin, generate_uuid
from src.domain.enums import ApprovalStatus, UserAction, UserRole
from src.domain.exceptions import ValidationError
from src.domain.state_machine import next_user_status

EDITABLE_FIELDS = frozenset(
    {"first_name", "last_name", "company", "location", "is_verified", "is_active", "approval_status"}
)

PROTECTED_FIELDS = frozenset(
    {
        "id",
        "email",
        "role",
        "approved_at",
        "rejection_reason",
        "version",
        "created_at",
        "updated_at",
    }
)

# Column widths of the bounded text fields
MAX_LENGTHS = {"first_name": 100, "last_name": 100, "company": 255, "location": 255}


class User(VersionedMixin, BaseModel, table=True):
    """
    User Entity

    A registered platform account. Project owners and investors start
    out pending and are approved or rejected by an administrator.
    """
    __tablename__ = "users"
    __entity_name__ = "user"

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    email: str = Field(max_length=255, nullable=False, unique=True, index=True)
    first_name: str = Field(max_length=100, nullable=False)
    last_name: str = Field(max_length=100, nullable=False)
    role: UserRole = Field(nullable=False, index=True)
    approval_status: ApprovalStatus = Field(
        default=ApprovalStatus.pending, nullable=False, index=True
    )
    company: Optional[str] = Field(default=None, max_length=255)
    location: Optional[str] = Field(default=None, max_length=255)
    is_verified: bool = Field(default=False, nullable=False)
    is_active: bool = Field(default=True, nullable=False)
    rejection_reason: Optional[str] = Field(default=None)
    approved_at: Optional[datetime] = Field(default=None)
    version: int = Field(default=1, nullable=False)
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False, index=True)
    updated_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)

    class Config:
        use_enum_values = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def role_value(self) -> str:
        return self.role.value if hasattr(self.role, "value") else self.role

    def approval_value(self) -> str:
        status = self.approval_status
        return status.value if hasattr(status, "value") else status

    def approve(self) -> None:
        """Approve a pending account"""
        self.approval_status = next_user_status(self.approval_status, UserAction.approve)
        self.approved_at = datetime.utcnow()
        self.rejection_reason = None
        self.bump_version()

    def reject(self, reason: Optional[str]) -> None:
        """Reject a pending account; the reason is shown to the user"""
        if reason is None or not str(reason).strip():
            raise ValidationError("Rejection reason is required")
        self.approval_status = next_user_status(self.approval_status, UserAction.reject)
        self.rejection_reason = str(reason).strip()
        self.bump_version()

    def apply_changes(self, changes: Dict[str, Any]) -> List[str]:
        """Validate every change first, then apply; returns changed field names"""
        cleaned = {name: self._clean_field(name, value) for name, value in changes.items()}

        changed: List[str] = []
        for name, value in cleaned.items():
            if getattr(self, name) != value:
                setattr(self, name, value)
                changed.append(name)

        if changed:
            self.bump_version()
        return changed

    def _clean_field(self, name: str, value: Any) -> Any:
        if name in PROTECTED_FIELDS:
            raise ValidationError(
                f"'{name}' cannot be changed directly", code="PROTECTED_FIELD"
            )
        if name not in EDITABLE_FIELDS:
            raise ValidationError(f"Unknown user field '{name}'")

        if name in ("first_name", "last_name"):
            if value is None or not str(value).strip():
                raise ValidationError(f"{name} cannot be empty")
            return self._check_length(name, str(value).strip())

        if name in ("company", "location"):
            if value is None:
                return None
            return self._check_length(name, str(value).strip()) or None

        if name in ("is_verified", "is_active"):
            return bool(value)

        if name == "approval_status":
            try:
                status = ApprovalStatus(value.value if hasattr(value, "value") else value)
            except ValueError:
                raise ValidationError(f"Invalid approval status '{value}'")
            if status.value != self.approval_value():
                raise ValidationError(
                    "Approval status can only be changed by approve or reject",
                    code="PROTECTED_FIELD",
                )
            return status

        return value

    @staticmethod
    def _check_length(name: str, value: str) -> str:
        if len(value) > MAX_LENGTHS[name]:
            raise ValidationError(f"{name} must be at most {MAX_LENGTHS[name]} characters")
        return value
