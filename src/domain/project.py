"""Project Entity

A crowdfunding listing moving through the admin review workflow.
"""
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Union
from sqlmodel import Field, Column
from sqlalchemy import JSON as SQLJSON
from src.domain.base import BaseModel, VersionedMixin, generate_uuid
from src.domain.enums import ProjectAction, ProjectStage, ProjectStatus
from src.domain.exceptions import InvalidTransition, ValidationError
from src.domain.state_machine import next_project_status

DELIST_REASON = "Delisted by administrator"

# Fields the general-purpose update path may touch
EDITABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "industry",
        "stage",
        "funding_goal",
        "current_funding",
        "funding_from_other_sources",
        "valuation",
        "location",
        "team_size",
        "tags",
        "is_featured",
        "image_url",
        "logo_url",
        "pitch_deck_url",
    }
)

# Only the workflow use cases write these
PROTECTED_FIELDS = frozenset(
    {
        "id",
        "owner_id",
        "status",
        "approved_at",
        "rejected_reason",
        "admin_notes",
        "version",
        "created_at",
        "updated_at",
    }
)

# Column widths of the bounded text fields
MAX_LENGTHS = {"title": 255, "industry": 100, "location": 255}


def normalize_tags(value: Union[None, str, List[str]]) -> List[str]:
    """Accept a list or a comma-joined string; trim, drop blanks, keep first-seen order"""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple)):
        items = list(value)
    else:
        raise ValidationError("tags must be a list or a comma-separated string")

    tags: List[str] = []
    for item in items:
        tag = str(item).strip()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def _to_decimal(field: str, value: Any) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number")


def _check_length(field: str, value: str) -> str:
    limit = MAX_LENGTHS.get(field)
    if limit is not None and len(value) > limit:
        raise ValidationError(f"{field} must be at most {limit} characters")
    return value


def _clean_reason(reason: Optional[str]) -> str:
    if reason is None or not str(reason).strip():
        raise ValidationError("Rejection reason is required")
    return str(reason).strip()


class Project(VersionedMixin, BaseModel, table=True):
    """
    Project Entity

    Carries the listing data plus the workflow-managed fields
    (status, admin_notes, rejected_reason, approved_at, is_featured).
    """
    __tablename__ = "projects"
    __entity_name__ = "project"

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    owner_id: str = Field(index=True, nullable=False)

    # Listing content
    title: str = Field(max_length=255, nullable=False)
    description: Optional[str] = Field(default=None)
    industry: Optional[str] = Field(default=None, max_length=100, index=True)
    stage: ProjectStage = Field(default=ProjectStage.idea, nullable=False)
    location: Optional[str] = Field(default=None, max_length=255)
    team_size: int = Field(default=1, nullable=False)
    tags: List[str] = Field(default_factory=list, sa_column=Column(SQLJSON, nullable=False))

    # Funding figures
    funding_goal: Decimal = Field(max_digits=15, decimal_places=2, nullable=False)
    current_funding: Decimal = Field(
        default=Decimal("0"), max_digits=15, decimal_places=2, nullable=False
    )
    funding_from_other_sources: Decimal = Field(
        default=Decimal("0"), max_digits=15, decimal_places=2, nullable=False
    )
    valuation: Optional[Decimal] = Field(default=None, max_digits=15, decimal_places=2)

    # Media references (uploads are handled elsewhere)
    image_url: Optional[str] = Field(default=None)
    logo_url: Optional[str] = Field(default=None)
    pitch_deck_url: Optional[str] = Field(default=None)

    # Workflow
    status: ProjectStatus = Field(default=ProjectStatus.draft, nullable=False, index=True)
    is_featured: bool = Field(default=False, nullable=False)
    admin_notes: Optional[str] = Field(default=None)
    rejected_reason: Optional[str] = Field(default=None)
    approved_at: Optional[datetime] = Field(default=None)
    version: int = Field(default=1, nullable=False)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow, nullable=False, index=True)
    updated_at: datetime = Field(default_factory=datetime.utcnow, nullable=False)

    class Config:
        use_enum_values = True

    # Derived figures

    @property
    def total_current_funding(self) -> Decimal:
        return Decimal(str(self.current_funding or 0)) + Decimal(
            str(self.funding_from_other_sources or 0)
        )

    @property
    def funding_percentage(self) -> float:
        goal = Decimal(str(self.funding_goal or 0))
        if goal <= 0:
            return 0.0
        return round(float(self.total_current_funding / goal * 100), 2)

    def status_value(self) -> str:
        return self.status.value if hasattr(self.status, "value") else self.status

    # Workflow transitions

    def submit(self) -> None:
        """Owner hands a draft in for review"""
        self.status = next_project_status(self.status, ProjectAction.submit)
        self.bump_version()

    def start_review(self) -> None:
        """Mark project as being looked at by an admin"""
        self.status = next_project_status(self.status, ProjectAction.start_review)
        self.bump_version()

    def approve(self, admin_notes: Optional[str] = None) -> bool:
        """
        Approve the project.

        Returns False without touching anything when the project is
        already approved, so retries are harmless.
        """
        target = next_project_status(self.status, ProjectAction.approve)
        if self.status_value() == ProjectStatus.approved.value:
            return False

        self.status = target
        self.approved_at = datetime.utcnow()
        self.rejected_reason = None
        if admin_notes and admin_notes.strip():
            self.admin_notes = admin_notes.strip()
        self.bump_version()
        return True

    def reject(self, reason: Optional[str], admin_notes: Optional[str] = None) -> None:
        """Reject (or take down) the project with a mandatory reason"""
        reason = _clean_reason(reason)
        self.status = next_project_status(self.status, ProjectAction.reject)
        self._mark_rejected(reason, admin_notes)

    def delist(self, admin_notes: Optional[str] = None) -> None:
        """Remove an approved project from the public listing"""
        self.status = next_project_status(self.status, ProjectAction.delist)
        self._mark_rejected(DELIST_REASON, admin_notes)

    def _mark_rejected(self, reason: str, admin_notes: Optional[str]) -> None:
        self.rejected_reason = reason
        notes = admin_notes.strip() if admin_notes else ""
        self.admin_notes = notes or reason
        self.is_featured = False
        self.bump_version()

    def set_featured(self, is_featured: Optional[bool] = None) -> bool:
        """
        Feature or unfeature an approved project.

        Flips the flag when ``is_featured`` is None. Returns whether the
        flag changed.
        """
        if self.status_value() != ProjectStatus.approved.value:
            raise InvalidTransition("project", self.status_value(), "feature")

        target = (not self.is_featured) if is_featured is None else bool(is_featured)
        if target == bool(self.is_featured):
            return False

        self.is_featured = target
        self.bump_version()
        return True

    # General-purpose update path

    def apply_changes(self, changes: Dict[str, Any]) -> List[str]:
        """
        Apply a partial update of non-workflow fields.

        Every value is validated before any attribute is written, so a
        failing update leaves the entity untouched. Returns the names of
        fields whose value actually changed.
        """
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
                f"'{name}' is managed by the moderation workflow", code="PROTECTED_FIELD"
            )
        if name not in EDITABLE_FIELDS:
            raise ValidationError(f"Unknown project field '{name}'")

        if name == "title":
            if value is None or not str(value).strip():
                raise ValidationError("Project title cannot be empty")
            return _check_length(name, str(value).strip())

        if name in ("description", "industry", "location", "image_url", "logo_url", "pitch_deck_url"):
            if value is None:
                return None
            return _check_length(name, str(value).strip()) or None

        if name == "stage":
            try:
                return ProjectStage(value.value if hasattr(value, "value") else value)
            except ValueError:
                raise ValidationError(f"Invalid project stage '{value}'")

        if name == "funding_goal":
            amount = _to_decimal(name, value)
            if amount <= 0:
                raise ValidationError("funding_goal must be greater than 0")
            return amount

        if name in ("current_funding", "funding_from_other_sources"):
            amount = _to_decimal(name, value if value is not None else 0)
            if amount < 0:
                raise ValidationError(f"{name} cannot be negative")
            return amount

        if name == "valuation":
            if value is None or value == "":
                return None
            amount = _to_decimal(name, value)
            if amount < 0:
                raise ValidationError("valuation cannot be negative")
            return amount

        if name == "team_size":
            try:
                size = int(value)
            except (TypeError, ValueError):
                raise ValidationError("team_size must be an integer")
            if size < 1:
                raise ValidationError("team_size must be at least 1")
            return size

        if name == "tags":
            return normalize_tags(value)

        if name == "is_featured":
            featured = bool(value)
            if featured and not self.is_featured and self.status_value() != ProjectStatus.approved.value:
                raise InvalidTransition("project", self.status_value(), "feature")
            return featured

        return value
