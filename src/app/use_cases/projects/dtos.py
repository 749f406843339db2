from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional, Union
from pydantic import BaseModel, Field
from src.app.services.workflow_side_effects import SideEffectsReport
from src.app.use_cases.shared_dtos import ErrorDTO, PaginationDTO
from src.domain import Project, User
from src.domain.state_machine import allowed_project_actions


def _enum_value(item) -> Optional[str]:
    return item.value if hasattr(item, "value") else item


def _float(value) -> Optional[float]:
    return float(value) if value is not None else None


class ProjectDTO(BaseModel):
    """Project as shown in the admin console, with owner and funding figures"""

    id: str
    owner_id: str
    title: str
    description: Optional[str] = None
    industry: Optional[str] = None
    category: Optional[str] = None
    stage: str
    status: str
    funding_goal: float
    current_funding: float
    funding_from_other_sources: float
    total_current_funding: float
    funding_percentage: float
    valuation: Optional[float] = None
    location: Optional[str] = None
    team_size: int
    tags: List[str] = Field(default_factory=list)
    is_featured: bool
    image_url: Optional[str] = None
    logo_url: Optional[str] = None
    pitch_deck_url: Optional[str] = None
    admin_notes: Optional[str] = None
    rejected_reason: Optional[str] = None
    approved_at: Optional[datetime] = None
    version: int
    created_at: datetime
    updated_at: datetime
    days_since_submission: int
    owner_name: Optional[str] = None
    owner_email: Optional[str] = None
    owner_company: Optional[str] = None
    allowed_actions: List[str] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, project: Project, owner: Optional[User] = None) -> "ProjectDTO":
        return cls(
            id=project.id,
            owner_id=project.owner_id,
            title=project.title,
            description=project.description,
            industry=project.industry,
            category=project.industry,
            stage=_enum_value(project.stage),
            status=_enum_value(project.status),
            funding_goal=_float(project.funding_goal),
            current_funding=_float(project.current_funding),
            funding_from_other_sources=_float(project.funding_from_other_sources),
            total_current_funding=_float(project.total_current_funding),
            funding_percentage=project.funding_percentage,
            valuation=_float(project.valuation),
            location=project.location,
            team_size=project.team_size,
            tags=list(project.tags or []),
            is_featured=bool(project.is_featured),
            image_url=project.image_url,
            logo_url=project.logo_url,
            pitch_deck_url=project.pitch_deck_url,
            admin_notes=project.admin_notes,
            rejected_reason=project.rejected_reason,
            approved_at=project.approved_at,
            version=project.version,
            created_at=project.created_at,
            updated_at=project.updated_at,
            days_since_submission=max((datetime.utcnow() - project.created_at).days, 0),
            owner_name=owner.full_name if owner else None,
            owner_email=owner.email if owner else None,
            owner_company=owner.company if owner else None,
            allowed_actions=[action.value for action in allowed_project_actions(project.status)],
        )


class ListProjectsQuery(BaseModel):
    """Query DTO for the admin project listing"""

    search: Optional[str] = None
    status: Optional[str] = None
    category: Optional[str] = None
    owner_id: Optional[str] = None
    created_from: Optional[date] = None
    created_to: Optional[date] = None
    sort: Optional[str] = None
    page: Optional[int] = None
    limit: Optional[int] = None


class ListProjectsResponse(BaseModel):
    """Response DTO for ListProjectsUseCase"""

    projects: List[ProjectDTO]
    pagination: PaginationDTO


class ApproveProjectRequest(BaseModel):
    """Request DTO for approving a project (API layer)"""

    admin_notes: Optional[str] = None
    expected_version: Optional[int] = None


class RejectProjectRequest(BaseModel):
    """Request DTO for rejecting a project; the reason is validated by the domain"""

    rejection_reason: Optional[str] = None
    admin_notes: Optional[str] = None
    expected_version: Optional[int] = None


class DelistProjectRequest(BaseModel):
    admin_notes: Optional[str] = None
    expected_version: Optional[int] = None


class StartReviewRequest(BaseModel):
    expected_version: Optional[int] = None


class ToggleFeaturedRequest(BaseModel):
    """Omit ``is_featured`` to flip the current flag"""

    is_featured: Optional[bool] = None
    expected_version: Optional[int] = None


class EditProjectRequest(BaseModel):
    """Request DTO for an admin edit; only fields that are sent are applied"""

    title: Optional[str] = None
    description: Optional[str] = None
    industry: Optional[str] = None
    stage: Optional[str] = None
    funding_goal: Optional[Decimal] = None
    current_funding: Optional[Decimal] = None
    funding_from_other_sources: Optional[Decimal] = None
    valuation: Optional[Decimal] = None
    location: Optional[str] = None
    team_size: Optional[int] = None
    tags: Optional[Union[List[str], str]] = None
    is_featured: Optional[bool] = None
    image_url: Optional[str] = None
    logo_url: Optional[str] = None
    pitch_deck_url: Optional[str] = None
    approve_after_edit: bool = False
    admin_notes: Optional[str] = None
    expected_version: Optional[int] = None

    def changes(self) -> dict:
        """Explicitly sent editable fields"""
        control = {"approve_after_edit", "admin_notes", "expected_version"}
        return {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if name not in control
        }


class ProjectActionResponse(BaseModel):
    """Response DTO for a single moderation action"""

    project: ProjectDTO
    changed: bool = True
    side_effects: SideEffectsReport = Field(default_factory=SideEffectsReport)


class ApprovalOutcome(BaseModel):
    """Result of the approve step that follows an edit"""

    succeeded: bool
    error: Optional[ErrorDTO] = None
    side_effects: Optional[SideEffectsReport] = None


class EditProjectResponse(BaseModel):
    """Response DTO for EditProjectUseCase"""

    project: ProjectDTO
    changed_fields: List[str] = Field(default_factory=list)
    side_effects: SideEffectsReport = Field(default_factory=SideEffectsReport)
    approval: Optional[ApprovalOutcome] = None
