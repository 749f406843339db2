from src.app.use_cases.projects.list_projects_use_case import ListProjectsUseCase
from src.app.use_cases.projects.get_project_use_case import GetProjectUseCase
from src.app.use_cases.projects.approve_project_use_case import ApproveProjectUseCase
from src.app.use_cases.projects.reject_project_use_case import RejectProjectUseCase
from src.app.use_cases.projects.delist_project_use_case import DelistProjectUseCase
from src.app.use_cases.projects.start_review_use_case import StartReviewUseCase
from src.app.use_cases.projects.toggle_featured_use_case import ToggleFeaturedUseCase
from src.app.use_cases.projects.edit_project_use_case import EditProjectUseCase
from src.app.use_cases.projects.dtos import (
    ProjectDTO,
    ListProjectsQuery,
    ListProjectsResponse,
    ApproveProjectRequest,
    RejectProjectRequest,
    DelistProjectRequest,
    StartReviewRequest,
    ToggleFeaturedRequest,
    EditProjectRequest,
    ProjectActionResponse,
    ApprovalOutcome,
    EditProjectResponse,
)

__all__ = [
    "ListProjectsUseCase",
    "GetProjectUseCase",
    "ApproveProjectUseCase",
    "RejectProjectUseCase",
    "DelistProjectUseCase",
    "StartReviewUseCase",
    "ToggleFeaturedUseCase",
    "EditProjectUseCase",
    "ProjectDTO",
    "ListProjectsQuery",
    "ListProjectsResponse",
    "ApproveProjectRequest",
    "RejectProjectRequest",
    "DelistProjectRequest",
    "StartReviewRequest",
    "ToggleFeaturedRequest",
    "EditProjectRequest",
    "ProjectActionResponse",
    "ApprovalOutcome",
    "EditProjectResponse",
]
