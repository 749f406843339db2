from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from config import ApplicationConfig
from src.api.error import ClientError
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.workflow_side_effects import WorkflowSideEffects
from src.depends import get_unit_of_work, get_side_effects, require_admin
from src.app.use_cases.projects import (
    ListProjectsUseCase,
    ListProjectsQuery,
    ListProjectsResponse,
    GetProjectUseCase,
    ProjectDTO,
    ApproveProjectUseCase,
    ApproveProjectRequest,
    RejectProjectUseCase,
    RejectProjectRequest,
    DelistProjectUseCase,
    DelistProjectRequest,
    StartReviewUseCase,
    StartReviewRequest,
    ToggleFeaturedUseCase,
    ToggleFeaturedRequest,
    EditProjectUseCase,
    EditProjectRequest,
    EditProjectResponse,
    ProjectActionResponse,
)

router = APIRouter(prefix="/admin/projects")


def _unwrap(result):
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("", response_model=ListProjectsResponse, status_code=status.HTTP_200_OK)
async def list_projects(
    search: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    category: Optional[str] = None,
    owner_id: Optional[str] = None,
    created_from: Optional[date] = None,
    created_to: Optional[date] = None,
    sort: Optional[str] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    current_user: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Search, filter and paginate projects"""
    use_case = ListProjectsUseCase(
        uow,
        default_page_size=ApplicationConfig.PROJECT_PAGE_SIZE,
        max_page_size=ApplicationConfig.MAX_PAGE_SIZE,
    )
    query = ListProjectsQuery(
        search=search,
        status=status_filter,
        category=category,
        owner_id=owner_id,
        created_from=created_from,
        created_to=created_to,
        sort=sort,
        page=page,
        limit=limit,
    )
    return _unwrap(await use_case.execute(query))


@router.get("/{project_id}", response_model=ProjectDTO, status_code=status.HTTP_200_OK)
async def get_project(
    project_id: str,
    current_user: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Get a single project with owner details"""
    return _unwrap(await GetProjectUseCase(uow).execute(project_id))


@router.put("/{project_id}/approve", response_model=ProjectActionResponse)
async def approve_project(
    project_id: str,
    request: ApproveProjectRequest = ApproveProjectRequest(),
    current_user: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    side_effects: WorkflowSideEffects = Depends(get_side_effects),
):
    """Approve a project; repeating the call is harmless"""
    use_case = ApproveProjectUseCase(uow, side_effects, current_user["user_id"])
    result = await use_case.execute(
        project_id, admin_notes=request.admin_notes, expected_version=request.expected_version
    )
    return _unwrap(result)


@router.put("/{project_id}/reject", response_model=ProjectActionResponse)
async def reject_project(
    project_id: str,
    request: RejectProjectRequest,
    current_user: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    side_effects: WorkflowSideEffects = Depends(get_side_effects),
):
    """Reject a project with a mandatory reason"""
    use_case = RejectProjectUseCase(uow, side_effects, current_user["user_id"])
    result = await use_case.execute(
        project_id,
        rejection_reason=request.rejection_reason,
        admin_notes=request.admin_notes,
        expected_version=request.expected_version,
    )
    return _unwrap(result)


@router.put("/{project_id}/delist", response_model=ProjectActionResponse)
async def delist_project(
    project_id: str,
    request: DelistProjectRequest = DelistProjectRequest(),
    current_user: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    side_effects: WorkflowSideEffects = Depends(get_side_effects),
):
    """Take an approved project off the listing"""
    use_case = DelistProjectUseCase(uow, side_effects, current_user["user_id"])
    result = await use_case.execute(
        project_id, admin_notes=request.admin_notes, expected_version=request.expected_version
    )
    return _unwrap(result)


@router.put("/{project_id}/review", response_model=ProjectActionResponse)
async def start_review(
    project_id: str,
    request: StartReviewRequest = StartReviewRequest(),
    current_user: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    side_effects: WorkflowSideEffects = Depends(get_side_effects),
):
    use_case = StartReviewUseCase(uow, side_effects, current_user["user_id"])
    return _unwrap(await use_case.execute(project_id, expected_version=request.expected_version))


@router.put("/{project_id}/featured", response_model=ProjectActionResponse)
async def toggle_featured(
    project_id: str,
    request: ToggleFeaturedRequest = ToggleFeaturedRequest(),
    current_user: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    side_effects: WorkflowSideEffects = Depends(get_side_effects),
):
    """Feature or unfeature an approved project"""
    use_case = ToggleFeaturedUseCase(uow, side_effects, current_user["user_id"])
    result = await use_case.execute(
        project_id, is_featured=request.is_featured, expected_version=request.expected_version
    )
    return _unwrap(result)


@router.put("/{project_id}/edit", response_model=EditProjectResponse)
async def edit_project(
    project_id: str,
    request: EditProjectRequest,
    current_user: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    side_effects: WorkflowSideEffects = Depends(get_side_effects),
):
    """
    Edit listing fields, optionally approving afterwards.

    A failed approval after a successful edit still returns 200 with
    ``approval.succeeded = false``.
    """
    use_case = EditProjectUseCase(uow, side_effects, current_user["user_id"])
    return _unwrap(await use_case.execute(project_id, request))
