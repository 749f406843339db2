from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from config import ApplicationConfig
from src.api.error import ClientError
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.workflow_side_effects import WorkflowSideEffects
from src.depends import get_unit_of_work, get_side_effects, require_admin
from src.app.use_cases.users import (
    ListUsersUseCase,
    ListPendingUsersUseCase,
    ListUsersQuery,
    ListUsersResponse,
    GetUserUseCase,
    UserDTO,
    ApproveUserUseCase,
    ApproveUserRequest,
    RejectUserUseCase,
    RejectUserRequest,
    UserActionResponse,
    BulkApproveUsersUseCase,
    BulkApproveRequest,
    BulkApproveResponse,
    CreateUserUseCase,
    CreateUserRequest,
    UpdateUserUseCase,
    UpdateUserRequest,
    UpdateUserResponse,
)

router = APIRouter(prefix="/admin/users")


def _unwrap(result):
    if result.is_err():
        raise ClientError(result.error)
    return result.value


@router.get("", response_model=ListUsersResponse, status_code=status.HTTP_200_OK)
async def list_users(
    search: Optional[str] = None,
    role: Optional[str] = None,
    status_filter: Optional[str] = Query(None, alias="status"),
    created_from: Optional[date] = None,
    created_to: Optional[date] = None,
    sort: Optional[str] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None,
    current_user: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Search, filter and paginate users"""
    use_case = ListUsersUseCase(
        uow,
        default_page_size=ApplicationConfig.USER_PAGE_SIZE,
        max_page_size=ApplicationConfig.MAX_PAGE_SIZE,
    )
    query = ListUsersQuery(
        search=search,
        role=role,
        status=status_filter,
        created_from=created_from,
        created_to=created_to,
        sort=sort,
        page=page,
        limit=limit,
    )
    return _unwrap(await use_case.execute(query))


@router.get("/pending", response_model=ListUsersResponse, status_code=status.HTTP_200_OK)
async def list_pending_users(
    page: Optional[int] = None,
    limit: Optional[int] = None,
    current_user: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Approval queue, oldest first"""
    use_case = ListPendingUsersUseCase(
        uow,
        default_page_size=ApplicationConfig.PENDING_USERS_PAGE_SIZE,
        max_page_size=ApplicationConfig.MAX_PAGE_SIZE,
    )
    return _unwrap(await use_case.execute(page=page, limit=limit))


@router.post("", response_model=UserActionResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    current_user: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    side_effects: WorkflowSideEffects = Depends(get_side_effects),
):
    """Create an approved, verified account"""
    use_case = CreateUserUseCase(uow, side_effects, current_user["user_id"])
    return _unwrap(await use_case.execute(request))


@router.post("/bulk-approve", response_model=BulkApproveResponse, status_code=status.HTTP_200_OK)
async def bulk_approve_users(
    request: BulkApproveRequest,
    current_user: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    side_effects: WorkflowSideEffects = Depends(get_side_effects),
):
    """Approve many pending users; each id succeeds or fails on its own"""
    use_case = BulkApproveUsersUseCase(
        uow, side_effects, current_user["user_id"], max_ids=ApplicationConfig.BULK_APPROVE_MAX_IDS
    )
    return _unwrap(await use_case.execute(request))


@router.get("/{user_id}", response_model=UserDTO, status_code=status.HTTP_200_OK)
async def get_user(
    user_id: str,
    current_user: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    return _unwrap(await GetUserUseCase(uow).execute(user_id))


@router.put("/{user_id}", response_model=UpdateUserResponse)
async def update_user(
    user_id: str,
    request: UpdateUserRequest,
    current_user: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    side_effects: WorkflowSideEffects = Depends(get_side_effects),
):
    """Edit profile fields or deactivate the account with ``is_active = false``"""
    use_case = UpdateUserUseCase(uow, side_effects, current_user["user_id"])
    return _unwrap(await use_case.execute(user_id, request))


@router.put("/{user_id}/approve", response_model=UserActionResponse)
async def approve_user(
    user_id: str,
    request: ApproveUserRequest = ApproveUserRequest(),
    current_user: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    side_effects: WorkflowSideEffects = Depends(get_side_effects),
):
    """Approve a pending user and queue the welcome email"""
    use_case = ApproveUserUseCase(uow, side_effects, current_user["user_id"])
    result = await use_case.execute(
        user_id, admin_notes=request.admin_notes, expected_version=request.expected_version
    )
    return _unwrap(result)


@router.put("/{user_id}/reject", response_model=UserActionResponse)
async def reject_user(
    user_id: str,
    request: RejectUserRequest,
    current_user: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    side_effects: WorkflowSideEffects = Depends(get_side_effects),
):
    """Reject a pending user with a mandatory reason"""
    use_case = RejectUserUseCase(uow, side_effects, current_user["user_id"])
    result = await use_case.execute(
        user_id,
        rejection_reason=request.rejection_reason,
        admin_notes=request.admin_notes,
        expected_version=request.expected_version,
    )
    return _unwrap(result)
