from src.app.use_cases.users.list_users_use_case import ListUsersUseCase, ListPendingUsersUseCase
from src.app.use_cases.users.get_user_use_case import GetUserUseCase
from src.app.use_cases.users.approve_user_use_case import ApproveUserUseCase
from src.app.use_cases.users.reject_user_use_case import RejectUserUseCase
from src.app.use_cases.users.bulk_approve_users_use_case import BulkApproveUsersUseCase
from src.app.use_cases.users.create_user_use_case import CreateUserUseCase
from src.app.use_cases.users.update_user_use_case import UpdateUserUseCase
from src.app.use_cases.users.dtos import (
    UserDTO,
    ListUsersQuery,
    ListUsersResponse,
    ApproveUserRequest,
    RejectUserRequest,
    UserActionResponse,
    BulkApproveRequest,
    BulkFailureDTO,
    BulkApproveResponse,
    CreateUserRequest,
    UpdateUserRequest,
    UpdateUserResponse,
)

__all__ = [
    "ListUsersUseCase",
    "ListPendingUsersUseCase",
    "GetUserUseCase",
    "ApproveUserUseCase",
    "RejectUserUseCase",
    "BulkApproveUsersUseCase",
    "CreateUserUseCase",
    "UpdateUserUseCase",
    "UserDTO",
    "ListUsersQuery",
    "ListUsersResponse",
    "ApproveUserRequest",
    "RejectUserRequest",
    "UserActionResponse",
    "BulkApproveRequest",
    "BulkFailureDTO",
    "BulkApproveResponse",
    "CreateUserRequest",
    "UpdateUserRequest",
    "UpdateUserResponse",
]
