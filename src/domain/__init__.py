from src.domain.base import BaseModel, generate_uuid
from src.domain.enums import (
    ProjectStatus,
    ProjectStage,
    ProjectAction,
    UserRole,
    ApprovalStatus,
    UserAction,
    NotificationKind,
    NotificationJobStatus,
)
from src.domain.exceptions import (
    DomainError,
    ValidationError,
    InvalidTransition,
    ConcurrencyConflict,
    NotFound,
)
from src.domain.project import Project
from src.domain.user import User
from src.domain.notification_job import NotificationJob

__all__ = [
    # Base
    "BaseModel",
    "generate_uuid",
    # Enums
    "ProjectStatus",
    "ProjectStage",
    "ProjectAction",
    "UserRole",
    "ApprovalStatus",
    "UserAction",
    "NotificationKind",
    "NotificationJobStatus",
    # Exceptions
    "DomainError",
    "ValidationError",
    "InvalidTransition",
    "ConcurrencyConflict",
    "NotFound",
    # Entities
    "Project",
    "User",
    "NotificationJob",
]
