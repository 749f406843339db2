"""Query value objects shared by the listing use cases and repositories.

Filters are normalised on construction so repositories only ever see
valid, non-blank criteria. All criteria of a filter combine with AND.
"""
import math
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import Generic, List, Optional, Type, TypeVar, Union
from src.domain.enums import ApprovalStatus, ProjectStatus, UserRole
from src.domain.exceptions import ValidationError

T = TypeVar("T")
E = TypeVar("E", bound=Enum)

ALL = "all"


class ProjectSort(str, Enum):
    created_at = "created_at"
    title = "title"
    status = "status"
    funding_goal = "funding_goal"
    owner = "owner"


class UserSort(str, Enum):
    created_at = "created_at"
    name = "name"
    email = "email"
    status = "status"


def _blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip() or str(value).strip().lower() == ALL


def _enum_or_none(enum_cls: Type[E], value, label: str) -> Optional[E]:
    if _blank(value):
        return None
    raw = value.value if hasattr(value, "value") else str(value).strip()
    try:
        return enum_cls(raw)
    except ValueError:
        raise ValidationError(f"Invalid {label} '{raw}'")


def parse_sort(enum_cls: Type[E], value: Optional[str]) -> E:
    """Resolve a sort key, defaulting to newest first"""
    if value is None or not str(value).strip():
        return enum_cls("created_at")
    try:
        return enum_cls(str(value).strip())
    except ValueError:
        allowed = ", ".join(item.value for item in enum_cls)
        raise ValidationError(f"Invalid sort '{value}'. Allowed: {allowed}")


def _range_start(value: Union[None, date, datetime]) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def _range_end(value: Union[None, date, datetime]) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.combine(value, time.max)


def _check_range(created_from: Optional[datetime], created_to: Optional[datetime]) -> None:
    if created_from and created_to and created_from > created_to:
        raise ValidationError("created_from must not be after created_to")


@dataclass(frozen=True)
class ProjectFilter:
    search: Optional[str] = None
    status: Optional[ProjectStatus] = None
    category: Optional[str] = None
    owner_id: Optional[str] = None
    created_from: Optional[datetime] = None
    created_to: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        search: Optional[str] = None,
        status: Optional[str] = None,
        category: Optional[str] = None,
        owner_id: Optional[str] = None,
        created_from: Union[None, date, datetime] = None,
        created_to: Union[None, date, datetime] = None,
    ) -> "ProjectFilter":
        start, end = _range_start(created_from), _range_end(created_to)
        _check_range(start, end)
        return cls(
            search=None if _blank(search) else search.strip(),
            status=_enum_or_none(ProjectStatus, status, "project status"),
            category=None if _blank(category) else category.strip(),
            owner_id=None if _blank(owner_id) else owner_id.strip(),
            created_from=start,
            created_to=end,
        )


@dataclass(frozen=True)
class UserFilter:
    search: Optional[str] = None
    role: Optional[UserRole] = None
    status: Optional[ApprovalStatus] = None
    created_from: Optional[datetime] = None
    created_to: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        search: Optional[str] = None,
        role: Optional[str] = None,
        status: Optional[str] = None,
        created_from: Union[None, date, datetime] = None,
        created_to: Union[None, date, datetime] = None,
    ) -> "UserFilter":
        start, end = _range_start(created_from), _range_end(created_to)
        _check_range(start, end)
        return cls(
            search=None if _blank(search) else search.strip(),
            role=_enum_or_none(UserRole, role, "role"),
            status=_enum_or_none(ApprovalStatus, status, "approval status"),
            created_from=start,
            created_to=end,
        )


@dataclass(frozen=True)
class PageRequest:
    """1-indexed page window"""

    page: int = 1
    page_size: int = 10

    @classmethod
    def create(cls, page: Optional[int], page_size: Optional[int], default_size: int, max_size: int) -> "PageRequest":
        page = 1 if page is None else page
        page_size = default_size if page_size is None else page_size
        if page < 1:
            raise ValidationError("page must be at least 1", code="INVALID_PAGINATION")
        if page_size < 1 or page_size > max_size:
            raise ValidationError(
                f"page size must be between 1 and {max_size}", code="INVALID_PAGINATION"
            )
        return cls(page=page, page_size=page_size)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass
class Page(Generic[T]):
    items: List[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 10

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.page_size else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1
