from typing import Optional
from pydantic import BaseModel
from src.domain.query import Page


class PaginationDTO(BaseModel):
    """Pagination block returned with every listing"""

    total: int
    total_pages: int
    page: int
    per_page: int
    has_next: bool
    has_prev: bool

    @classmethod
    def from_page(cls, page: Page) -> "PaginationDTO":
        return cls(
            total=page.total,
            total_pages=page.total_pages,
            page=page.page,
            per_page=page.page_size,
            has_next=page.has_next,
            has_prev=page.has_prev,
        )


class ErrorDTO(BaseModel):
    code: str
    message: str
    reason: Optional[str] = None
