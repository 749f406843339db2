from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel


class FundingStatsDTO(BaseModel):
    """Funding totals over approved projects with a positive goal"""

    total_projects: int
    total_funding_goal: float
    total_current_funding: float
    avg_progress: float


class CategoryBreakdownDTO(BaseModel):
    category: str
    count: int
    total_funding: float


class RecentActivityDTO(BaseModel):
    id: str
    title: str
    status: str
    owner_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class AdminStatsResponse(BaseModel):
    """Response DTO for GetAdminStatsUseCase"""

    project_counts: Dict[str, int]
    user_counts: Dict[str, int]
    funding_stats: FundingStatsDTO
    category_breakdown: List[CategoryBreakdownDTO]
    recent_activity: List[RecentActivityDTO]
    generated_at: datetime
    cached: bool = False
