from src.app.use_cases.stats.get_admin_stats_use_case import GetAdminStatsUseCase
from src.app.use_cases.stats.dtos import (
    AdminStatsResponse,
    FundingStatsDTO,
    CategoryBreakdownDTO,
    RecentActivityDTO,
)

__all__ = [
    "GetAdminStatsUseCase",
    "AdminStatsResponse",
    "FundingStatsDTO",
    "CategoryBreakdownDTO",
    "RecentActivityDTO",
]
