from fastapi import APIRouter, Depends, status
from src.api.error import ClientError
from src.app.services.stats_cache import StatsCache
from src.app.services.unit_of_work import UnitOfWork
from src.depends import get_unit_of_work, get_stats_cache, require_admin
from src.app.use_cases.stats import GetAdminStatsUseCase, AdminStatsResponse

router = APIRouter()


@router.get("/admin/stats", response_model=AdminStatsResponse, status_code=status.HTTP_200_OK)
async def get_admin_stats(
    refresh: bool = False,
    current_user: dict = Depends(require_admin),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: StatsCache = Depends(get_stats_cache),
):
    """Dashboard statistics; ``refresh=true`` bypasses the cache"""
    result = await GetAdminStatsUseCase(uow, cache).execute(refresh=refresh)

    if result.is_err():
        raise ClientError(result.error)

    return result.value
