import logging
from libs.result import Result, Return
from src.app.services.statistics_aggregator import StatisticsAggregator
from src.app.services.stats_cache import StatsCache
from src.app.services.unit_of_work import UnitOfWork
from .dtos import AdminStatsResponse

logger = logging.getLogger(__name__)

RECENT_ACTIVITY_LIMIT = 10


class GetAdminStatsUseCase:
    """
    Use case: Admin dashboard statistics

    Serves the cached snapshot while it is fresh and recomputes it from
    the entity store otherwise, or when ``refresh`` is requested.
    """

    def __init__(self, uow: UnitOfWork, cache: StatsCache, aggregator: StatisticsAggregator = None):
        self.uow = uow
        self.cache = cache
        self.aggregator = aggregator or StatisticsAggregator()

    async def execute(self, refresh: bool = False) -> Result[AdminStatsResponse]:
        if not refresh:
            cached = await self.cache.get()
            if cached is not None:
                return Return.ok(AdminStatsResponse(**cached, cached=True))

        generation = await self.cache.generation()
        async with self.uow:
            project_rows = await self.uow.projects.get_aggregate_rows()
            user_groups = await self.uow.users.count_by_role_and_status()
            recent = await self.uow.projects.get_recent(RECENT_ACTIVITY_LIMIT)
            snapshot = self.aggregator.build_snapshot(project_rows, user_groups, recent)

        stored = await self.cache.set(snapshot, generation)
        if not stored:
            logger.info("[AdminStats] Snapshot invalidated during recompute, not cached")
        logger.info(
            f"[AdminStats] Recomputed snapshot over {snapshot['project_counts']['total']} projects"
        )
        return Return.ok(AdminStatsResponse(**snapshot))
