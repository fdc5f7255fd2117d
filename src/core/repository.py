from loguru import logger

from src.core.domain_models import (
    MENTEE_DAILY_TABLE,
    QUERIES_LIMIT,
    QUICK_STATS_TABLE,
    USER_QUERIES_TABLE,
    QuickStats,
    TrendPoint,
    UserQuery,
)
from src.core.mapper import map_queries, map_quick_stats, map_trend
from src.core.store import SupabaseStore


class DashboardRepository:
    """The four queries behind the admin dashboard."""

    def __init__(self, store: SupabaseStore, queries_limit: int = QUERIES_LIMIT) -> None:
        self.store = store
        self.queries_limit = min(queries_limit, QUERIES_LIMIT)

    def fetch_quick_stats(self) -> QuickStats:
        rows = self.store.table(QUICK_STATS_TABLE).select("*").single().execute()
        return map_quick_stats(rows, QUICK_STATS_TABLE)

    def fetch_trend(self) -> list[TrendPoint]:
        rows = self.store.table(MENTEE_DAILY_TABLE).select("*").order("day").execute()
        points = map_trend(rows, MENTEE_DAILY_TABLE)
        logger.info(f"Loaded {len(points)} trend points")
        return points

    def fetch_queries(self) -> list[UserQuery]:
        rows = (
            self.store.table(USER_QUERIES_TABLE)
            .select("*")
            .order("createdat", descending=True)
            .limit(self.queries_limit)
            .execute()
        )
        queries = map_queries(rows, USER_QUERIES_TABLE, self.queries_limit)
        logger.info(f"Loaded {len(queries)} user queries")
        return queries

    def mark_query_cleared(self, query_id: str) -> None:
        self.store.table(USER_QUERIES_TABLE).update({"iscleared": True}).eq(
            "id", query_id
        ).execute()
        logger.info(f"Marked query {query_id} as cleared")
