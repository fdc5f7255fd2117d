"""Shared fixtures: an in-memory data source standing in for the store."""

from datetime import date, datetime, timezone

import pytest

from src.core.domain_models import QuickStats, TrendPoint, UserQuery
from src.core.store import EmptyResultError, StoreError


class FakeSource:
    """In-memory replacement for DashboardRepository.

    Clearing a query also lowers `open_queries`, the way the store's view
    would on its next read.
    """

    def __init__(
        self,
        stats: QuickStats | None = None,
        trend: list[TrendPoint] | None = None,
        queries: list[UserQuery] | None = None,
    ) -> None:
        self.stats = stats
        self.trend = trend or []
        self.queries = queries or []
        self.fail: set[str] = set()
        self.calls: list[str] = []
        self.cleared_ids: list[str] = []

    def _check(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail:
            raise StoreError(f"{name} unavailable")

    def fetch_quick_stats(self) -> QuickStats:
        self._check("stats")
        if self.stats is None:
            raise EmptyResultError("No row returned from dashboard_quick_stats")
        return self.stats

    def fetch_trend(self) -> list[TrendPoint]:
        self._check("trend")
        return list(self.trend)

    def fetch_queries(self) -> list[UserQuery]:
        self._check("queries")
        return list(self.queries)

    def mark_query_cleared(self, query_id: str) -> None:
        self._check("clear")
        self.cleared_ids.append(query_id)
        self.queries = [q.cleared() if q.id == query_id else q for q in self.queries]
        if self.stats is not None and self.stats.open_queries > 0:
            self.stats = self.stats.model_copy(
                update={"open_queries": self.stats.open_queries - 1}
            )


def make_query(index: int, cleared: bool = False) -> UserQuery:
    return UserQuery(
        id=f"q{index}",
        email=f"user{index}@example.org",
        subject=f"Subject {index}",
        message=f"Message body {index}\nsecond line",
        createdat=datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc),
        iscleared=cleared,
    )


@pytest.fixture
def sample_queries() -> list[UserQuery]:
    return [make_query(1), make_query(2), make_query(3, cleared=True)]


@pytest.fixture
def sample_trend() -> list[TrendPoint]:
    return [
        TrendPoint(day=date(2024, 1, 2), total=5),
        TrendPoint(day=date(2024, 1, 1), total=3),
    ]


@pytest.fixture
def fake_source(sample_queries: list[UserQuery], sample_trend: list[TrendPoint]) -> FakeSource:
    return FakeSource(
        stats=QuickStats(total_mentees=120, open_queries=3),
        trend=sample_trend,
        queries=sample_queries,
    )
