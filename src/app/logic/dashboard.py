"""View-state controller for the admin analytics dashboard.

Holds the in-memory snapshot of what the pages display and mediates every
read and write against the data source. No Streamlit calls in here.
"""

from typing import Protocol

from loguru import logger

from src.core.domain_models import QUERIES_LIMIT, QuickStats, Section, TrendPoint, UserQuery
from src.core.store import EmptyResultError, StoreError


class DashboardSource(Protocol):
    """What the controller needs from the store side."""

    def fetch_quick_stats(self) -> QuickStats: ...

    def fetch_trend(self) -> list[TrendPoint]: ...

    def fetch_queries(self) -> list[UserQuery]: ...

    def mark_query_cleared(self, query_id: str) -> None: ...


class DashboardController:
    """In-memory dashboard state plus the operations that refresh it.

    Every read bumps a per-section generation counter before it is issued. A
    response is applied only if its generation is still the latest one for
    that section, so an overlapping older request can never overwrite the
    result of a newer one.
    """

    def __init__(self, source: DashboardSource, queries_limit: int = QUERIES_LIMIT) -> None:
        self.source = source
        self.queries_limit = queries_limit

        self.stats: QuickStats | None = None
        self.trend: list[TrendPoint] = []
        self.queries: list[UserQuery] = []
        self.loading_queries = False
        self.loaded = False
        self.errors: dict[Section, str] = {}

        self._generations: dict[Section, int] = {section: 0 for section in Section}

    # ------------------------------------------------------------------
    # Request bookkeeping
    # ------------------------------------------------------------------

    def _begin(self, section: Section) -> int:
        self._generations[section] += 1
        return self._generations[section]

    def _is_current(self, section: Section, generation: int) -> bool:
        if generation != self._generations[section]:
            logger.debug(f"Discarding stale {section.value} response (generation {generation})")
            return False
        return True

    def _fail(self, section: Section, message: str) -> None:
        logger.error(f"[{section.value}] {message}")
        self.errors[section] = message

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def load_stats(self) -> None:
        """Replace the stats record; keep the previous one on failure."""
        generation = self._begin(Section.STATS)
        try:
            stats = self.source.fetch_quick_stats()
        except EmptyResultError:
            if self._is_current(Section.STATS, generation):
                self._fail(Section.STATS, "No statistics record is available.")
            return
        except StoreError as e:
            if self._is_current(Section.STATS, generation):
                self._fail(Section.STATS, f"Could not load statistics: {e}")
            return
        if self._is_current(Section.STATS, generation):
            self.stats = stats
            self.errors.pop(Section.STATS, None)

    def load_trend(self) -> None:
        """Replace the registration trend, ascending by day."""
        generation = self._begin(Section.TREND)
        try:
            points = self.source.fetch_trend()
        except StoreError as e:
            if self._is_current(Section.TREND, generation):
                self._fail(Section.TREND, f"Could not load registration trend: {e}")
            return
        if self._is_current(Section.TREND, generation):
            self.trend = sorted(points or [], key=lambda p: p.day)
            self.errors.pop(Section.TREND, None)

    def load_queries(self) -> None:
        """Replace the query list; the stale list survives a failed fetch."""
        generation = self._begin(Section.QUERIES)
        self.loading_queries = True
        try:
            queries = self.source.fetch_queries()
        except StoreError as e:
            if self._is_current(Section.QUERIES, generation):
                self._fail(Section.QUERIES, f"Could not load queries: {e}")
            return
        else:
            if self._is_current(Section.QUERIES, generation):
                self.queries = list(queries)[: self.queries_limit]
                self.errors.pop(Section.QUERIES, None)
        finally:
            if self._is_current(Section.QUERIES, generation):
                self.loading_queries = False

    def load_all(self) -> None:
        """Initial load. Stats, trend and queries, strictly in that order."""
        logger.info("Loading dashboard")
        self.load_stats()
        self.load_trend()
        self.load_queries()
        self.loaded = True

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def mark_cleared(self, query_id: str) -> bool:
        """Set a query's cleared flag, then refresh the stats.

        Returns:
            True if the query is cleared after the call
        """
        current = self.find_query(query_id)
        if current is not None and current.iscleared:
            logger.debug(f"Query {query_id} already cleared")
            return True

        try:
            self.source.mark_query_cleared(query_id)
        except StoreError as e:
            self._fail(Section.QUERIES, f"Could not mark query as cleared: {e}")
            return False

        self.queries = [q.cleared() if q.id == query_id else q for q in self.queries]
        self.errors.pop(Section.QUERIES, None)
        self.load_stats()
        return True

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def find_query(self, query_id: str) -> UserQuery | None:
        for query in self.queries:
            if query.id == query_id:
                return query
        return None

    @property
    def uncleared_count(self) -> int:
        return sum(1 for q in self.queries if not q.iscleared)

    def error_for(self, section: Section) -> str | None:
        return self.errors.get(section)
