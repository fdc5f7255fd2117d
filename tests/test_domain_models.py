from datetime import date

import pytest
from pydantic import ValidationError

from src.core.domain_models import QuickStats, TrendPoint, UserQuery
from src.core.mapper import map_queries, map_quick_stats, map_rows, map_trend
from src.core.store import EmptyResultError, MalformedRecordError


def test_quick_stats_absent_and_null_metrics_are_zero() -> None:
    stats = QuickStats.model_validate({"total_mentees": 120, "open_queries": None})

    assert stats.total_mentees == 120
    assert stats.open_queries == 0
    assert stats.total_prs == 0


def test_quick_stats_rejects_negative_counts() -> None:
    with pytest.raises(ValidationError):
        QuickStats.model_validate({"total_mentees": -1})


def test_quick_stats_rejects_non_integer_counts() -> None:
    with pytest.raises(ValidationError):
        QuickStats.model_validate({"open_queries": True})
    with pytest.raises(ValidationError):
        QuickStats.model_validate({"total_prs": 2.5})


def test_user_query_coerces_numeric_id_and_null_fields() -> None:
    query = UserQuery.model_validate(
        {
            "id": 42,
            "email": "a@example.org",
            "subject": None,
            "message": "hello",
            "createdat": "2024-03-01T12:00:00+00:00",
            "iscleared": None,
        }
    )

    assert query.id == "42"
    assert query.subject == ""
    assert query.iscleared is False


def test_cleared_copy_changes_only_the_flag() -> None:
    query = UserQuery(
        id="q1",
        email="a@example.org",
        subject="Help",
        message="hello",
        createdat="2024-03-01T12:00:00+00:00",
    )

    cleared = query.cleared()

    assert cleared.iscleared is True
    assert query.iscleared is False
    assert cleared.model_dump(exclude={"iscleared"}) == query.model_dump(exclude={"iscleared"})


def test_map_rows_drops_malformed_rows() -> None:
    rows = [
        {"day": "2024-01-01", "total": 3},
        {"day": "not a date", "total": 1},
        {"day": "2024-01-02"},
    ]

    points = map_rows(rows, TrendPoint, "mentee_daily")

    assert points == [TrendPoint(day=date(2024, 1, 1), total=3)]


def test_map_rows_drops_rows_that_are_not_objects() -> None:
    rows = [None, 7, ["2024-01-01", 3], {"day": "2024-01-01", "total": 3}]

    points = map_rows(rows, TrendPoint, "mentee_daily")

    assert points == [TrendPoint(day=date(2024, 1, 1), total=3)]


def test_map_trend_sorts_by_day() -> None:
    rows = [{"day": "2024-01-02", "total": 5}, {"day": "2024-01-01", "total": 3}]

    points = map_trend(rows, "mentee_daily")

    assert [(p.day.isoformat(), p.total) for p in points] == [
        ("2024-01-01", 3),
        ("2024-01-02", 5),
    ]


def test_map_quick_stats_requires_a_row() -> None:
    with pytest.raises(EmptyResultError):
        map_quick_stats([], "dashboard_quick_stats")


def test_map_quick_stats_rejects_malformed_record() -> None:
    with pytest.raises(MalformedRecordError):
        map_quick_stats([{"total_mentees": "many"}], "dashboard_quick_stats")


def test_map_queries_caps_the_list() -> None:
    rows = [
        {
            "id": str(i),
            "email": "a@example.org",
            "subject": "s",
            "message": "m",
            "createdat": "2024-03-01T12:00:00+00:00",
            "iscleared": False,
        }
        for i in range(150)
    ]

    assert len(map_queries(rows, "user_queries", limit=100)) == 100
