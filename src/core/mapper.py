"""
Store Mapping Layer: Validates raw store rows into domain models.

Rows are plain JSON objects from PostgREST. Every row passes through a
Pydantic model here, so nothing downstream sees missing or mistyped fields.
"""

from typing import Any, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

from src.core.domain_models import QuickStats, TrendPoint, UserQuery
from src.core.store import EmptyResultError, MalformedRecordError

ModelT = TypeVar("ModelT", bound=BaseModel)


def map_rows(rows: list[Any], model: type[ModelT], source: str) -> list[ModelT]:
    """
    Validate a list of rows, dropping the malformed ones.

    Args:
        rows: Raw rows as returned by the store
        model: Domain model to validate against
        source: Table name, used in log messages

    Returns:
        Valid records in their original order
    """
    records: list[ModelT] = []
    rejected = 0
    for row in rows:
        if not isinstance(row, dict):
            rejected += 1
            logger.warning(f"[{source}] Rejected non-object row: {row!r}")
            continue
        try:
            records.append(model.model_validate(row))
        except ValidationError as e:
            rejected += 1
            logger.warning(f"[{source}] Rejected malformed row {row.get('id', '')}: {e}")
    if rejected:
        logger.warning(f"[{source}] {rejected} of {len(rows)} rows rejected")
    return records


def map_quick_stats(rows: list[dict[str, Any]], source: str) -> QuickStats:
    """
    Validate the single stats record.

    Raises:
        EmptyResultError: If no row is present
        MalformedRecordError: If the row fails validation
    """
    if not rows:
        raise EmptyResultError(f"No row returned from {source}")
    try:
        return QuickStats.model_validate(rows[0])
    except ValidationError as e:
        raise MalformedRecordError(f"Malformed stats record from {source}: {e}") from e


def map_trend(rows: list[dict[str, Any]], source: str) -> list[TrendPoint]:
    """Validate trend rows and order them by ascending day."""
    points = map_rows(rows, TrendPoint, source)
    return sorted(points, key=lambda p: p.day)


def map_queries(rows: list[dict[str, Any]], source: str, limit: int) -> list[UserQuery]:
    """Validate query rows in store order, never more than `limit`."""
    return map_rows(rows, UserQuery, source)[:limit]
