"""Logic layer for the dashboard pages.

Turns controller state into display-ready values.
"""

from dataclasses import dataclass
from datetime import datetime

import polars as pl

from src.core.domain_models import TREND_SCHEMA, QuickStats, TrendPoint


@dataclass(frozen=True)
class StatCard:
    label: str
    field: str


@dataclass(frozen=True)
class StatCardValue:
    label: str
    value: int


ADMIN_STAT_CARDS: list[StatCard] = [
    StatCard("Total Mentees", "total_mentees"),
    StatCard("Registered Mentees", "mentees_registered"),
    StatCard("Total Mentors", "total_mentors"),
    StatCard("Selected Mentors", "mentors_selected"),
    StatCard("Projects", "total_projects"),
    StatCard("Total PRs", "total_prs"),
    StatCard("Approved Referrals", "referrals_approved"),
    StatCard("Open Queries", "open_queries"),
]

SUMMARY_STAT_CARDS: list[StatCard] = [
    StatCard("Mentees", "total_mentees"),
    StatCard("Registered", "mentees_registered"),
    StatCard("Mentors", "total_mentors"),
    StatCard("Projects", "total_projects"),
]


def get_stat_card_values(stats: QuickStats | None, cards: list[StatCard]) -> list[StatCardValue]:
    """Resolve each card's value, 0 when the metric is absent."""
    values = []
    for card in cards:
        raw = getattr(stats, card.field, None) if stats is not None else None
        values.append(StatCardValue(card.label, int(raw) if raw is not None else 0))
    return values


def get_trend_frame(points: list[TrendPoint]) -> pl.DataFrame:
    """Trend points as a frame sorted by day. Missing days stay missing."""
    if not points:
        return pl.DataFrame(schema=TREND_SCHEMA)
    return pl.DataFrame(
        {
            "day": [p.day for p in points],
            "total": [p.total for p in points],
        },
        schema=TREND_SCHEMA,
    ).sort("day")


def format_timestamp(value: datetime) -> str:
    """Render a timestamp in the server's local time zone."""
    if value.tzinfo is not None:
        value = value.astimezone()
    return value.strftime("%Y-%m-%d %H:%M:%S")


def get_queries_caption(uncleared: int, shown: int, stats: QuickStats | None) -> str:
    """Describe the list against the store's own open-queries counter.

    The two numbers come from different sources and may disagree until the
    next stats refresh, or when open queries fall outside the fetched rows.
    """
    caption = f"{uncleared} uncleared of {shown} most recent queries"
    if stats is not None:
        caption += f" · {stats.open_queries} open in total"
    return caption


MARKDOWN_SPECIAL_CHARS = "\\`*_{}[]()#+-.!|<>~$"


def escape_markdown(text: str) -> str:
    """Escape user-supplied text so Streamlit renders it literally."""
    return "".join(f"\\{ch}" if ch in MARKDOWN_SPECIAL_CHARS else ch for ch in text)
