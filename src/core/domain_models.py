from datetime import date, datetime
from enum import Enum
from typing import Any

import polars as pl
from pydantic import BaseModel, ConfigDict, Field, field_validator

# --- Constants & Schemas ---

QUICK_STATS_TABLE = "dashboard_quick_stats"
MENTEE_DAILY_TABLE = "mentee_daily"
USER_QUERIES_TABLE = "user_queries"

# Upper bound of query records fetched per request.
QUERIES_LIMIT = 100

# Polars schema used to hand the registration trend to plotly.
TREND_SCHEMA = {
    "day": pl.Date,
    "total": pl.Int64,
}


# --- Enums ---


class Section(str, Enum):
    """Independently loaded parts of the dashboard."""

    STATS = "stats"
    TREND = "trend"
    QUERIES = "queries"


# --- Domain Models ---


class QuickStats(BaseModel):
    """
    Precomputed aggregate metrics for the top cards.

    Produced entirely by the `dashboard_quick_stats` view. Absent or null
    metrics are read as 0; negative or non-integer values are rejected.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    total_mentees: int = Field(default=0, ge=0, strict=True)
    mentees_registered: int = Field(default=0, ge=0, strict=True)
    total_mentors: int = Field(default=0, ge=0, strict=True)
    mentors_selected: int = Field(default=0, ge=0, strict=True)
    total_projects: int = Field(default=0, ge=0, strict=True)
    total_prs: int = Field(default=0, ge=0, strict=True)
    referrals_approved: int = Field(default=0, ge=0, strict=True)
    open_queries: int = Field(default=0, ge=0, strict=True)

    @field_validator("*", mode="before")
    @classmethod
    def null_as_zero(cls, v: Any) -> Any:
        return 0 if v is None else v


class TrendPoint(BaseModel):
    """Registrations on a single day."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    day: date
    total: int = Field(ge=0)


class UserQuery(BaseModel):
    """
    A support message submitted by an end user.

    Only `iscleared` changes after creation, and only from False to True.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    email: str
    subject: str = ""
    message: str
    createdat: datetime
    iscleared: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Numeric and UUID keys are kept as strings."""
        if isinstance(v, bool) or v is None:
            return v
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("subject", mode="before")
    @classmethod
    def null_subject(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("iscleared", mode="before")
    @classmethod
    def null_flag(cls, v: Any) -> Any:
        return False if v is None else v

    def cleared(self) -> "UserQuery":
        """Return a copy with the cleared flag set."""
        return self.model_copy(update={"iscleared": True})
