"""
Workout statistics schemas.

Serialised with camelCase aliases (``totalWorkouts``, ``dayOrdinal`` and so on)
because the dashboard charts bind to those keys directly.

Weekday ordinals follow Sunday=1 to Saturday=7 (UTC); the dashboard maps
ordinal to label by position, see :data:`WEEKDAY_LABELS`.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]


class StatsModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OverviewStats(StatsModel):
    """Totals and averages across every workout in the report window.

    Sums count a missing value as 0.  Averages only include workouts that
    recorded the field and are ``None`` when none did.
    """

    total_workouts: int = 0
    total_duration: float = 0.0
    total_distance: float = 0.0
    total_calories: float = 0.0
    avg_heart_rate: Optional[float] = None
    avg_pace: Optional[float] = None
    avg_perceived_effort: Optional[float] = None


class WeeklyBucket(StatsModel):
    """Activity on one weekday of the trailing 7 days."""

    day_ordinal: int = Field(..., ge=1, le=7, description="Sunday=1 to Saturday=7")
    count: int = 0
    total_duration: float = 0.0
    total_distance: float = 0.0
    total_calories: float = 0.0


class TypeBreakdown(StatsModel):
    category: str
    count: int
    total_duration: float


class TrendPoint(StatsModel):
    """One of the most recent workouts, indexed by position for chart x-axes."""

    sequence_index: int = Field(..., ge=1)
    duration: float
    distance: float
    pace: Optional[float] = None
    date: datetime.datetime


class StatsOverviewResponse(StatsModel):
    overview: OverviewStats
    weekly_activity: list[WeeklyBucket] = Field(default_factory=list)
    by_type: list[TypeBreakdown] = Field(default_factory=list, description="Descending by count")
    recent_progress: list[TrendPoint] = Field(default_factory=list, description="Ascending chronological")


class MonthlyBucket(StatsModel):
    month: int = Field(..., ge=1, le=12)
    workouts: int = 0
    total_duration: float = 0.0
    total_distance: float = 0.0
    total_calories: float = 0.0
    avg_pace: Optional[float] = None


class MonthlyStatsResponse(StatsModel):
    year: int
    monthly_stats: list[MonthlyBucket]
