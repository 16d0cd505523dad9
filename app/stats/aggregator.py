"""
Workout statistics aggregation.

Computes the dashboard overview for one owner:

- overall totals and averages over the report window,
- a 7-bucket weekday histogram over the trailing 7 days,
- a per-category breakdown ordered by frequency,
- the most recent workouts re-indexed for trend charts.

Rules
-----

1. **Sums vs. averages**: sums count a missing value as 0; averages skip
   it.  An average over a field no workout recorded is ``None``.
2. **Weekly histogram**: always exactly 7 buckets (Sunday=1 to Saturday=7,
   UTC), zero-filled, independent of the report window.  The composite
   overview leaves every list empty when the window holds no workouts.
3. **Type tie-break**: equal counts keep the order in which each category
   first appears when scanning the window oldest-first (then by id).
4. **Trend indices**: the newest ``limit`` workouts, flipped to
   chronological order and numbered 1..N regardless of calendar gaps.
5. **Failure**: any store error aborts the whole overview with
   :class:`StoreUnavailable`; nothing partial is returned, nothing retried.
"""

from __future__ import annotations

import datetime
from contextlib import contextmanager
from typing import Any, Callable, Iterable, Iterator, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from app.core.exceptions import InvalidIdentity, StoreUnavailable
from app.core.logging import get_logger
from app.db.repositories.workout import WorkoutRepository
from app.schemas.stats import (MonthlyBucket, MonthlyStatsResponse, OverviewStats, StatsOverviewResponse,
                               TrendPoint, TypeBreakdown, WeeklyBucket, )

logger = get_logger(__name__)

# ======================================================================
# Report windows
# ======================================================================

PERIOD_DAYS: dict[str, int] = {"7d": 7, "30d": 30, "90d": 90}
DEFAULT_PERIOD = "30d"
WEEKLY_WINDOW_DAYS = 7
DEFAULT_TREND_LIMIT = 10


def resolve_period(period: Optional[str]) -> tuple[str, int]:
    """Map a period code to ``(code, days)``; unknown codes fall back to 30d."""
    if period in PERIOD_DAYS:
        return period, PERIOD_DAYS[period]
    return DEFAULT_PERIOD, PERIOD_DAYS[DEFAULT_PERIOD]


def normalize_owner(owner: Any) -> int:
    """Reduce an owner identity to the integer user id used in every query.

    ``42`` and ``"42"`` are the same owner.  Anything else raises
    :class:`InvalidIdentity`.
    """
    if owner is None or isinstance(owner, bool):
        raise InvalidIdentity("Owner identity is required")
    if isinstance(owner, int):
        value = owner
    elif isinstance(owner, str):
        text = owner.strip()
        if not text.isdigit():
            raise InvalidIdentity(f"Malformed owner identity: {owner!r}")
        value = int(text)
    else:
        raise InvalidIdentity(f"Unsupported owner identity type: {type(owner).__name__}")
    if value <= 0:
        raise InvalidIdentity(f"Malformed owner identity: {owner!r}")
    return value


def weekday_ordinal(moment: datetime.datetime) -> int:
    """Sunday=1, Monday=2 up to Saturday=7."""
    return moment.isoweekday() % 7 + 1


# ======================================================================
# Pure shaping helpers
# ======================================================================


def _bucket_by_weekday(rows: Iterable[Sequence[Any]]) -> list[WeeklyBucket]:
    """Fold ``(occurred_at, duration, distance, calories)`` rows into 7 buckets."""
    buckets = {ordinal: WeeklyBucket(day_ordinal=ordinal) for ordinal in range(1, 8)}
    for occurred_at, duration, distance, calories in rows:
        bucket = buckets[weekday_ordinal(occurred_at)]
        bucket.count += 1
        bucket.total_duration += duration or 0.0
        bucket.total_distance += distance or 0.0
        bucket.total_calories += calories or 0.0
    return [buckets[ordinal] for ordinal in range(1, 8)]


def _rank_categories(rows: Iterable[Sequence[Any]]) -> list[TypeBreakdown]:
    """Group ``(category, duration)`` rows; most frequent first, ties by first appearance."""
    groups: dict[str, TypeBreakdown] = {}
    for category, duration in rows:
        entry = groups.get(category)
        if entry is None:
            entry = groups[category] = TypeBreakdown(category=category, count=0, total_duration=0.0)
        entry.count += 1
        entry.total_duration += duration or 0.0
    # sorted() is stable, so equal counts keep insertion (first-seen) order
    return sorted(groups.values(), key=lambda entry: -entry.count)


def _reindex_trend(newest_first: Sequence[Any]) -> list[TrendPoint]:
    """Flip newest-first workouts to chronological order and number them 1..N."""
    return [TrendPoint(sequence_index=index, duration=workout.duration_minutes or 0.0,
                       distance=workout.distance_km or 0.0, pace=workout.pace_min_per_km,
                       date=workout.occurred_at, ) for index, workout in enumerate(reversed(newest_first), start=1)]


def _bucket_by_month(rows: Iterable[Sequence[Any]]) -> list[MonthlyBucket]:
    """Fold ``(occurred_at, duration, distance, calories, pace)`` rows into 12 months."""
    buckets = {month: MonthlyBucket(month=month) for month in range(1, 13)}
    paces: dict[int, list[float]] = {month: [] for month in range(1, 13)}
    for occurred_at, duration, distance, calories, pace in rows:
        bucket = buckets[occurred_at.month]
        bucket.workouts += 1
        bucket.total_duration += duration or 0.0
        bucket.total_distance += distance or 0.0
        bucket.total_calories += calories or 0.0
        if pace is not None:
            paces[occurred_at.month].append(pace)
    for month, values in paces.items():
        if values:
            buckets[month].avg_pace = sum(values) / len(values)
    return [buckets[month] for month in range(1, 13)]


# ======================================================================
# Aggregator
# ======================================================================


class StatsAggregator:
    """Read-only statistics over one owner's workouts.

    Args:
        session: Database session.
        clock: Returns the current naive-UTC time (injectable for tests).
        trend_limit: Default number of workouts in the recent trend.
    """

    def __init__(self, session: Session, clock: Optional[Callable[[], datetime.datetime]] = None,
                 trend_limit: int = DEFAULT_TREND_LIMIT, ):
        self.repository = WorkoutRepository(session)
        self.clock = clock or datetime.datetime.utcnow
        self.trend_limit = trend_limit

    @contextmanager
    def _store(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            logger.error("Statistics query failed", operation=operation, error_type=type(exc).__name__)
            raise StoreUnavailable(f"Statistics query failed: {operation}") from exc

    def _since(self, window_days: int, now: Optional[datetime.datetime] = None) -> datetime.datetime:
        if window_days <= 0:
            raise ValueError(f"window_days must be positive, got {window_days}")
        return (now or self.clock()) - datetime.timedelta(days=window_days)

    def compute_overview(self, owner: Any, window_days: int,
                         now: Optional[datetime.datetime] = None) -> OverviewStats:
        user_id = normalize_owner(owner)
        since = self._since(window_days, now)
        with self._store("overview"):
            row = self.repository.aggregate_since(user_id, since)
        return OverviewStats(total_workouts=row["count"], total_duration=row["duration"],
                             total_distance=row["distance"], total_calories=row["calories"],
                             avg_heart_rate=row["avg_heart_rate"], avg_pace=row["avg_pace"],
                             avg_perceived_effort=row["avg_perceived_effort"], )

    def compute_weekly_histogram(self, owner: Any, now: Optional[datetime.datetime] = None) -> list[WeeklyBucket]:
        user_id = normalize_owner(owner)
        since = self._since(WEEKLY_WINDOW_DAYS, now)
        with self._store("weekly_histogram"):
            rows = self.repository.activity_rows_since(user_id, since)
        return _bucket_by_weekday(rows)

    def compute_type_breakdown(self, owner: Any, window_days: int,
                               now: Optional[datetime.datetime] = None) -> list[TypeBreakdown]:
        user_id = normalize_owner(owner)
        since = self._since(window_days, now)
        with self._store("type_breakdown"):
            rows = self.repository.category_rows_since(user_id, since)
        return _rank_categories(rows)

    def compute_recent_trend(self, owner: Any, window_days: int, limit: Optional[int] = None,
                             now: Optional[datetime.datetime] = None) -> list[TrendPoint]:
        user_id = normalize_owner(owner)
        since = self._since(window_days, now)
        limit = self.trend_limit if limit is None else limit
        with self._store("recent_trend"):
            newest_first = self.repository.latest_since(user_id, since, limit)
        return _reindex_trend(newest_first)

    def get_stats_overview(self, owner: Any, period: Optional[str] = DEFAULT_PERIOD) -> StatsOverviewResponse:
        """Composite dashboard overview.

        Args:
            owner: Owner identity (user id or its string form).
            period: ``"7d"``, ``"30d"`` or ``"90d"``; anything else means 30d.

        Returns:
            :class:`StatsOverviewResponse`.  With no workouts in the window
            the overview is zero-valued and the three lists are empty.

        Raises:
            InvalidIdentity: malformed owner, before any query.
            StoreUnavailable: any query failed; no partial result.
        """
        user_id = normalize_owner(owner)
        period_code, window_days = resolve_period(period)
        logger.info("Computing stats overview", user_id=user_id, period=period_code)

        # One clock reading so every query shares the same window bounds
        now = self.clock()
        overview = self.compute_overview(user_id, window_days, now)
        if overview.total_workouts == 0:
            return StatsOverviewResponse(overview=overview)

        return StatsOverviewResponse(overview=overview, weekly_activity=self.compute_weekly_histogram(user_id, now),
                                     by_type=self.compute_type_breakdown(user_id, window_days, now),
                                     recent_progress=self.compute_recent_trend(user_id, window_days, now=now), )

    def get_monthly_summary(self, owner: Any, year: int) -> MonthlyStatsResponse:
        """Per-month totals for a calendar year, all 12 months present."""
        user_id = normalize_owner(owner)
        start = datetime.datetime(year, 1, 1)
        end = datetime.datetime(year + 1, 1, 1)
        with self._store("monthly_summary"):
            rows = self.repository.monthly_rows(user_id, start, end)
        return MonthlyStatsResponse(year=year, monthly_stats=_bucket_by_month(rows))
