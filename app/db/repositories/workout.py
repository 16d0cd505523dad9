"""
Workout repository.

Handles database operations for :class:`Workout`.
Includes the aggregation queries used by the statistics layer.
"""

import datetime
from typing import Any, Optional

from sqlalchemy import func
from sqlmodel import Session, col, select

from app.models.workout import Workout

SORTABLE_COLUMNS = {
    "occurred_at": Workout.occurred_at,
    "date": Workout.occurred_at,
    "duration": Workout.duration_minutes,
    "distance": Workout.distance_km,
    "calories": Workout.calories_burned,
}


class WorkoutRepository:
    """Repository for Workout database operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, entry: Workout) -> Workout:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def create_many(self, entries: list[Workout]) -> list[Workout]:
        self.session.add_all(entries)
        self.session.commit()
        for entry in entries:
            self.session.refresh(entry)
        return entries

    def get_by_id(self, entry_id: int) -> Optional[Workout]:
        return self.session.get(Workout, entry_id)

    def _filtered(self, statement, user_id: int, start: Optional[datetime.datetime],
                  end: Optional[datetime.datetime], category: Optional[str]):
        statement = statement.where(Workout.user_id == user_id)
        if start is not None:
            statement = statement.where(Workout.occurred_at >= start)
        if end is not None:
            statement = statement.where(Workout.occurred_at <= end)
        if category:
            statement = statement.where(Workout.category == category)
        return statement

    def list_filtered(self, user_id: int, start: Optional[datetime.datetime] = None,
                      end: Optional[datetime.datetime] = None, category: Optional[str] = None,
                      sort_by: str = "occurred_at", descending: bool = True, skip: int = 0,
                      limit: int = 100, ) -> list[Workout]:
        """Page through a user's workouts with optional range/category filters."""
        column = SORTABLE_COLUMNS.get(sort_by, Workout.occurred_at)
        order = (col(column).desc(), col(Workout.id).desc()) if descending else (col(column).asc(),
                                                                                   col(Workout.id).asc())
        statement = self._filtered(select(Workout), user_id, start, end, category)
        statement = statement.order_by(*order).offset(skip).limit(limit)
        return list(self.session.exec(statement).all())

    def count_filtered(self, user_id: int, start: Optional[datetime.datetime] = None,
                       end: Optional[datetime.datetime] = None, category: Optional[str] = None, ) -> int:
        statement = self._filtered(select(func.count()).select_from(Workout), user_id, start, end, category)
        return self.session.exec(statement).first() or 0

    def list_in_range(self, user_id: int, start: datetime.datetime, end: Optional[datetime.datetime] = None,
                      category: Optional[str] = None, descending: bool = False, ) -> list[Workout]:
        """All workouts in ``[start, end]`` in chronological (or reverse) order."""
        statement = self._filtered(select(Workout), user_id, start, end, category)
        if descending:
            statement = statement.order_by(col(Workout.occurred_at).desc(), col(Workout.id).desc())
        else:
            statement = statement.order_by(col(Workout.occurred_at).asc(), col(Workout.id).asc())
        return list(self.session.exec(statement).all())

    # ------------------------------------------------------------------
    # Aggregation queries for statistics
    # ------------------------------------------------------------------

    def aggregate_since(self, user_id: int, since: datetime.datetime) -> dict[str, Any]:
        """Totals and averages over all workouts since *since*.

        Sums coalesce missing values to 0; SQL ``AVG`` ignores NULLs, so an
        average over a field nobody recorded comes back as ``None``.
        """
        statement = select(func.count(Workout.id),
                           func.coalesce(func.sum(Workout.duration_minutes), 0.0),
                           func.coalesce(func.sum(Workout.distance_km), 0.0),
                           func.coalesce(func.sum(Workout.calories_burned), 0.0),
                           func.avg(Workout.avg_heart_rate),
                           func.avg(Workout.pace_min_per_km),
                           func.avg(Workout.perceived_effort), ).where(Workout.user_id == user_id,
                                                                       Workout.occurred_at >= since, )
        row = self.session.exec(statement).first()
        if row is None:
            return {"count": 0, "duration": 0.0, "distance": 0.0, "calories": 0.0, "avg_heart_rate": None,
                    "avg_pace": None, "avg_perceived_effort": None, }
        return {"count": int(row[0] or 0), "duration": float(row[1]), "distance": float(row[2]),
                "calories": float(row[3]), "avg_heart_rate": _maybe_float(row[4]), "avg_pace": _maybe_float(row[5]),
                "avg_perceived_effort": _maybe_float(row[6]), }

    def activity_rows_since(self, user_id: int, since: datetime.datetime) -> list[tuple]:
        """``(occurred_at, duration, distance, calories)`` rows, oldest first."""
        statement = (select(Workout.occurred_at, Workout.duration_minutes, Workout.distance_km,
                            Workout.calories_burned, ).where(Workout.user_id == user_id,
                                                             Workout.occurred_at >= since, ).order_by(
            col(Workout.occurred_at).asc(), col(Workout.id).asc()))
        return list(self.session.exec(statement).all())

    def category_rows_since(self, user_id: int, since: datetime.datetime) -> list[tuple]:
        """``(category, duration)`` rows in scan order (oldest first, then id)."""
        statement = (select(Workout.category, Workout.duration_minutes).where(Workout.user_id == user_id,
                                                                              Workout.occurred_at >= since, ).order_by(
            col(Workout.occurred_at).asc(), col(Workout.id).asc()))
        return list(self.session.exec(statement).all())

    def latest_since(self, user_id: int, since: datetime.datetime, limit: int) -> list[Workout]:
        """The *limit* most recent workouts since *since*, newest first."""
        statement = (select(Workout).where(Workout.user_id == user_id, Workout.occurred_at >= since, ).order_by(
            col(Workout.occurred_at).desc(), col(Workout.id).desc()).limit(limit))
        return list(self.session.exec(statement).all())

    def monthly_rows(self, user_id: int, start: datetime.datetime, end: datetime.datetime, ) -> list[tuple]:
        """``(occurred_at, duration, distance, calories, pace)`` rows in ``[start, end)``."""
        statement = (select(Workout.occurred_at, Workout.duration_minutes, Workout.distance_km,
                            Workout.calories_burned, Workout.pace_min_per_km, ).where(Workout.user_id == user_id,
                                                                                      Workout.occurred_at >= start,
                                                                                      Workout.occurred_at < end, ))
        return list(self.session.exec(statement).all())

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def update(self, entry: Workout) -> Workout:
        self.session.add(entry)
        self.session.commit()
        self.session.refresh(entry)
        return entry

    def delete(self, entry_id: int) -> bool:
        entry = self.get_by_id(entry_id)
        if entry:
            self.session.delete(entry)
            self.session.commit()
            return True
        return False


def _maybe_float(value) -> Optional[float]:
    return None if value is None else float(value)
