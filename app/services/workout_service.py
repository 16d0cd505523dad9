"""
Workout service.

Logs, imports, edits and deletes workouts.  Pace is derived from
duration and distance once, when a workout is written without one;
later edits never recompute it.
"""

import csv
import datetime
import io
import math
from typing import Any, Optional

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.logging import get_logger
from app.db.repositories.workout import SORTABLE_COLUMNS, WorkoutRepository
from app.models.workout import Workout, WorkoutCategory
from app.schemas.workout import (Pagination, WorkoutCreate, WorkoutListResponse, WorkoutResponse, WorkoutUpdate, )

logger = get_logger(__name__)

CSV_EXTENSIONS = (".csv", ".txt")
_CATEGORIES = {c.value for c in WorkoutCategory}
_EXTRA_CELLS = "_extra"
# Columns that cannot be cleared through an update
_REQUIRED_FIELDS = {"category", "occurred_at", "duration_minutes", "distance_km", "calories_burned", "sub_exercises"}


def derive_pace(duration: Optional[float], distance: Optional[float]) -> Optional[float]:
    """Minutes per km, or ``None`` when either side is missing or zero."""
    if duration and distance and distance > 0 and duration > 0:
        return duration / distance
    return None


def to_naive_utc(moment: datetime.datetime) -> datetime.datetime:
    if moment.tzinfo is not None:
        return moment.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    return moment


# ----------------------------------------------------------------------
# CSV parsing
# ----------------------------------------------------------------------


def _parse_float(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def _parse_int(value: Optional[str]) -> Optional[int]:
    number = _parse_float(value)
    return int(number) if number is not None else None


def _positive_or_none(value: Optional[int]) -> Optional[int]:
    return value if value and value > 0 else None


def parse_workout_csv(text: str, user_id: int, now: Optional[datetime.datetime] = None) -> list[Workout]:
    """Turn CSV text into unsaved :class:`Workout` rows.

    Recognised headers: ``type, date, duration, distance, calories,
    avgHR|averageHeartRate, maxHR|maxHeartRate, pace, notes``.  Empty type
    means ``run``, an unknown type means ``other``.  Bad numbers fall back to
    0 (sums) or ``None`` (optional metrics); rows with an unreadable date
    are skipped.
    """
    now = now or datetime.datetime.utcnow()
    workouts: list[Workout] = []
    # Cells beyond the header land under restkey and are dropped
    reader = csv.DictReader(io.StringIO(text), restkey=_EXTRA_CELLS)
    for line_no, row in enumerate(reader, start=2):
        row = {k.strip(): (v or "").strip() for k, v in row.items() if k != _EXTRA_CELLS}
        raw_type = row.get("type", "").lower()
        category = raw_type if raw_type in _CATEGORIES else ("run" if not raw_type else "other")

        occurred_at = now
        if row.get("date"):
            try:
                occurred_at = to_naive_utc(datetime.datetime.fromisoformat(row["date"]))
            except ValueError:
                logger.warning("Skipping CSV row with unreadable date", line=line_no)
                continue

        duration = max(_parse_float(row.get("duration")) or 0.0, 0.0)
        distance = max(_parse_float(row.get("distance")) or 0.0, 0.0)
        pace = _parse_float(row.get("pace"))
        if not pace or pace < 0:
            pace = derive_pace(duration, distance)

        workouts.append(Workout(user_id=user_id, category=category, occurred_at=occurred_at,
                                duration_minutes=duration, distance_km=distance,
                                calories_burned=max(_parse_int(row.get("calories")) or 0, 0),
                                avg_heart_rate=_positive_or_none(
                                    _parse_int(row.get("avgHR") or row.get("averageHeartRate"))),
                                max_heart_rate=_positive_or_none(
                                    _parse_int(row.get("maxHR") or row.get("maxHeartRate"))),
                                pace_min_per_km=pace, notes=(row.get("notes") or "")[:1000] or None, ))
    return workouts


class WorkoutService:
    """Service for workout business logic."""

    def __init__(self, session: Session):
        self.repository = WorkoutRepository(session)

    def create(self, user_id: int, data: WorkoutCreate) -> Workout:
        values = data.model_dump(exclude={"occurred_at", "category"})
        if values["pace_min_per_km"] is None:
            values["pace_min_per_km"] = derive_pace(data.duration_minutes, data.distance_km)

        entry = Workout(user_id=user_id, category=data.category.value,
                        occurred_at=to_naive_utc(data.occurred_at) if data.occurred_at else datetime.datetime.utcnow(),
                        **values, )
        entry = self.repository.create(entry)
        logger.info("Workout logged", user_id=user_id, workout_id=entry.id, category=entry.category)
        return entry

    def import_csv(self, user_id: int, filename: str, content: bytes) -> list[Workout]:
        if not filename.lower().endswith(CSV_EXTENSIONS):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                                detail="Only CSV files are allowed", )
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="CSV file must be UTF-8 encoded", )

        workouts = parse_workout_csv(text, user_id)
        if not workouts:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                                detail="No valid workout data found in CSV", )
        saved = self.repository.create_many(workouts)
        logger.info("Workouts imported", user_id=user_id, count=len(saved))
        return saved

    def get(self, user_id: int, entry_id: int) -> Workout:
        return self._get_owned_entry(user_id, entry_id)

    def list_workouts(self, user_id: int, start: Optional[datetime.datetime] = None,
                      end: Optional[datetime.datetime] = None, category: Optional[WorkoutCategory] = None,
                      page: int = 1, limit: int = 100, sort_by: str = "occurred_at",
                      sort_order: str = "desc", ) -> WorkoutListResponse:
        if sort_by not in SORTABLE_COLUMNS:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                                detail=f"Cannot sort by '{sort_by}'. Available: {sorted(SORTABLE_COLUMNS)}", )
        start = to_naive_utc(start) if start else None
        end = to_naive_utc(end) if end else None
        category_value = category.value if category else None

        entries = self.repository.list_filtered(user_id, start, end, category_value, sort_by=sort_by,
                                                descending=sort_order != "asc", skip=(page - 1) * limit,
                                                limit=limit, )
        total = self.repository.count_filtered(user_id, start, end, category_value)
        return WorkoutListResponse(workouts=[WorkoutResponse.model_validate(e) for e in entries],
                                   pagination=Pagination(total=total, page=page, limit=limit,
                                                         pages=math.ceil(total / limit), ), )

    def update(self, user_id: int, entry_id: int, data: WorkoutUpdate) -> Workout:
        entry = self._get_owned_entry(user_id, entry_id)
        changes: dict[str, Any] = data.model_dump(exclude_unset=True)

        for field, value in changes.items():
            if value is None and field in _REQUIRED_FIELDS:
                continue
            if field == "category":
                value = value.value if isinstance(value, WorkoutCategory) else value
            elif field == "occurred_at":
                value = to_naive_utc(value)
            setattr(entry, field, value)

        entry.updated_at = datetime.datetime.utcnow()
        entry = self.repository.update(entry)
        logger.info("Workout updated", user_id=user_id, workout_id=entry.id, fields=sorted(changes))
        return entry

    def delete(self, user_id: int, entry_id: int) -> None:
        self._get_owned_entry(user_id, entry_id)
        self.repository.delete(entry_id)
        logger.info("Workout deleted", user_id=user_id, workout_id=entry_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_owned_entry(self, user_id: int, entry_id: int) -> Workout:
        entry = self.repository.get_by_id(entry_id)
        if not entry or entry.user_id != user_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Workout not found", )
        return entry
