"""
Workout endpoints: logging, CSV import, listing, editing and statistics.

The ``/stats`` routes are declared before ``/{workout_id}`` so they are
not captured by the id path parameter.
"""

import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.core.config import settings
from app.db.session import get_db
from app.models.user import User
from app.models.workout import WorkoutCategory
from app.schemas.stats import MonthlyStatsResponse, StatsOverviewResponse
from app.schemas.workout import (CsvImportResponse, WorkoutCreate, WorkoutListResponse, WorkoutResponse,
                                 WorkoutUpdate, WorkoutWriteResponse, )
from app.services.workout_service import WorkoutService
from app.stats import StatsAggregator
from app.stats.aggregator import DEFAULT_PERIOD

router = APIRouter()


@router.post("/",
             summary="Log a workout.",
             response_model=WorkoutWriteResponse,
             status_code=status.HTTP_201_CREATED)
def create_workout(data: WorkoutCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    entry = WorkoutService(db).create(user.id, data)
    return WorkoutWriteResponse(message="Workout logged successfully", workout=WorkoutResponse.model_validate(entry))


@router.post("/upload/csv",
             summary="Import workouts from a CSV file.",
             response_model=CsvImportResponse,
             status_code=status.HTTP_201_CREATED)
async def upload_csv(file: UploadFile = File(...), db: Session = Depends(get_db),
                     user: User = Depends(get_current_user)):
    content = await file.read()
    if len(content) > settings.UPLOAD_MAX_BYTES:
        raise HTTPException(status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                            detail=f"File exceeds {settings.UPLOAD_MAX_BYTES} bytes")
    saved = WorkoutService(db).import_csv(user.id, file.filename or "", content)
    return CsvImportResponse(message=f"Successfully imported {len(saved)} workouts", count=len(saved),
                             workouts=[WorkoutResponse.model_validate(w) for w in saved])


@router.get("/",
            summary="List workouts with filters and pagination.",
            response_model=WorkoutListResponse)
def list_workouts(
    start_date: Optional[datetime.datetime] = Query(None),
    end_date: Optional[datetime.datetime] = Query(None),
    type: Optional[WorkoutCategory] = Query(None, description="Workout category"),
    page: int = Query(1, ge=1),
    limit: int = Query(100, ge=1, le=500),
    sort_by: str = Query("occurred_at", description="occurred_at, duration, distance or calories"),
    sort_order: Literal["asc", "desc"] = Query("desc"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return WorkoutService(db).list_workouts(user.id, start_date, end_date, type, page=page, limit=limit,
                                            sort_by=sort_by, sort_order=sort_order)


# ----------------------------------------------------------------------
# Statistics
# ----------------------------------------------------------------------


@router.get("/stats/overview",
            summary="Overview, weekday histogram, type breakdown and recent trend.",
            response_model=StatsOverviewResponse)
def stats_overview(
    period: str = Query(DEFAULT_PERIOD, description="7d, 30d or 90d; anything else means 30d"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return StatsAggregator(db, trend_limit=settings.STATS_TREND_LIMIT).get_stats_overview(user.id, period)


@router.get("/stats/monthly",
            summary="Per-month totals for one calendar year.",
            response_model=MonthlyStatsResponse)
def stats_monthly(
    year: Optional[int] = Query(None, ge=1970, le=2100, description="Defaults to the current year"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    year = year or datetime.datetime.utcnow().year
    return StatsAggregator(db).get_monthly_summary(user.id, year)


# ----------------------------------------------------------------------
# Single workout
# ----------------------------------------------------------------------


@router.get("/{workout_id}",
            summary="Get one workout.",
            response_model=WorkoutResponse)
def get_workout(workout_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return WorkoutService(db).get(user.id, workout_id)


@router.put("/{workout_id}",
            summary="Update a workout.",
            response_model=WorkoutWriteResponse)
def update_workout(workout_id: int, data: WorkoutUpdate, db: Session = Depends(get_db),
                   user: User = Depends(get_current_user)):
    entry = WorkoutService(db).update(user.id, workout_id, data)
    return WorkoutWriteResponse(message="Workout updated successfully", workout=WorkoutResponse.model_validate(entry))


@router.delete("/{workout_id}",
               summary="Delete a workout.")
def delete_workout(workout_id: int, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    WorkoutService(db).delete(user.id, workout_id)
    return {"message": "Workout deleted successfully"}
