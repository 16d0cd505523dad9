"""
Workout API schemas.
"""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.models.workout import WorkoutCategory


class SubExercise(BaseModel):
    """One exercise of a lifting session."""

    name: str = Field(..., min_length=1, max_length=100)
    sets: Optional[int] = Field(None, ge=0)
    reps: Optional[int] = Field(None, ge=0)
    weight: Optional[float] = Field(None, ge=0, description="kg")
    rpe: Optional[int] = Field(None, ge=1, le=10)


class WorkoutBase(BaseModel):
    occurred_at: Optional[datetime.datetime] = Field(None, description="Defaults to now (UTC)")
    duration_minutes: float = Field(..., ge=0)
    distance_km: float = Field(0.0, ge=0)
    calories_burned: float = Field(0.0, ge=0)
    avg_heart_rate: Optional[int] = Field(None, gt=0)
    max_heart_rate: Optional[int] = Field(None, gt=0)
    pace_min_per_km: Optional[float] = Field(None, ge=0, description="Derived from duration/distance when omitted")
    elevation_gain_m: Optional[float] = Field(None, ge=0)
    perceived_effort: Optional[int] = Field(None, ge=1, le=10)
    sleep_quality: Optional[int] = Field(None, ge=1, le=10)
    notes: Optional[str] = Field(None, max_length=1000)
    sub_exercises: list[SubExercise] = Field(default_factory=list)


class WorkoutCreate(WorkoutBase):
    """Schema for logging a workout."""

    category: WorkoutCategory


class WorkoutUpdate(BaseModel):
    """Replace-update payload.

    Only the fields present in the payload are written; in particular the
    stored pace is kept unless ``pace_min_per_km`` is sent explicitly.
    """

    category: Optional[WorkoutCategory] = None
    occurred_at: Optional[datetime.datetime] = None
    duration_minutes: Optional[float] = Field(None, ge=0)
    distance_km: Optional[float] = Field(None, ge=0)
    calories_burned: Optional[float] = Field(None, ge=0)
    avg_heart_rate: Optional[int] = Field(None, gt=0)
    max_heart_rate: Optional[int] = Field(None, gt=0)
    pace_min_per_km: Optional[float] = Field(None, ge=0)
    elevation_gain_m: Optional[float] = Field(None, ge=0)
    perceived_effort: Optional[int] = Field(None, ge=1, le=10)
    sleep_quality: Optional[int] = Field(None, ge=1, le=10)
    notes: Optional[str] = Field(None, max_length=1000)
    sub_exercises: Optional[list[SubExercise]] = None


class WorkoutResponse(WorkoutBase):
    """Schema for a workout in API responses."""

    id: int
    user_id: int
    category: str
    occurred_at: datetime.datetime
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True


class WorkoutWriteResponse(BaseModel):
    message: str
    workout: WorkoutResponse


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    pages: int


class WorkoutListResponse(BaseModel):
    workouts: list[WorkoutResponse]
    pagination: Pagination


class CsvImportResponse(BaseModel):
    message: str
    count: int
    workouts: list[WorkoutResponse]
