"""
Workout database model.

One logged training session.  Numeric metrics are stored as individual
columns so the statistics queries can aggregate them in SQL.
"""

import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import JSON, Column, DateTime, Index
from sqlmodel import Field, SQLModel


class WorkoutCategory(str, Enum):
    RUN = "run"
    LIFT = "lift"
    CYCLE = "cycle"
    SWIM = "swim"
    CROSSFIT = "crossfit"
    YOGA = "yoga"
    OTHER = "other"


class Workout(SQLModel, table=True):
    """A single logged workout.

    ``pace_min_per_km`` is derived once when the workout is written and
    never recomputed afterwards.  ``sub_exercises`` holds the ordered
    exercise list for lifting sessions.
    """

    __tablename__ = "workouts"
    __table_args__ = (Index("ix_workouts_user_id_occurred_at", "user_id", "occurred_at"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, index=True)
    category: str = Field(nullable=False, max_length=20, index=True)
    occurred_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow,
                                           sa_column=Column(DateTime, nullable=False, index=True))

    duration_minutes: float = Field(nullable=False)
    distance_km: float = Field(default=0.0, nullable=False)
    calories_burned: float = Field(default=0.0, nullable=False)

    avg_heart_rate: Optional[int] = Field(default=None)
    max_heart_rate: Optional[int] = Field(default=None)
    pace_min_per_km: Optional[float] = Field(default=None)
    elevation_gain_m: Optional[float] = Field(default=None)

    perceived_effort: Optional[int] = Field(default=None)
    sleep_quality: Optional[int] = Field(default=None)

    notes: Optional[str] = Field(default=None, max_length=1000)
    sub_exercises: list = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    # Timestamps, stored as naive UTC
    created_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow,
                                          sa_column=Column(DateTime, nullable=False))
    updated_at: datetime.datetime = Field(default_factory=datetime.datetime.utcnow,
                                          sa_column=Column(DateTime, nullable=False))
