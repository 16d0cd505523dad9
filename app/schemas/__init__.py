"""Pydantic schemas for request/response validation."""

from app.schemas.coach import CoachStatusResponse, InsightsRequest, TrainingPlanRequest
from app.schemas.pdf import TrainingPlanPdfRequest
from app.schemas.stats import (
    MonthlyBucket,
    MonthlyStatsResponse,
    OverviewStats,
    StatsOverviewResponse,
    TrendPoint,
    TypeBreakdown,
    WeeklyBucket,
)
from app.schemas.user import AuthResponse, Token, UserCreate, UserLogin, UserResponse, UserUpdate
from app.schemas.workout import (
    CsvImportResponse,
    SubExercise,
    WorkoutCreate,
    WorkoutListResponse,
    WorkoutResponse,
    WorkoutUpdate,
)

__all__ = [
    "AuthResponse",
    "Token",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "UserUpdate",
    "SubExercise",
    "WorkoutCreate",
    "WorkoutUpdate",
    "WorkoutResponse",
    "WorkoutListResponse",
    "CsvImportResponse",
    "OverviewStats",
    "WeeklyBucket",
    "TypeBreakdown",
    "TrendPoint",
    "StatsOverviewResponse",
    "MonthlyBucket",
    "MonthlyStatsResponse",
    "InsightsRequest",
    "TrainingPlanRequest",
    "CoachStatusResponse",
    "TrainingPlanPdfRequest",
]
