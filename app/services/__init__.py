"""Business logic services."""

from app.services.coach_service import CoachService
from app.services.user_service import UserService
from app.services.workout_service import WorkoutService

__all__ = [
    "CoachService",
    "UserService",
    "WorkoutService",
]
