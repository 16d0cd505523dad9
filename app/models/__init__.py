"""SQLModel database models."""

from app.models.user import User
from app.models.workout import Workout, WorkoutCategory

__all__ = [
    "User",
    "Workout",
    "WorkoutCategory",
]
