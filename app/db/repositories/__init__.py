"""Database repositories."""

from app.db.repositories.user import UserRepository
from app.db.repositories.workout import WorkoutRepository

__all__ = [
    "UserRepository",
    "WorkoutRepository",
]
