"""
User database model.

An athlete account: login credentials plus the profile the coach uses
to tailor insights and plans.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel


class User(SQLModel, table=True):
    """
    Athlete account.

    ``email`` is stored lower-cased.  ``athlete_type`` selects the plan
    templates (runner, cyclist, weightlifter, crossfit, swimmer).
    """
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255, nullable=False)
    hashed_password: str = Field(nullable=False)
    name: str = Field(max_length=255, nullable=False)
    is_active: bool = Field(default=True)

    # Athlete profile
    athlete_type: str = Field(default="runner", max_length=50)
    fitness_level: str = Field(default="intermediate", max_length=50)
    age: Optional[int] = Field(default=None)
    weight: Optional[float] = Field(default=None)  # kg
    height: Optional[float] = Field(default=None)  # cm

    # Naive UTC
    created_at: datetime = Field(default_factory=datetime.utcnow, sa_column=Column(DateTime, nullable=False))
    updated_at: datetime = Field(default_factory=datetime.utcnow, sa_column=Column(DateTime, nullable=False))
