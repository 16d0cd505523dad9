"""
User API schemas.

Pydantic models for user-related request/response validation.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


# Shared properties
class UserProfile(BaseModel):
    """Athlete profile fields shared by registration and updates."""
    athlete_type: str = Field("runner", max_length=50, description="runner, cyclist, weightlifter, ...")
    fitness_level: str = Field("intermediate", max_length=50)
    age: Optional[int] = Field(None, ge=1, le=120)
    weight: Optional[float] = Field(None, gt=0, description="Body weight in kg")
    height: Optional[float] = Field(None, gt=0, description="Height in cm")


# Request schemas
class UserCreate(UserProfile):
    """Schema for user registration."""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6, description="Password (min 6 characters)")

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return value.lower()


class UserLogin(BaseModel):
    """Schema for user login."""
    email: EmailStr
    password: str


class UserUpdate(BaseModel):
    """Profile update.  Email and password cannot be changed here."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    athlete_type: Optional[str] = Field(None, max_length=50)
    fitness_level: Optional[str] = Field(None, max_length=50)
    age: Optional[int] = Field(None, ge=1, le=120)
    weight: Optional[float] = Field(None, gt=0)
    height: Optional[float] = Field(None, gt=0)


# Response schemas
class UserResponse(UserProfile):
    """Schema for user data in API responses (no sensitive data)."""
    id: int
    name: str
    email: EmailStr
    created_at: datetime

    class Config:
        from_attributes = True  # Allows creation from SQLModel objects


# Token schemas
class Token(BaseModel):
    """Schema for JWT token response."""
    access_token: str
    token_type: str = "bearer"


class AuthResponse(BaseModel):
    """Register/login response: a token plus the profile."""
    message: str
    token: str
    user: UserResponse
