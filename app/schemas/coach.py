"""
Coach (insights / training plan) request schemas.

Responses are free-form documents produced either by the generative
model or by the template generator, so they are returned as dicts.
"""

from typing import Literal

from pydantic import BaseModel, Field


class InsightsRequest(BaseModel):
    period: str = Field("30d", description="7d, 30d or 90d (anything else means 30d)")


class TrainingPlanRequest(BaseModel):
    goal: str = Field("Improve overall fitness", max_length=500)
    duration_weeks: int = Field(4, ge=1, le=12)
    intensity: Literal["light", "moderate", "hard"] = "moderate"
    focus: str = Field("balanced", max_length=100)


class CoachStatusResponse(BaseModel):
    available: bool
    model: str | None = None
