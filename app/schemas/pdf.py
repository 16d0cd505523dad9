"""PDF export request schemas."""

import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class TrainingPlanPdfRequest(BaseModel):
    plan_data: dict[str, Any] = Field(..., description="Plan document as returned by /api/ai/training-plan")
    start_date: Optional[datetime.date] = None
