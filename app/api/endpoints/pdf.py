"""
PDF export endpoints.
"""

import datetime
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlmodel import Session

from app.api.dependencies import get_current_user
from app.core.logging import get_logger
from app.db.repositories.workout import WorkoutRepository
from app.db.session import get_db
from app.models.user import User
from app.models.workout import WorkoutCategory
from app.schemas.pdf import TrainingPlanPdfRequest
from app.services.pdf_service import render_training_plan, render_workout_log
from app.services.workout_service import to_naive_utc

logger = get_logger(__name__)

router = APIRouter()

LOG_DEFAULT_DAYS = 30


def _is_valid_plan(weeks: Any) -> bool:
    """``weeks`` must be a non-empty list of week objects the renderer can walk."""
    if not isinstance(weeks, list) or not weeks:
        return False
    for week in weeks:
        if not isinstance(week, dict):
            return False
        days = week.get("days") or {}
        if not isinstance(days, dict):
            return False
        if any(day and not isinstance(day, dict) for day in days.values()):
            return False
        if not all(isinstance(week.get(key) or [], list) for key in ("goals", "recovery_strategies")):
            return False
    return True


def _pdf_response(content: bytes, stem: str) -> Response:
    filename = f"{stem}-{datetime.datetime.utcnow():%Y%m%d%H%M%S}.pdf"
    return Response(content=content, media_type="application/pdf",
                    headers={"Content-Disposition": f'attachment; filename="{filename}"'})


@router.post("/training-plan",
             summary="Render a training plan as PDF.",
             response_class=Response)
def training_plan_pdf(request: TrainingPlanPdfRequest, user: User = Depends(get_current_user)):
    weeks = request.plan_data.get("weeks")
    if not _is_valid_plan(weeks):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid training plan data")

    start = request.start_date or datetime.date.today()
    content = render_training_plan(user, request.plan_data, start)
    logger.info("Training plan PDF rendered", user_id=user.id, weeks=len(weeks), size=len(content))
    return _pdf_response(content, "training-plan")


@router.get("/workout-log",
            summary="Export the workout log of a period as PDF.",
            response_class=Response)
def workout_log_pdf(
    start_date: Optional[datetime.datetime] = Query(None, description="Defaults to 30 days ago"),
    end_date: Optional[datetime.datetime] = Query(None, description="Defaults to now"),
    type: Optional[WorkoutCategory] = Query(None, description="Workout category"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    end = to_naive_utc(end_date) if end_date else datetime.datetime.utcnow()
    start = to_naive_utc(start_date) if start_date else end - datetime.timedelta(days=LOG_DEFAULT_DAYS)

    workouts = WorkoutRepository(db).list_in_range(user.id, start, end, type.value if type else None,
                                                   descending=True)
    content = render_workout_log(user, workouts, start, end)
    logger.info("Workout log PDF rendered", user_id=user.id, workouts=len(workouts), size=len(content))
    return _pdf_response(content, "workout-log")
