"""
Coach endpoints: training insights and generated training plans.
"""

import datetime
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from app.api.dependencies import get_coach, get_current_user
from app.db.repositories.workout import WorkoutRepository
from app.db.session import get_db
from app.models.user import User
from app.schemas.coach import CoachStatusResponse, InsightsRequest, TrainingPlanRequest
from app.services.coach_service import CoachService
from app.stats import resolve_period

router = APIRouter()

PLAN_HISTORY_DAYS = 30
PLAN_HISTORY_LIMIT = 20


@router.get("/status",
            summary="Whether the generative coach is configured.",
            response_model=CoachStatusResponse)
def coach_status(coach: CoachService = Depends(get_coach), user: User = Depends(get_current_user)):
    return CoachStatusResponse(available=coach.is_available(), model=coach.model)


@router.post("/insights",
             summary="Analyse the workouts of a period.")
def generate_insights(request: InsightsRequest, db: Session = Depends(get_db),
                      coach: CoachService = Depends(get_coach),
                      user: User = Depends(get_current_user)) -> dict[str, Any]:
    period, days = resolve_period(request.period)
    since = datetime.datetime.utcnow() - datetime.timedelta(days=days)
    workouts = WorkoutRepository(db).list_in_range(user.id, since)
    if not workouts:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND,
                            detail="No workouts found for the selected period")
    return coach.generate_insights(user, workouts, period, days)


@router.post("/training-plan",
             summary="Generate a multi-week training plan.")
def generate_training_plan(request: TrainingPlanRequest, db: Session = Depends(get_db),
                           coach: CoachService = Depends(get_coach),
                           user: User = Depends(get_current_user)) -> dict[str, Any]:
    since = datetime.datetime.utcnow() - datetime.timedelta(days=PLAN_HISTORY_DAYS)
    history = WorkoutRepository(db).list_in_range(user.id, since, descending=True)[:PLAN_HISTORY_LIMIT]
    return coach.generate_training_plan(user, history, request)
