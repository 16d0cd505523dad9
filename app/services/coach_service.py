"""
Coach service.

Builds training insights and plans.  The generative client is optional
and injected at construction: when it is absent, fails, or answers with
something that is not a JSON object, the deterministic templates are
used instead.
"""

from __future__ import annotations

import datetime
import json
from typing import Any, Optional, Sequence

from app.coach.gemini import GenerationError, TextGenerator
from app.coach.parsing import extract_json_object
from app.coach.templates import build_mock_insights, build_mock_plan
from app.core.logging import get_logger
from app.models.user import User
from app.models.workout import Workout
from app.schemas.coach import TrainingPlanRequest

logger = get_logger(__name__)


# ======================================================================
# Data preparation
# ======================================================================


def summarize_workouts(workouts: Sequence[Workout], period_days: int) -> dict[str, Any]:
    total = len(workouts)
    duration = sum(w.duration_minutes or 0 for w in workouts)
    distance = sum(w.distance_km or 0 for w in workouts)
    return {
        "total_workouts": total,
        "total_duration": round(duration),
        "total_distance": round(distance, 2),
        "avg_duration": round(duration / total, 1) if total else 0.0,
        "avg_distance": round(distance / total, 2) if total else 0.0,
        "period_days": period_days,
    }


def weekly_trend(workouts: Sequence[Workout]) -> dict[str, dict[str, float]]:
    """Per-week totals keyed by the ISO date of the week's Sunday."""
    weeks: dict[str, dict[str, float]] = {}
    for workout in workouts:
        day = workout.occurred_at.date()
        week_start = day - datetime.timedelta(days=(day.weekday() + 1) % 7)
        entry = weeks.setdefault(week_start.isoformat(),
                                 {"workouts": 0, "duration": 0.0, "distance": 0.0, "intensity": 0.0})
        entry["workouts"] += 1
        entry["duration"] += workout.duration_minutes or 0
        entry["distance"] += workout.distance_km or 0
        entry["intensity"] += workout.perceived_effort or 5
    return weeks


def _workout_digest(workout: Workout) -> dict[str, Any]:
    return {
        "date": workout.occurred_at.date().isoformat(),
        "type": workout.category,
        "duration": workout.duration_minutes,
        "distance": workout.distance_km or None,
        "calories": workout.calories_burned or None,
        "avg_hr": workout.avg_heart_rate,
        "pace": round(workout.pace_min_per_km, 2) if workout.pace_min_per_km else None,
        "perceived_effort": workout.perceived_effort,
        "notes": (workout.notes or "")[:100],
    }


def _profile_lines(user: User) -> str:
    return (f"- Type: {user.athlete_type}\n"
            f"- Fitness Level: {user.fitness_level}\n"
            f"- Age: {user.age or 'Not specified'}\n"
            f"- Weight: {user.weight or 'Not specified'} kg\n"
            f"- Height: {user.height or 'Not specified'} cm")


def insights_prompt(user: User, workouts: Sequence[Workout], statistics: dict[str, Any]) -> str:
    recent = [_workout_digest(w) for w in workouts[-20:]]
    trend = list(weekly_trend(workouts).items())[-4:]
    return f"""You are an expert athletic coach and sports scientist. Analyze the following training data.

ATHLETE PROFILE:
{_profile_lines(user)}

TRAINING PERIOD: Last {statistics['period_days']} days
TOTAL WORKOUTS: {statistics['total_workouts']}
TOTAL DURATION: {statistics['total_duration']} minutes
TOTAL DISTANCE: {statistics['total_distance']} km

RECENT WORKOUTS (last 20):
{json.dumps(recent, indent=2)}

WEEKLY TREND DATA:
{json.dumps(trend, indent=2)}

Cover performance trends, recovery, strengths and weaknesses, five actionable
recommendations, injury risks, scores and next steps.

Respond with a single valid JSON object with these keys:
- summary (string)
- performance_trends (array of strings)
- recovery_score (number 1-10)
- strengths (array of strings)
- weaknesses (array of strings)
- recommendations (array of strings)
- injury_risks (array of strings)
- performance_score (number 1-10)
- consistency_score (number 1-10)
- progress_score (number 1-10)
- next_steps (object with short_term, medium_term, long_term strings)
"""


def plan_prompt(user: User, history: Sequence[Workout], request: TrainingPlanRequest) -> str:
    training_history = [{
        "date": w.occurred_at.date().isoformat(),
        "type": w.category,
        "duration": w.duration_minutes,
        "distance": w.distance_km or None,
        "intensity": w.perceived_effort or 5,
    } for w in history]
    return f"""Create a personalized {request.duration_weeks}-week training plan for an athlete.

ATHLETE INFORMATION:
{_profile_lines(user)}
- Goal: {request.goal}
- Training Intensity Preference: {request.intensity}
- Focus Area: {request.focus}

RECENT TRAINING HISTORY (last 30 days):
{json.dumps(training_history, indent=2)}

Each week needs a focus, goals, total volume, a workout for every day from
monday to sunday (workout_type, duration, intensity, description, key_focus)
and recovery strategies.

Respond with a single valid JSON object:
{{"plan_title": str, "goal": str, "duration_weeks": int, "intensity_level": str,
  "weeks": [{{"week_number": int, "focus": str, "goals": [str], "total_volume": str,
              "days": {{"monday": {{...}}, ...}}, "recovery_strategies": [str]}}],
  "progression_strategy": str, "performance_metrics": [str], "notes": str}}
"""


# ======================================================================
# Service
# ======================================================================


class CoachService:
    """Insight and plan generation with graceful degradation.

    Args:
        generator: Optional text generator; ``None`` means templates only.
    """

    def __init__(self, generator: Optional[TextGenerator] = None):
        self.generator = generator

    def is_available(self) -> bool:
        return self.generator is not None

    @property
    def model(self) -> Optional[str]:
        return self.generator.model if self.generator is not None else None

    def _ask(self, prompt: str, kind: str) -> Optional[dict[str, Any]]:
        """Run *prompt* through the generator; ``None`` on any failure."""
        if self.generator is None:
            return None
        try:
            text = self.generator.generate(prompt)
        except GenerationError as exc:
            logger.warning("Generative coach failed, using template", kind=kind, error=str(exc))
            return None
        document = extract_json_object(text)
        if document is None:
            logger.warning("Unparseable coach response, using template", kind=kind, chars=len(text))
        return document

    def generate_insights(self, user: User, workouts: Sequence[Workout], period: str,
                          period_days: int) -> dict[str, Any]:
        """Insights for *workouts* (oldest first, non-empty)."""
        statistics = summarize_workouts(workouts, period_days)
        insights = self._ask(insights_prompt(user, workouts, statistics), "insights")
        if insights is None:
            return build_mock_insights(workouts, statistics, period)

        insights.update({
            "calculated_stats": statistics,
            "period": period,
            "generated_at": datetime.datetime.utcnow().isoformat(),
            "ai_generated": True,
        })
        return insights

    def generate_training_plan(self, user: User, history: Sequence[Workout],
                               request: TrainingPlanRequest) -> dict[str, Any]:
        plan = self._ask(plan_prompt(user, history, request), "training_plan")
        if plan is None:
            return build_mock_plan(user.athlete_type, user.fitness_level, request.goal, request.duration_weeks,
                                   request.intensity, user_id=user.id, )

        plan.update({
            "ai_generated": True,
            "generated_for": user.id,
            "generated_at": datetime.datetime.utcnow().isoformat(),
            "athlete_type": user.athlete_type,
            "fitness_level": user.fitness_level,
        })
        return plan
