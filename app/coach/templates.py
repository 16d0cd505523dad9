"""
Deterministic insight and training-plan templates.

Used whenever the generative coach is not configured, fails, or returns
something that does not parse.
"""

from __future__ import annotations

import datetime
from typing import Any, Optional, Sequence

DAYS_OF_WEEK = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

_WEEKLY_FOCUS: dict[str, list[str]] = {
    "runner": ["Base Building", "Endurance", "Speed Development", "Peak Performance"],
    "cyclist": ["Foundation", "Power", "Endurance", "Peak"],
    "weightlifter": ["Hypertrophy", "Strength", "Power", "Peak"],
    "crossfit": ["Skill Development", "Strength", "Metabolic Conditioning", "Competition Prep"],
    "swimmer": ["Technique", "Endurance", "Speed", "Race Prep"],
}
_DEFAULT_FOCUS = ["Foundation", "Building", "Intensity", "Peak"]

_INTENSITY_MULTIPLIER = {"light": 0.8, "moderate": 1.0, "hard": 1.2}


def _now_iso() -> str:
    return datetime.datetime.utcnow().isoformat()


# ======================================================================
# Insights
# ======================================================================


def build_mock_insights(workouts: Sequence[Any], statistics: dict[str, Any], period: str) -> dict[str, Any]:
    """Template insight document built from the window's workouts (oldest first)."""
    categories: list[str] = []
    for workout in workouts:
        if workout.category not in categories:
            categories.append(workout.category)
    count = len(workouts)

    return {
        "summary": (f"Based on your {statistics['period_days']} days of training data, you've completed "
                    f"{statistics['total_workouts']} workouts totaling {statistics['total_duration']} minutes. "
                    f"Your primary activities include {', '.join(categories)}."),
        "performance_trends": [
            f"Consistent {categories[0] if categories else 'training'} frequency",
            f"Average workout duration: {statistics['avg_duration']} minutes",
            f"{'Good' if count >= 5 else 'Improving'} workout regularity",
        ],
        "recovery_score": 6 if count > 10 else 8,
        "strengths": [
            "Commitment to regular training",
            "Variety in workout types",
            "Consistent logging of workouts",
        ],
        "weaknesses": [
            "Could benefit from more structured training plan",
            "Consider tracking nutrition for optimal performance",
            "Incorporate more recovery-focused activities",
        ],
        "recommendations": [
            "Add 2 strength training sessions per week",
            "Increase weekly training volume by 10% gradually",
            "Include one active recovery day",
            "Track sleep quality and aim for 7-8 hours",
            "Consider setting specific performance goals",
        ],
        "injury_risks": [
            "Watch for overuse injuries with high frequency",
            "Ensure proper warm-up before intense sessions",
            "Listen to your body and adjust when needed",
        ],
        "performance_score": 7.5 if count > 5 else 6.5,
        "consistency_score": 8 if count > 8 else 7,
        "progress_score": 7,
        "next_steps": {
            "short_term": "Focus on consistency for the next 2 weeks",
            "medium_term": "Increase intensity gradually over the next month",
            "long_term": "Set a specific goal like running a 10k or improving strength metrics",
        },
        "calculated_stats": statistics,
        "period": period,
        "generated_at": _now_iso(),
        "ai_generated": False,
        "note": "Template insights. Configure GEMINI_API_KEY for AI-generated analysis.",
    }


# ======================================================================
# Training plans
# ======================================================================


def weekly_focus(week: int, athlete_type: str) -> str:
    focuses = _WEEKLY_FOCUS.get(athlete_type, _DEFAULT_FOCUS)
    return focuses[min(week - 1, len(focuses) - 1)]


def _day(workout_type: str, duration: str, intensity: str, description: str, key_focus: str) -> dict[str, str]:
    return {"workout_type": workout_type, "duration": duration, "intensity": intensity, "description": description,
            "key_focus": key_focus, }


def daily_workouts(week: int, athlete_type: str, intensity: str) -> dict[str, dict[str, str]]:
    """Monday–Sunday template for one week; runner unless the athlete lifts."""
    m = _INTENSITY_MULTIPLIER.get(intensity, 1.0)

    if athlete_type == "weightlifter":
        return {
            "monday": _day("Upper Body", "60 min", "7-8", "Bench press, rows, shoulder press, pull-ups", "Strength"),
            "tuesday": _day("Lower Body", "60 min", "7-8", "Squats, deadlifts, lunges, calf raises", "Power"),
            "wednesday": _day("Active Recovery", "30 min", "2-3", "Light cardio and mobility work", "Recovery"),
            "thursday": _day("Upper Body", "60 min", "6-7", "Incline press, lat pulldowns, dips, bicep/tricep work",
                             "Hypertrophy"),
            "friday": _day("Lower Body", "60 min", "6-7", "Leg press, Romanian deadlifts, leg extensions/curls",
                           "Muscle Building"),
            "saturday": _day("Full Body/Conditioning", "45 min", "5-6", "Circuit training or metabolic conditioning",
                             "Endurance"),
            "sunday": _day("Rest", "0", "1", "Complete rest", "Recovery"),
        }

    return {
        "monday": _day("Easy Run", f"{round(30 * m)}-{round(45 * m)} min", "3-4",
                       "Light conversational pace, focus on form and breathing", "Recovery & Form"),
        "tuesday": _day("Interval Training", f"{round(45 * m)}-{round(60 * m)} min", "7-8",
                        "Warm up 10min, then 8x400m at fast pace with 90s rest, cool down 10min",
                        "Speed Development"),
        "wednesday": _day("Cross Training", f"{round(30 * m)} min", "2-3",
                          "Yoga, swimming, or cycling for active recovery", "Active Recovery & Mobility"),
        "thursday": _day("Tempo Run", f"{round(40 * m)}-{round(50 * m)} min", "6-7",
                         "10min warm up, 20min at tempo pace (comfortably hard), 10min cool down",
                         "Lactate Threshold"),
        "friday": _day("Rest Day", "0", "1", "Complete rest or light walking", "Full Recovery"),
        "saturday": _day("Long Run", f"{round((60 + week * 10) * m)} min", "4-5",
                         "Steady pace long run, focus on endurance and mental toughness", "Endurance Building"),
        "sunday": _day("Recovery", f"{round(20 * m)}-{round(30 * m)} min", "2-3",
                       "Very easy pace or walk, optional light stretching", "Recovery & Preparation"),
    }


def build_mock_plan(athlete_type: str, fitness_level: str, goal: str, duration_weeks: int, intensity: str,
                    user_id: Optional[int] = None) -> dict[str, Any]:
    plan: dict[str, Any] = {
        "plan_title": f"{athlete_type.capitalize()} Training Plan",
        "goal": goal,
        "duration_weeks": duration_weeks,
        "intensity_level": intensity,
        "weeks": [],
        "progression_strategy": "Linear progression with 10% weekly volume increase",
        "performance_metrics": ["Workout completion rate", "Duration consistency", "Perceived effort (RPE)",
                                "Recovery quality"],
        "notes": "Template training plan. Configure GEMINI_API_KEY for AI-generated personalised plans.",
        "ai_generated": False,
        "generated_for": user_id,
        "generated_at": _now_iso(),
        "athlete_type": athlete_type,
        "fitness_level": fitness_level,
    }

    for week in range(1, duration_weeks + 1):
        plan["weeks"].append({
            "week_number": week,
            "focus": weekly_focus(week, athlete_type),
            "goals": [
                "Complete all scheduled workouts",
                "Focus on proper form and technique",
                "Prioritize recovery between sessions",
            ],
            "total_volume": f"{week * 120} minutes",
            "days": daily_workouts(week, athlete_type, intensity),
            "recovery_strategies": [
                "Light stretching after workouts",
                "Stay hydrated (3-4L water daily)",
                "7-8 hours of quality sleep",
                "Active recovery on rest days",
            ],
        })
    return plan
