"""Tests for the coach service fallback behaviour."""

import datetime

from app.coach.gemini import GenerationError
from app.models.user import User
from app.models.workout import Workout
from app.schemas.coach import TrainingPlanRequest
from app.services.coach_service import CoachService, summarize_workouts, weekly_trend


class FakeGenerator:
    model = "fake-model"

    def __init__(self, reply: str = "", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


def _user() -> User:
    return User(id=3, email="coach@example.com", hashed_password="x", name="Coached", athlete_type="runner",
                fitness_level="advanced")


def _workouts() -> list[Workout]:
    start = datetime.datetime(2026, 2, 26, 7, 0)  # Thursday
    return [Workout(id=i + 1, user_id=3, category=category, occurred_at=start + datetime.timedelta(days=i),
                    duration_minutes=duration, distance_km=distance)
            for i, (category, duration, distance) in enumerate([("run", 30, 5.0), ("lift", 60, 0.0),
                                                               ("run", 45, 8.5)])]


class TestSummaries:
    def test_summarize_workouts(self):
        stats = summarize_workouts(_workouts(), 30)
        assert stats == {"total_workouts": 3, "total_duration": 135, "total_distance": 13.5,
                         "avg_duration": 45.0, "avg_distance": 4.5, "period_days": 30}

    def test_weekly_trend_weeks_start_on_sunday(self):
        trend = weekly_trend(_workouts())
        # Thu 26, Fri 27 and Sat 28 Feb all belong to the week starting Sun 22 Feb
        assert list(trend) == ["2026-02-22"]
        assert trend["2026-02-22"]["workouts"] == 3


class TestInsights:
    def test_without_generator_uses_template(self):
        coach = CoachService()
        assert coach.is_available() is False
        insights = coach.generate_insights(_user(), _workouts(), "30d", 30)
        assert insights["ai_generated"] is False
        assert insights["calculated_stats"]["total_workouts"] == 3

    def test_generator_answer_is_used(self):
        generator = FakeGenerator('Analysis:\n```json\n{"summary": "Strong week", "recovery_score": 9}\n```')
        insights = CoachService(generator).generate_insights(_user(), _workouts(), "7d", 7)
        assert insights["summary"] == "Strong week"
        assert insights["ai_generated"] is True
        assert insights["period"] == "7d"
        assert insights["calculated_stats"]["period_days"] == 7
        assert "generated_at" in insights
        assert "Last 7 days" in generator.prompts[0]

    def test_unparseable_answer_falls_back(self):
        insights = CoachService(FakeGenerator("I cannot answer that")).generate_insights(
            _user(), _workouts(), "30d", 30)
        assert insights["ai_generated"] is False

    def test_generator_failure_falls_back(self):
        generator = FakeGenerator(error=GenerationError("boom"))
        insights = CoachService(generator).generate_insights(_user(), _workouts(), "30d", 30)
        assert insights["ai_generated"] is False


class TestTrainingPlan:
    def test_without_generator_uses_template(self):
        request = TrainingPlanRequest(goal="Sub-50 10k", duration_weeks=3, intensity="hard")
        plan = CoachService().generate_training_plan(_user(), _workouts(), request)
        assert plan["ai_generated"] is False
        assert len(plan["weeks"]) == 3
        assert plan["goal"] == "Sub-50 10k"
        assert plan["generated_for"] == 3

    def test_generator_plan_gets_metadata(self):
        generator = FakeGenerator('{"plan_title": "Custom", "weeks": [{"week_number": 1}]}')
        plan = CoachService(generator).generate_training_plan(_user(), _workouts(), TrainingPlanRequest())
        assert plan["plan_title"] == "Custom"
        assert plan["ai_generated"] is True
        assert plan["athlete_type"] == "runner"
        assert plan["fitness_level"] == "advanced"
        assert "4-week training plan" in generator.prompts[0]
