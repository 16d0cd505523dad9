"""Tests for the deterministic insight and plan templates."""

from types import SimpleNamespace

import pytest

from app.coach.templates import DAYS_OF_WEEK, build_mock_insights, build_mock_plan, daily_workouts, weekly_focus


def _stats(total: int = 3) -> dict:
    return {"total_workouts": total, "total_duration": 120, "total_distance": 15.0, "avg_duration": 40.0,
            "avg_distance": 5.0, "period_days": 30}


class TestMockInsights:
    def test_lists_categories_in_first_seen_order(self):
        workouts = [SimpleNamespace(category=c) for c in ["run", "lift", "run", "swim"]]
        insights = build_mock_insights(workouts, _stats(4), "30d")
        assert "run, lift, swim" in insights["summary"]

    def test_metadata(self):
        insights = build_mock_insights([SimpleNamespace(category="run")], _stats(1), "7d")
        assert insights["ai_generated"] is False
        assert insights["period"] == "7d"
        assert insights["calculated_stats"]["total_workouts"] == 1
        assert "generated_at" in insights
        assert len(insights["recommendations"]) == 5

    @pytest.mark.parametrize("count,recovery,performance", [(3, 8, 6.5), (6, 8, 7.5), (11, 6, 7.5)])
    def test_scores_scale_with_volume(self, count, recovery, performance):
        workouts = [SimpleNamespace(category="run")] * count
        insights = build_mock_insights(workouts, _stats(count), "30d")
        assert insights["recovery_score"] == recovery
        assert insights["performance_score"] == performance


class TestWeeklyFocus:
    def test_runner_progression(self):
        assert [weekly_focus(w, "runner") for w in range(1, 5)] == [
            "Base Building", "Endurance", "Speed Development", "Peak Performance"]

    def test_weeks_past_the_cycle_stay_at_peak(self):
        assert weekly_focus(9, "weightlifter") == "Peak"

    def test_unknown_athlete_type(self):
        assert weekly_focus(1, "climber") == "Foundation"


class TestDailyWorkouts:
    def test_every_day_present(self):
        assert list(daily_workouts(1, "runner", "moderate")) == DAYS_OF_WEEK

    def test_intensity_scales_runner_durations(self):
        light = daily_workouts(1, "runner", "light")
        hard = daily_workouts(1, "runner", "hard")
        assert light["saturday"]["duration"] == "56 min"
        assert hard["saturday"]["duration"] == "84 min"

    def test_long_run_grows_each_week(self):
        assert daily_workouts(3, "runner", "moderate")["saturday"]["duration"] == "90 min"

    def test_weightlifter_template(self):
        days = daily_workouts(1, "weightlifter", "hard")
        assert days["monday"]["workout_type"] == "Upper Body"
        assert days["sunday"]["workout_type"] == "Rest"

    def test_other_athletes_get_runner_template(self):
        assert daily_workouts(1, "cyclist", "moderate")["tuesday"]["workout_type"] == "Interval Training"


class TestMockPlan:
    def test_structure(self):
        plan = build_mock_plan("runner", "beginner", "Run a 10k", 6, "light", user_id=7)
        assert plan["plan_title"] == "Runner Training Plan"
        assert plan["duration_weeks"] == 6
        assert [week["week_number"] for week in plan["weeks"]] == [1, 2, 3, 4, 5, 6]
        assert plan["weeks"][1]["total_volume"] == "240 minutes"
        assert plan["generated_for"] == 7
        assert plan["ai_generated"] is False
