"""Tests for workout writes: pace derivation, updates and CSV parsing."""

import datetime

import pytest
from fastapi import HTTPException

from app.models.workout import WorkoutCategory
from app.schemas.workout import WorkoutCreate, WorkoutUpdate
from app.services.workout_service import WorkoutService, derive_pace, parse_workout_csv, to_naive_utc

NOW = datetime.datetime(2026, 3, 1, 12, 0)


# ======================================================================
# Pace
# ======================================================================


class TestDerivePace:
    def test_minutes_per_km(self):
        assert derive_pace(60, 10) == pytest.approx(6.0)

    @pytest.mark.parametrize("duration,distance", [(60, 0), (0, 10), (None, 10), (60, None)])
    def test_missing_side_gives_none(self, duration, distance):
        assert derive_pace(duration, distance) is None


class TestToNaiveUtc:
    def test_aware_converted(self):
        aware = datetime.datetime(2026, 3, 1, 14, 0, tzinfo=datetime.timezone(datetime.timedelta(hours=2)))
        assert to_naive_utc(aware) == datetime.datetime(2026, 3, 1, 12, 0)

    def test_naive_unchanged(self):
        assert to_naive_utc(NOW) is NOW


# ======================================================================
# Create / update
# ======================================================================


class TestWorkoutWrites:
    def test_pace_derived_on_create(self, session, user):
        entry = WorkoutService(session).create(user.id, WorkoutCreate(category=WorkoutCategory.RUN,
                                                                      duration_minutes=60, distance_km=10))
        assert entry.pace_min_per_km == pytest.approx(6.0)

    def test_explicit_pace_kept_on_create(self, session, user):
        entry = WorkoutService(session).create(user.id, WorkoutCreate(category=WorkoutCategory.RUN,
                                                                      duration_minutes=60, distance_km=10,
                                                                      pace_min_per_km=5.5))
        assert entry.pace_min_per_km == pytest.approx(5.5)

    def test_update_does_not_recompute_pace(self, session, user):
        service = WorkoutService(session)
        entry = service.create(user.id, WorkoutCreate(category=WorkoutCategory.RUN, duration_minutes=60,
                                                      distance_km=10))

        updated = service.update(user.id, entry.id, WorkoutUpdate(duration_minutes=30))
        assert updated.duration_minutes == 30
        assert updated.pace_min_per_km == pytest.approx(6.0)

    def test_update_with_explicit_pace(self, session, user):
        service = WorkoutService(session)
        entry = service.create(user.id, WorkoutCreate(category=WorkoutCategory.RUN, duration_minutes=60,
                                                      distance_km=10))

        updated = service.update(user.id, entry.id, WorkoutUpdate(duration_minutes=30, pace_min_per_km=3.0))
        assert updated.pace_min_per_km == pytest.approx(3.0)

    def test_sub_exercises_stored(self, session, user):
        entry = WorkoutService(session).create(user.id, WorkoutCreate(
            category=WorkoutCategory.LIFT, duration_minutes=50,
            sub_exercises=[{"name": "Squat", "sets": 5, "reps": 5, "weight": 100}]))
        assert entry.sub_exercises[0]["name"] == "Squat"
        assert entry.sub_exercises[0]["weight"] == 100

    def test_foreign_workout_is_not_found(self, session, user, add_workout):
        entry = add_workout(1)
        with pytest.raises(HTTPException) as exc_info:
            WorkoutService(session).get(user.id + 1, entry.id)
        assert exc_info.value.status_code == 404

    def test_unknown_sort_rejected(self, session, user):
        with pytest.raises(HTTPException) as exc_info:
            WorkoutService(session).list_workouts(user.id, sort_by="heart_rate")
        assert exc_info.value.status_code == 400


# ======================================================================
# CSV
# ======================================================================


class TestParseWorkoutCsv:
    def test_full_row(self):
        text = ("type,date,duration,distance,calories,avgHR,maxHR,pace,notes\n"
                "run,2026-02-20T07:30:00,50,10,600,150,175,,Easy tempo\n")
        [workout] = parse_workout_csv(text, user_id=4, now=NOW)
        assert workout.user_id == 4
        assert workout.category == "run"
        assert workout.occurred_at == datetime.datetime(2026, 2, 20, 7, 30)
        assert workout.duration_minutes == 50
        assert workout.calories_burned == 600
        assert workout.avg_heart_rate == 150
        assert workout.max_heart_rate == 175
        assert workout.pace_min_per_km == pytest.approx(5.0)
        assert workout.notes == "Easy tempo"

    def test_type_defaults(self):
        text = "type,duration\n,30\nkayak,40\nSWIM,20\n"
        categories = [w.category for w in parse_workout_csv(text, user_id=1, now=NOW)]
        assert categories == ["run", "other", "swim"]

    def test_missing_date_means_now(self):
        [workout] = parse_workout_csv("type,duration\nyoga,60\n", user_id=1, now=NOW)
        assert workout.occurred_at == NOW

    def test_bad_numbers_fall_back(self):
        text = "type,duration,distance,calories,averageHeartRate\nrun,abc,,lots,-5\n"
        [workout] = parse_workout_csv(text, user_id=1, now=NOW)
        assert workout.duration_minutes == 0
        assert workout.distance_km == 0
        assert workout.calories_burned == 0
        assert workout.avg_heart_rate is None
        assert workout.pace_min_per_km is None

    def test_unreadable_date_skips_row(self):
        text = "type,date,duration\nrun,yesterday,30\nrun,2026-02-01,45\n"
        workouts = parse_workout_csv(text, user_id=1, now=NOW)
        assert [w.duration_minutes for w in workouts] == [45]

    def test_extra_and_missing_cells(self):
        text = "type,duration,notes\nrun,30,easy,extra,\nswim,20\n"
        workouts = parse_workout_csv(text, user_id=1, now=NOW)
        assert [(w.category, w.duration_minutes, w.notes) for w in workouts] == [("run", 30, "easy"),
                                                                                 ("swim", 20, None)]


class TestImportCsv:
    def test_rejects_other_extensions(self, session, user):
        with pytest.raises(HTTPException) as exc_info:
            WorkoutService(session).import_csv(user.id, "workouts.xlsx", b"type\nrun\n")
        assert exc_info.value.status_code == 400

    def test_rejects_empty_file(self, session, user):
        with pytest.raises(HTTPException) as exc_info:
            WorkoutService(session).import_csv(user.id, "workouts.csv", b"type,duration\n")
        assert exc_info.value.status_code == 400

    def test_imports_rows(self, session, user):
        saved = WorkoutService(session).import_csv(user.id, "log.CSV", b"\xef\xbb\xbftype,duration\nrun,30\nlift,60\n")
        assert [w.category for w in saved] == ["run", "lift"]
        assert all(w.id is not None for w in saved)
