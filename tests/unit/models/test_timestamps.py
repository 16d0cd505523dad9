"""Timestamp columns store naive UTC values."""

import datetime

import pytest
from sqlalchemy import DateTime

from app.models.user import User
from app.models.workout import Workout


class TestTimestampColumns:
    @pytest.mark.parametrize("column", [
        User.__table__.c.created_at,
        User.__table__.c.updated_at,
        Workout.__table__.c.occurred_at,
        Workout.__table__.c.created_at,
        Workout.__table__.c.updated_at,
    ])
    def test_plain_datetime_without_timezone(self, column):
        assert type(column.type) is DateTime
        assert column.type.timezone is False
        assert column.nullable is False

    def test_naive_values_round_trip(self, session, user):
        moment = datetime.datetime(2026, 2, 20, 7, 30)
        workout = Workout(user_id=user.id, category="run", occurred_at=moment, duration_minutes=30)
        session.add(workout)
        session.commit()
        session.refresh(workout)

        assert workout.occurred_at == moment
        assert workout.created_at.tzinfo is None
        assert user.created_at.tzinfo is None
