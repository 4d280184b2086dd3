"""Tests for request validation."""
import uuid
from datetime import date

import pytest
from pydantic import ValidationError

from clinic_scheduler.schemas.appointment import AppointmentCreate, WalkInCreate
from clinic_scheduler.schemas.schedule import ScheduleDay, WeeklyScheduleUpdate


def _create(**overrides):
    data = {
        "doctor_id": uuid.uuid4(),
        "patient_id": uuid.uuid4(),
        "appointment_date": date(2026, 10, 19),
        "appointment_time": "09:00",
    }
    data.update(overrides)
    return AppointmentCreate(**data)


class TestAppointmentCreate:

    def test_normalizes_seconds(self):
        assert _create(appointment_time="14:30:00").appointment_time == "14:30"

    def test_rejects_off_grid_time(self):
        with pytest.raises(ValidationError):
            _create(appointment_time="09:15")

    def test_rejects_bad_format(self):
        with pytest.raises(ValidationError):
            _create(appointment_time="9am")

    def test_rejects_negative_fee(self):
        with pytest.raises(ValidationError):
            _create(consultation_fee=-1)

    def test_walk_in_time_optional(self):
        walk_in = WalkInCreate(doctor_id=uuid.uuid4(), patient_id=uuid.uuid4())

        assert walk_in.appointment_time is None
        assert walk_in.appointment_date is None


class TestScheduleDay:

    def test_valid_day(self):
        day = ScheduleDay(day_of_week=3, start_time="09:00", end_time="17:00", break_start="", break_end=None)

        assert day.break_start is None

    def test_start_after_end(self):
        with pytest.raises(ValidationError):
            ScheduleDay(day_of_week=1, start_time="17:00", end_time="09:00")

    def test_break_reversed(self):
        with pytest.raises(ValidationError):
            ScheduleDay(day_of_week=1, break_start="14:00", break_end="13:00")

    def test_day_out_of_range(self):
        with pytest.raises(ValidationError):
            ScheduleDay(day_of_week=7)

    def test_duplicate_weekdays(self):
        with pytest.raises(ValidationError):
            WeeklyScheduleUpdate(days=[ScheduleDay(day_of_week=1), ScheduleDay(day_of_week=1)])
