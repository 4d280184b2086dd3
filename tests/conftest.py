"""Shared fixtures: in-memory SQLite ledger and a test client bound to it."""
import os

# Settings are cached on first import; point them at SQLite before anything loads
os.environ.setdefault("DATABASE_URL", "sqlite://")

import uuid
from datetime import date, time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clinic_scheduler.models import Base, DoctorSchedule, DoctorLeave, Appointment, AppointmentStatus, LeaveType

MONDAY = date(2026, 10, 19)
SUNDAY = date(2026, 10, 18)
SATURDAY = date(2026, 10, 24)


@pytest.fixture
def engine():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def client(engine):
    """Test client whose get_db dependency uses the in-memory database."""
    from clinic_scheduler.main import create_app
    from clinic_scheduler.config.database import get_db

    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app = create_app()
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def doctor_id():
    return uuid.uuid4()


@pytest.fixture
def patient_id():
    return uuid.uuid4()


@pytest.fixture
def add_schedule(db):
    """Save a schedule row; times as HH:MM strings or None."""
    def _add(doctor_id, day_of_week, is_available=True, start=None, end=None, break_start=None, break_end=None):
        def _t(value):
            if value is None:
                return None
            hours, minutes = value.split(":")
            return time(int(hours), int(minutes))

        row = DoctorSchedule(
            doctor_id=doctor_id,
            day_of_week=day_of_week,
            is_available=is_available,
            start_time=_t(start),
            end_time=_t(end),
            break_start=_t(break_start),
            break_end=_t(break_end),
        )
        db.add(row)
        db.commit()
        return row

    return _add


@pytest.fixture
def add_leave(db):
    def _add(doctor_id, leave_date, leave_type=LeaveType.FULL_DAY, reason=None):
        row = DoctorLeave(doctor_id=doctor_id, leave_date=leave_date, leave_type=leave_type, reason=reason)
        db.add(row)
        db.commit()
        return row

    return _add


@pytest.fixture
def add_appointment(db):
    """Insert straight into the ledger, bypassing the booking guard."""
    def _add(doctor_id, patient_id, appointment_date, appointment_time, status=AppointmentStatus.SCHEDULED):
        row = Appointment(
            doctor_id=doctor_id,
            patient_id=patient_id,
            appointment_date=appointment_date,
            appointment_time=appointment_time,
            status=status,
        )
        db.add(row)
        db.commit()
        return row

    return _add
