"""Tests for the activity feed written alongside ledger and schedule changes."""
import uuid
from datetime import time
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from clinic_scheduler.models import ActivityLog, ActivityAction, ActivityEntity, Appointment, LeaveType
from clinic_scheduler.schemas.appointment import (
    AppointmentCreate, AppointmentFees, BookingOutcome, RescheduleRequest, StatusUpdate,
)
from clinic_scheduler.schemas.schedule import LeaveCreate, ScheduleDay
from clinic_scheduler.services.activity.activity_service import ActivityLogService
from clinic_scheduler.services.appointment.appointment_service import AppointmentService
from clinic_scheduler.services.schedule.leave_service import LeaveService
from clinic_scheduler.services.schedule.schedule_service import ScheduleService
from clinic_scheduler.utils.my_logging import correlation_id_var
from tests.conftest import MONDAY


def _book(db, doctor_id, patient_id, slot="09:00", **extra):
    data = AppointmentCreate(
        doctor_id=doctor_id, patient_id=patient_id, appointment_date=MONDAY, appointment_time=slot, **extra
    )
    return AppointmentService.book_appointment(db, data)


def _entries(db, action):
    return db.query(ActivityLog).filter(ActivityLog.action == action.value).all()


class TestAppointmentActivity:

    def test_booking_recorded(self, db, doctor_id, patient_id):
        staff_id = uuid.uuid4()
        result = _book(db, doctor_id, patient_id, created_by=staff_id)

        [entry] = _entries(db, ActivityAction.APPOINTMENT_CREATED)
        assert entry.entity_type == "appointment"
        assert entry.entity_id == result.appointment.id
        assert entry.doctor_id == doctor_id
        assert entry.actor_id == staff_id
        assert entry.details == {"appointment_date": "2026-10-19", "appointment_time": "09:00", "status": "scheduled"}

    def test_rejected_booking_not_recorded(self, db, doctor_id, patient_id):
        _book(db, doctor_id, patient_id)

        result = _book(db, doctor_id, uuid.uuid4())

        assert result.outcome == BookingOutcome.SLOT_UNAVAILABLE
        assert len(_entries(db, ActivityAction.APPOINTMENT_CREATED)) == 1

    def test_status_change_recorded(self, db, doctor_id, patient_id):
        appointment_id = _book(db, doctor_id, patient_id).appointment.id

        AppointmentService.change_status(
            db, appointment_id, StatusUpdate(status="cancelled", reason="Patient called")
        )

        [entry] = _entries(db, ActivityAction.APPOINTMENT_UPDATED)
        assert entry.details == {"change": "status", "from": "scheduled", "to": "cancelled", "reason": "Patient called"}

    def test_reschedule_recorded(self, db, doctor_id, patient_id):
        appointment_id = _book(db, doctor_id, patient_id).appointment.id

        AppointmentService.reschedule_appointment(
            db, appointment_id, RescheduleRequest(appointment_date=MONDAY, appointment_time="10:30")
        )

        [entry] = _entries(db, ActivityAction.APPOINTMENT_UPDATED)
        assert entry.details["from"]["appointment_time"] == "09:00"
        assert entry.details["to"]["appointment_time"] == "10:30"

    def test_fee_update_recorded(self, db, doctor_id, patient_id):
        appointment_id = _book(db, doctor_id, patient_id, consultation_fee=40).appointment.id

        AppointmentService.update_fees(db, appointment_id, AppointmentFees(procedure_fee=25, refund=5))

        [entry] = _entries(db, ActivityAction.FEE_UPDATED)
        assert entry.details == {"procedure_fee": 25, "refund": 5, "total_fee": 60}

    def test_delete_recorded(self, db, doctor_id, patient_id):
        appointment_id = _book(db, doctor_id, patient_id).appointment.id

        AppointmentService.delete_appointment(db, appointment_id)

        [entry] = _entries(db, ActivityAction.APPOINTMENT_DELETED)
        assert entry.entity_id == appointment_id


class TestScheduleActivity:

    def test_leave_added_and_deleted(self, db, doctor_id):
        leave = LeaveService.add_leave(
            db, doctor_id, LeaveCreate(leave_date=MONDAY, leave_type=LeaveType.HALF_DAY_MORNING)
        )
        leave_id = leave.id

        LeaveService.delete_leave(db, doctor_id, leave_id)

        [added] = _entries(db, ActivityAction.LEAVE_ADDED)
        [deleted] = _entries(db, ActivityAction.LEAVE_DELETED)
        assert added.details == {"leave_date": "2026-10-19", "leave_type": "half_day_morning"}
        assert deleted.entity_id == leave_id

    def test_schedule_saved(self, db, doctor_id):
        ScheduleService.save_weekly_schedule(db, doctor_id, [
            ScheduleDay(day_of_week=3, start_time="09:00", end_time="13:00"),
            ScheduleDay(day_of_week=1, start_time="09:00", end_time="17:00"),
        ])

        [entry] = _entries(db, ActivityAction.SCHEDULE_UPDATED)
        assert entry.entity_type == "schedule"
        assert entry.details == {"weekdays": [1, 3]}


class TestLogFailure:

    def test_log_failure_keeps_booking(self, engine, db, doctor_id, patient_id):
        """Should still report the booking when the activity feed cannot be written."""
        ActivityLog.__table__.drop(engine)

        result = _book(db, doctor_id, patient_id)

        assert result.outcome == BookingOutcome.BOOKED
        assert db.query(Appointment).filter(Appointment.doctor_id == doctor_id).count() == 1

    def test_log_failure_keeps_leave(self, engine, db, doctor_id):
        ActivityLog.__table__.drop(engine)

        leave = LeaveService.add_leave(db, doctor_id, LeaveCreate(leave_date=MONDAY))

        assert leave.leave_date == MONDAY

    def test_failed_write_rolls_back(self):
        session = MagicMock()
        session.commit.side_effect = OperationalError("INSERT", {}, Exception("connection lost"))

        recorded = ActivityLogService.log_activity(session, ActivityAction.SCHEDULE_UPDATED, ActivityEntity.SCHEDULE)

        assert recorded is False
        session.rollback.assert_called_once()


class TestActivityFeed:

    def test_correlation_id_stored(self, db, doctor_id):
        token = correlation_id_var.set("front-desk-7")
        try:
            ActivityLogService.log_activity(
                db, ActivityAction.SCHEDULE_UPDATED, ActivityEntity.SCHEDULE, doctor_id, doctor_id=doctor_id
            )
        finally:
            correlation_id_var.reset(token)

        [entry] = ActivityLogService.list_recent(db, doctor_id=doctor_id)
        assert entry.correlation_id == "front-desk-7"

    def test_filters(self, db, doctor_id, patient_id):
        _book(db, doctor_id, patient_id)
        LeaveService.add_leave(db, doctor_id, LeaveCreate(leave_date=MONDAY))
        _book(db, uuid.uuid4(), patient_id)

        mine = ActivityLogService.list_recent(db, doctor_id=doctor_id)
        leaves = ActivityLogService.list_recent(db, doctor_id=doctor_id, entity_type=ActivityEntity.LEAVE)

        assert len(mine) == 2
        assert [entry.action for entry in leaves] == ["leave_added"]

    def test_route(self, client, doctor_id, patient_id):
        client.post("/api/v1/appointments", json={
            "doctor_id": str(doctor_id),
            "patient_id": str(patient_id),
            "appointment_date": MONDAY.isoformat(),
            "appointment_time": "09:00",
        })

        response = client.get("/api/v1/activity-logs", params={"doctor_id": str(doctor_id)})

        assert response.status_code == 200
        [entry] = response.json()
        assert entry["action"] == "appointment_created"
        assert entry["label"] == "Created Appointment"
        assert entry["correlation_id"]
