"""Tests for calendar and listing queries."""
from datetime import date, time

from clinic_scheduler.models import AppointmentStatus, LeaveType
from clinic_scheduler.services.appointment.appointment_query_service import AppointmentQueryService
from tests.conftest import MONDAY


class TestAppointmentsForDate:

    def test_sorted_and_without_cancelled(self, db, doctor_id, patient_id, add_appointment):
        add_appointment(doctor_id, patient_id, MONDAY, time(11, 0))
        add_appointment(doctor_id, patient_id, MONDAY, time(9, 0))
        add_appointment(doctor_id, patient_id, MONDAY, time(10, 0), AppointmentStatus.CANCELLED)

        appointments = AppointmentQueryService.get_appointments_for_date(db, doctor_id, MONDAY)

        assert [a["appointment_time"] for a in appointments] == ["09:00", "11:00"]

    def test_include_cancelled(self, db, doctor_id, patient_id, add_appointment):
        add_appointment(doctor_id, patient_id, MONDAY, time(10, 0), AppointmentStatus.CANCELLED)

        appointments = AppointmentQueryService.get_appointments_for_date(db, doctor_id, MONDAY, include_cancelled=True)

        assert appointments[0]["status"] == "cancelled"


class TestCalendarMonth:

    def test_month_markers(self, db, doctor_id, patient_id, add_schedule, add_leave, add_appointment):
        add_schedule(doctor_id, 0, is_available=False)  # Sundays off
        add_leave(doctor_id, date(2026, 10, 20), LeaveType.FULL_DAY)
        add_appointment(doctor_id, patient_id, MONDAY, time(9, 0))
        add_appointment(doctor_id, patient_id, MONDAY, time(9, 30))
        add_appointment(doctor_id, patient_id, MONDAY, time(10, 0), AppointmentStatus.CANCELLED)

        month = AppointmentQueryService.get_calendar_month(db, doctor_id, 2026, 10)
        by_date = {day.date: day for day in month.days}

        assert len(month.days) == 31
        assert by_date[MONDAY].appointment_count == 2
        assert by_date[MONDAY].has_availability is True
        assert by_date[date(2026, 10, 18)].has_availability is False
        assert by_date[date(2026, 10, 20)].has_availability is False
        assert by_date[date(2026, 10, 21)].appointment_count == 0

    def test_february(self, db, doctor_id):
        assert len(AppointmentQueryService.get_calendar_month(db, doctor_id, 2028, 2).days) == 29

