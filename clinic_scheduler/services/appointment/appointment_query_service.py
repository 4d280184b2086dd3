# ============================================================================
# clinic_scheduler/services/appointment/appointment_query_service.py
# Read-side queries behind the calendar and appointment list screens
# ============================================================================
import calendar
from datetime import date
from typing import Optional, Dict, Any, List
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from clinic_scheduler.models.appointment import Appointment, AppointmentStatus
from clinic_scheduler.schemas.appointment import AppointmentResponse
from clinic_scheduler.schemas.availability import CalendarDay, CalendarMonth
from clinic_scheduler.services.availability.availability_service import AvailabilityService


class AppointmentQueryService:
    """Read side behind the calendar screen: single appointments, day lists and month markers."""

    @staticmethod
    def get_appointment_by_id(db: Session, appointment_id: UUID) -> Optional[Dict[str, Any]]:
        """Get a single appointment by ID. Returns None if not found."""
        appointment = db.query(Appointment).filter(Appointment.id == appointment_id).first()

        if not appointment:
            return None

        return AppointmentQueryService._serialize_appointment(appointment)

    @staticmethod
    def get_appointments_for_date(
            db: Session,
            doctor_id: UUID,
            day: date,
            include_cancelled: bool = False
    ) -> List[Dict[str, Any]]:
        """A doctor's appointments on one date, in time order."""
        query = db.query(Appointment).filter(
            Appointment.doctor_id == doctor_id,
            Appointment.appointment_date == day
        )
        if not include_cancelled:
            query = query.filter(Appointment.status != AppointmentStatus.CANCELLED)

        appointments = query.order_by(Appointment.appointment_time.asc()).all()
        return [AppointmentQueryService._serialize_appointment(appt) for appt in appointments]

    @staticmethod
    def get_calendar_month(db: Session, doctor_id: UUID, year: int, month: int) -> CalendarMonth:
        """
        Per-date markers for a month view: how many active appointments fall on
        each date and whether the doctor has any bookable slots that day.
        """
        days_in_month = calendar.monthrange(year, month)[1]
        first_day = date(year, month, 1)
        last_day = date(year, month, days_in_month)

        rows = db.query(Appointment.appointment_date, func.count(Appointment.id)).filter(
            Appointment.doctor_id == doctor_id,
            Appointment.appointment_date.between(first_day, last_day),
            Appointment.status != AppointmentStatus.CANCELLED
        ).group_by(Appointment.appointment_date).all()
        counts = {row[0]: row[1] for row in rows}

        days = []
        for day_number in range(1, days_in_month + 1):
            day = date(year, month, day_number)
            days.append(CalendarDay(
                date=day,
                appointment_count=counts.get(day, 0),
                has_availability=bool(AvailabilityService.get_available_slots(db, doctor_id, day))
            ))

        return CalendarMonth(doctor_id=str(doctor_id), year=year, month=month, days=days)

    @staticmethod
    def _serialize_appointment(appointment: Appointment) -> Dict[str, Any]:
        """Convert Appointment model to a JSON-ready dictionary."""
        return AppointmentResponse.model_validate(appointment).model_dump(mode="json")
