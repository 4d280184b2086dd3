# ============================================================================
# clinic_scheduler/services/appointment/booking_guard.py
# Occupancy pre-check against the appointment ledger
# ============================================================================
"""
Fast "this slot is taken" feedback before a booking or reschedule.

The check is advisory: two requests can both pass it before either insert
commits. The partial unique index uq_appointments_active_slot is what actually
rejects the second insert (see AppointmentService).
"""
import logging
from datetime import date, time
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clinic_scheduler.models.appointment import Appointment, AppointmentStatus
from clinic_scheduler.schemas.availability import SlotAvailability

logger = logging.getLogger(__name__)

# When the ledger can't be read, report the slot as taken
OCCUPANCY_FAIL_CLOSED = True


class BookingGuard:
    """Checks the ledger for an active appointment at an exact doctor/date/time"""

    @staticmethod
    def is_slot_available(
            db: Session,
            doctor_id: UUID,
            appointment_date: date,
            appointment_time: time,
            exclude_appointment_id: Optional[UUID] = None
    ) -> SlotAvailability:
        try:
            query = db.query(Appointment.id).filter(
                Appointment.doctor_id == doctor_id,
                Appointment.appointment_date == appointment_date,
                Appointment.appointment_time == appointment_time,
                Appointment.status != AppointmentStatus.CANCELLED
            )

            if exclude_appointment_id:
                query = query.filter(Appointment.id != exclude_appointment_id)

            taken = query.first() is not None

        except SQLAlchemyError as e:
            logger.error(
                f"Error checking time slot for doctor {doctor_id} "
                f"on {appointment_date} at {appointment_time}: {e}"
            )
            return SlotAvailability(available=not OCCUPANCY_FAIL_CLOSED, error=str(e))

        return SlotAvailability(available=not taken)
