# ============================================================================
# clinic_scheduler/services/appointment/appointment_service.py
# ============================================================================
"""Service for writing to the appointment ledger"""
import logging
from datetime import datetime, time, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from clinic_scheduler.models.activity_log import ActivityAction, ActivityEntity
from clinic_scheduler.models.appointment import Appointment, AppointmentStatus
from clinic_scheduler.schemas.appointment import (
    AppointmentCreate, AppointmentFees, AppointmentResponse, BookingOutcome, BookingResult,
    RescheduleRequest, StatusUpdate, WalkInCreate,
)
from clinic_scheduler.services.activity.activity_service import ActivityLogService
from clinic_scheduler.services.appointment.booking_guard import BookingGuard
from clinic_scheduler.utils.time_utils import SLOT_MINUTES, clinic_now, format_hhmm, parse_hhmm

logger = logging.getLogger(__name__)

SLOT_TAKEN_MESSAGE = "This time slot was just booked by someone else. Please pick another slot."

FEE_FIELDS = ("consultation_fee", "procedure_fee", "other_fee", "refund")


def compute_total_fee(appointment: Appointment) -> float:
    """consultation + procedure + other - refund, missing parts count as zero"""
    return round(
        (appointment.consultation_fee or 0)
        + (appointment.procedure_fee or 0)
        + (appointment.other_fee or 0)
        - (appointment.refund or 0),
        2
    )


def current_slot_time(now: Optional[datetime] = None) -> time:
    """Start of the 30-minute slot containing now"""
    now = now or clinic_now()
    return time(now.hour, (now.minute // SLOT_MINUTES) * SLOT_MINUTES)


def slot_details(appointment: Appointment) -> dict:
    return {
        "appointment_date": appointment.appointment_date.isoformat(),
        "appointment_time": format_hhmm(appointment.appointment_time),
    }


class AppointmentService:
    """Handles appointment ledger writes"""

    @staticmethod
    def book_appointment(db: Session, data: AppointmentCreate) -> BookingResult:
        """Create a scheduled appointment after an occupancy pre-check"""
        appointment = Appointment(
            doctor_id=data.doctor_id,
            patient_id=data.patient_id,
            created_by=data.created_by,
            appointment_date=data.appointment_date,
            appointment_time=parse_hhmm(data.appointment_time),
            appointment_type=data.appointment_type,
            duration_minutes=data.duration_minutes,
            reason=data.reason,
            notes=data.notes,
            status=AppointmentStatus.SCHEDULED,
        )
        AppointmentService._apply_fees(appointment, data)
        return AppointmentService._insert(db, appointment)

    @staticmethod
    def register_walk_in(db: Session, data: WalkInCreate, now: Optional[datetime] = None) -> BookingResult:
        """Walk-ins skip scheduled/confirmed and go straight to in_progress"""
        now = now or clinic_now()
        appointment = Appointment(
            doctor_id=data.doctor_id,
            patient_id=data.patient_id,
            created_by=data.created_by,
            appointment_date=data.appointment_date or now.date(),
            appointment_time=(
                parse_hhmm(data.appointment_time) if data.appointment_time else current_slot_time(now)
            ),
            appointment_type=data.appointment_type,
            duration_minutes=data.duration_minutes,
            reason=data.reason,
            notes=data.notes,
            status=AppointmentStatus.IN_PROGRESS,
        )
        AppointmentService._apply_fees(appointment, data)
        return AppointmentService._insert(db, appointment)

    @staticmethod
    def reschedule_appointment(db: Session, appointment_id: UUID, data: RescheduleRequest) -> BookingResult:
        """Move an active appointment to another slot"""
        try:
            appointment = AppointmentService._get(db, appointment_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load appointment {appointment_id}: {e}")
            return BookingResult(outcome=BookingOutcome.ERROR, error=str(e))

        if not appointment:
            return BookingResult(outcome=BookingOutcome.NOT_FOUND, error="Appointment not found")

        if appointment.status.is_terminal:
            return BookingResult(
                outcome=BookingOutcome.INVALID,
                error=f"Cannot reschedule a {appointment.status.value} appointment"
            )

        new_time = parse_hhmm(data.appointment_time)
        check = BookingGuard.is_slot_available(
            db, appointment.doctor_id, data.appointment_date, new_time,
            exclude_appointment_id=appointment.id
        )
        if check.error:
            return BookingResult(outcome=BookingOutcome.ERROR, error=check.error)
        if not check.available:
            return BookingResult(outcome=BookingOutcome.SLOT_UNAVAILABLE, error=SLOT_TAKEN_MESSAGE)

        moved_from = slot_details(appointment)
        appointment.appointment_date = data.appointment_date
        appointment.appointment_time = new_time
        return AppointmentService._commit(
            db, appointment, BookingOutcome.UPDATED, ActivityAction.APPOINTMENT_UPDATED,
            {"change": "rescheduled", "from": moved_from, "to": slot_details(appointment)}
        )

    @staticmethod
    def change_status(db: Session, appointment_id: UUID, data: StatusUpdate) -> BookingResult:
        """Apply a status change if the lifecycle allows it"""
        try:
            appointment = AppointmentService._get(db, appointment_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load appointment {appointment_id}: {e}")
            return BookingResult(outcome=BookingOutcome.ERROR, error=str(e))

        if not appointment:
            return BookingResult(outcome=BookingOutcome.NOT_FOUND, error="Appointment not found")

        current = AppointmentStatus(appointment.status)
        if not current.can_transition_to(data.status):
            return BookingResult(
                outcome=BookingOutcome.INVALID,
                error=f"Cannot change status from {current.value} to {data.status.value}"
            )

        appointment.status = data.status
        if data.status == AppointmentStatus.CANCELLED:
            appointment.cancelled_at = datetime.now(timezone.utc)
            appointment.cancellation_reason = data.reason

        logger.info(f"Appointment {appointment_id}: {current.value} -> {data.status.value}")
        return AppointmentService._commit(
            db, appointment, BookingOutcome.UPDATED, ActivityAction.APPOINTMENT_UPDATED,
            {"change": "status", "from": current.value, "to": data.status.value, "reason": data.reason}
        )

    @staticmethod
    def update_fees(db: Session, appointment_id: UUID, fees: AppointmentFees) -> BookingResult:
        """Overwrite the fee fields that were sent and recompute the total"""
        try:
            appointment = AppointmentService._get(db, appointment_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load appointment {appointment_id}: {e}")
            return BookingResult(outcome=BookingOutcome.ERROR, error=str(e))

        if not appointment:
            return BookingResult(outcome=BookingOutcome.NOT_FOUND, error="Appointment not found")

        AppointmentService._apply_fees(appointment, fees, only_set=True)
        details = {field: getattr(fees, field) for field in FEE_FIELDS if field in fees.model_fields_set}
        details["total_fee"] = appointment.total_fee
        return AppointmentService._commit(
            db, appointment, BookingOutcome.UPDATED, ActivityAction.FEE_UPDATED, details
        )

    @staticmethod
    def delete_appointment(db: Session, appointment_id: UUID) -> BookingResult:
        """Administrative hard delete; normal flow cancels instead"""
        try:
            appointment = AppointmentService._get(db, appointment_id)
            if not appointment:
                return BookingResult(outcome=BookingOutcome.NOT_FOUND, error="Appointment not found")

            doctor_id = appointment.doctor_id
            details = slot_details(appointment)
            db.delete(appointment)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to delete appointment {appointment_id}: {e}")
            return BookingResult(outcome=BookingOutcome.ERROR, error=str(e))

        logger.info(f"Appointment {appointment_id} deleted")
        ActivityLogService.log_activity(
            db, ActivityAction.APPOINTMENT_DELETED, ActivityEntity.APPOINTMENT, appointment_id,
            doctor_id=doctor_id, details=details
        )
        return BookingResult(outcome=BookingOutcome.DELETED)

    @staticmethod
    def _insert(db: Session, appointment: Appointment) -> BookingResult:
        check = BookingGuard.is_slot_available(
            db, appointment.doctor_id, appointment.appointment_date, appointment.appointment_time
        )
        if check.error:
            return BookingResult(outcome=BookingOutcome.ERROR, error=check.error)
        if not check.available:
            return BookingResult(outcome=BookingOutcome.SLOT_UNAVAILABLE, error=SLOT_TAKEN_MESSAGE)

        db.add(appointment)
        details = slot_details(appointment)
        details["status"] = appointment.status.value
        return AppointmentService._commit(
            db, appointment, BookingOutcome.BOOKED, ActivityAction.APPOINTMENT_CREATED, details,
            actor_id=appointment.created_by
        )

    @staticmethod
    def _commit(
            db: Session,
            appointment: Appointment,
            outcome: BookingOutcome,
            action: ActivityAction,
            details: dict,
            actor_id: Optional[UUID] = None
    ) -> BookingResult:
        slot = f"doctor {appointment.doctor_id} on {appointment.appointment_date} at {appointment.appointment_time}"
        try:
            db.commit()
            db.refresh(appointment)
        except IntegrityError as e:
            # Lost the race: another booking for the slot committed after our pre-check
            db.rollback()
            logger.warning(f"Slot conflict for {slot}: {e.orig}")
            return BookingResult(outcome=BookingOutcome.SLOT_UNAVAILABLE, error=SLOT_TAKEN_MESSAGE)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to save appointment: {e}")
            return BookingResult(outcome=BookingOutcome.ERROR, error=str(e))

        result = BookingResult(
            outcome=outcome,
            appointment=AppointmentResponse.model_validate(appointment)
        )
        ActivityLogService.log_activity(
            db, action, ActivityEntity.APPOINTMENT, result.appointment.id,
            doctor_id=result.appointment.doctor_id, details=details, actor_id=actor_id
        )
        return result

    @staticmethod
    def _apply_fees(appointment: Appointment, fees: AppointmentFees, only_set: bool = False) -> None:
        provided = fees.model_fields_set if only_set else set(FEE_FIELDS)
        for field in FEE_FIELDS:
            if field in provided:
                setattr(appointment, field, getattr(fees, field))
        appointment.total_fee = compute_total_fee(appointment)

    @staticmethod
    def _get(db: Session, appointment_id: UUID) -> Optional[Appointment]:
        return db.query(Appointment).filter(Appointment.id == appointment_id).first()
