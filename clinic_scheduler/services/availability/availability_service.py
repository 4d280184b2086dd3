from typing import List, Optional
from datetime import date, time
from uuid import UUID
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from clinic_scheduler.models.schedule import DoctorSchedule
from clinic_scheduler.models.leave import DoctorLeave, LeaveType
from clinic_scheduler.schemas.availability import TimeSlot, LeaveStatus, DayAvailability
from clinic_scheduler.services.availability.slot_generator import generate_time_slots
from clinic_scheduler.utils.time_utils import weekday_index
import logging

logger = logging.getLogger(__name__)

# Read failures on schedule/leave offer the whole day instead of blocking bookings.
# The booking guard fails closed instead (booking_guard.OCCUPANCY_FAIL_CLOSED).
AVAILABILITY_FAIL_OPEN = True

# Fixed midday split for half-day leave, independent of the doctor's working hours
HALF_DAY_BOUNDARY = time(12, 0)

WEEKDAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


class AvailabilityService:
    """Resolves which slots a doctor is working on a given date"""

    @staticmethod
    def get_available_slots(db: Session, doctor_id: UUID, day: date) -> List[TimeSlot]:
        """
        Candidate bookable slots for one doctor on one date:
        1. Full-day leave -> nothing
        2. No schedule row for the weekday -> the full grid (unconfigured means open)
        3. Weekday marked unavailable -> nothing
        4. Otherwise the grid narrowed to working hours, minus the break,
           minus the half of the day taken by a half-day leave

        Does not look at existing appointments; occupancy is the booking guard's job.
        """
        try:
            leave = AvailabilityService._get_leave(db, doctor_id, day)
            if leave and leave.leave_type == LeaveType.FULL_DAY:
                return []

            schedule = AvailabilityService._get_schedule(db, doctor_id, weekday_index(day))

        except SQLAlchemyError as e:
            logger.error(f"Availability lookup failed for doctor {doctor_id} on {day}: {e}")
            return generate_time_slots() if AVAILABILITY_FAIL_OPEN else []

        if schedule is None:
            logger.debug(f"No schedule for doctor {doctor_id} on weekday {weekday_index(day)}, offering all slots")
            return generate_time_slots()

        return AvailabilityService._narrow_to_schedule(schedule, leave)

    @staticmethod
    def _narrow_to_schedule(schedule: DoctorSchedule, leave: Optional[DoctorLeave]) -> List[TimeSlot]:
        """Grid cut down to a saved weekday row and any half-day leave"""
        if not schedule.is_available:
            return []

        slots = generate_time_slots()

        if schedule.start_time and schedule.end_time:
            slots = [s for s in slots if schedule.start_time <= s.start < schedule.end_time]

        if schedule.break_start and schedule.break_end:
            slots = [s for s in slots if not (schedule.break_start <= s.start < schedule.break_end)]

        if leave and leave.leave_type == LeaveType.HALF_DAY_MORNING:
            slots = [s for s in slots if s.start >= HALF_DAY_BOUNDARY]
        elif leave and leave.leave_type == LeaveType.HALF_DAY_EVENING:
            slots = [s for s in slots if s.start < HALF_DAY_BOUNDARY]

        return slots

    @staticmethod
    def check_leave(db: Session, doctor_id: UUID, day: date) -> LeaveStatus:
        """Leave status for a doctor on a date"""
        try:
            leave = AvailabilityService._get_leave(db, doctor_id, day)
        except SQLAlchemyError as e:
            logger.error(f"Leave lookup failed for doctor {doctor_id} on {day}: {e}")
            return LeaveStatus(on_leave=False)

        if not leave:
            return LeaveStatus(on_leave=False)

        return LeaveStatus(on_leave=True, leave_type=leave.leave_type, reason=leave.reason)

    @staticmethod
    def check_doctor_availability(db: Session, doctor_id: UUID, day: date) -> DayAvailability:
        """Day-level summary shown next to the time picker"""
        try:
            leave = AvailabilityService._get_leave(db, doctor_id, day)
            schedule = AvailabilityService._get_schedule(db, doctor_id, weekday_index(day))
        except SQLAlchemyError as e:
            logger.error(f"Availability summary failed for doctor {doctor_id} on {day}: {e}")
            return DayAvailability(available=AVAILABILITY_FAIL_OPEN)

        if leave and leave.leave_type == LeaveType.FULL_DAY:
            reason = "Doctor is on leave"
            if leave.reason:
                reason = f"{reason}: {leave.reason}"
            return DayAvailability(available=False, reason=reason, leave_type=leave.leave_type)

        if schedule is not None and not schedule.is_available:
            return DayAvailability(
                available=False,
                reason=f"Doctor is not available on {WEEKDAY_NAMES[weekday_index(day)]}"
            )

        if leave:
            half = "morning" if leave.leave_type == LeaveType.HALF_DAY_MORNING else "evening"
            # The remaining half can fall entirely outside working hours
            remaining = schedule is None or bool(AvailabilityService._narrow_to_schedule(schedule, leave))
            return DayAvailability(
                available=remaining,
                reason=f"Doctor is off in the {half}",
                leave_type=leave.leave_type
            )

        return DayAvailability(available=True)

    @staticmethod
    def _get_leave(db: Session, doctor_id: UUID, day: date) -> Optional[DoctorLeave]:
        return db.query(DoctorLeave).filter(
            DoctorLeave.doctor_id == doctor_id,
            DoctorLeave.leave_date == day
        ).first()

    @staticmethod
    def _get_schedule(db: Session, doctor_id: UUID, weekday: int) -> Optional[DoctorSchedule]:
        return db.query(DoctorSchedule).filter(
            DoctorSchedule.doctor_id == doctor_id,
            DoctorSchedule.day_of_week == weekday
        ).first()
