# ============================================================================
# clinic_scheduler/api/v1/availability.py
# Availability and calendar endpoints - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Query, Path
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional
from uuid import UUID

from clinic_scheduler.config.database import get_db
from clinic_scheduler.schemas.availability import (
    AvailableSlotsResponse, SlotAvailability, LeaveStatus, DayAvailability, CalendarMonth
)
from clinic_scheduler.schemas.appointment import validate_slot_time
from clinic_scheduler.services.availability.availability_service import AvailabilityService
from clinic_scheduler.services.appointment.booking_guard import BookingGuard
from clinic_scheduler.services.appointment.appointment_query_service import AppointmentQueryService
from clinic_scheduler.utils.time_utils import parse_hhmm

router = APIRouter(prefix="/doctors", tags=["availability"])


@router.get("/{doctor_id}/available-slots", response_model=AvailableSlotsResponse)
async def get_available_slots(
        doctor_id: UUID = Path(..., description="The doctor ID"),
        day: date = Query(..., alias="date", description="Date to list slots for (YYYY-MM-DD)"),
        db: Session = Depends(get_db)
):
    """
    Slots the doctor is working on a date, after schedule and leave.
    Does not check existing bookings; use slot-availability for that.
    """
    slots = AvailabilityService.get_available_slots(db, doctor_id, day)
    return AvailableSlotsResponse(doctor_id=str(doctor_id), date=day, total_slots=len(slots), slots=slots)


@router.get("/{doctor_id}/slot-availability", response_model=SlotAvailability)
async def check_slot_availability(
        doctor_id: UUID = Path(..., description="The doctor ID"),
        day: date = Query(..., alias="date", description="Appointment date (YYYY-MM-DD)"),
        time: str = Query(..., description="Slot start, HH:MM"),
        exclude_appointment_id: Optional[UUID] = Query(None, description="Appointment being edited"),
        db: Session = Depends(get_db)
):
    """Whether a specific slot is free of active appointments."""
    try:
        slot_time = parse_hhmm(validate_slot_time(time))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return BookingGuard.is_slot_available(db, doctor_id, day, slot_time, exclude_appointment_id)


@router.get("/{doctor_id}/leave-status", response_model=LeaveStatus)
async def check_leave(
        doctor_id: UUID = Path(..., description="The doctor ID"),
        day: date = Query(..., alias="date"),
        db: Session = Depends(get_db)
):
    return AvailabilityService.check_leave(db, doctor_id, day)


@router.get("/{doctor_id}/availability", response_model=DayAvailability)
async def check_doctor_availability(
        doctor_id: UUID = Path(..., description="The doctor ID"),
        day: date = Query(..., alias="date"),
        db: Session = Depends(get_db)
):
    """Day-level availability with a human-readable reason."""
    return AvailabilityService.check_doctor_availability(db, doctor_id, day)


@router.get("/{doctor_id}/calendar", response_model=CalendarMonth)
async def get_calendar_month(
        doctor_id: UUID = Path(..., description="The doctor ID"),
        year: int = Query(..., ge=2000, le=2100),
        month: int = Query(..., ge=1, le=12),
        db: Session = Depends(get_db)
):
    """Appointment counts and availability markers for every date in a month."""
    return AppointmentQueryService.get_calendar_month(db, doctor_id, year, month)


@router.get("/{doctor_id}/appointments")
async def list_appointments_for_date(
        doctor_id: UUID = Path(..., description="The doctor ID"),
        day: date = Query(..., alias="date"),
        include_cancelled: bool = Query(False),
        db: Session = Depends(get_db)
):
    """Appointments on one date in time order, for the calendar side panel."""
    return AppointmentQueryService.get_appointments_for_date(db, doctor_id, day, include_cancelled)
