# ============================================================================
# clinic_scheduler/api/v1/appointments.py
# Booking endpoints - thin HTTP layer over the appointment ledger
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.orm import Session
from uuid import UUID

from clinic_scheduler.config.database import get_db
from clinic_scheduler.schemas.appointment import (
    AppointmentCreate, AppointmentFees, AppointmentResponse, BookingOutcome, BookingResult,
    RescheduleRequest, StatusUpdate, WalkInCreate,
)
from clinic_scheduler.services.appointment.appointment_service import AppointmentService
from clinic_scheduler.services.appointment.appointment_query_service import AppointmentQueryService

router = APIRouter(prefix="/appointments", tags=["appointments"])

OUTCOME_STATUS_CODES = {
    BookingOutcome.SLOT_UNAVAILABLE: status.HTTP_409_CONFLICT,
    BookingOutcome.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    BookingOutcome.INVALID: status.HTTP_400_BAD_REQUEST,
    BookingOutcome.ERROR: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def _unwrap(result: BookingResult) -> BookingResult:
    """Turn a failed ledger write into an HTTP error the booking form can act on"""
    if result.success:
        return result

    raise HTTPException(
        status_code=OUTCOME_STATUS_CODES[result.outcome],
        detail={"outcome": result.outcome.value, "message": result.error}
    )


@router.post("", response_model=BookingResult, status_code=status.HTTP_201_CREATED)
async def book_appointment(
        data: AppointmentCreate,
        db: Session = Depends(get_db)
):
    """
    Book a slot. Responds 409 with outcome "slot_unavailable" when the slot
    is taken, including when another booking wins the race at insert time.
    """
    return _unwrap(AppointmentService.book_appointment(db, data))


@router.post("/walk-in", response_model=BookingResult, status_code=status.HTTP_201_CREATED)
async def register_walk_in(
        data: WalkInCreate,
        db: Session = Depends(get_db)
):
    """Register a walk-in patient directly as in progress."""
    return _unwrap(AppointmentService.register_walk_in(db, data))


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
        appointment_id: UUID = Path(..., description="The appointment ID"),
        db: Session = Depends(get_db)
):
    result = AppointmentQueryService.get_appointment_by_id(db, appointment_id)

    if not result:
        raise HTTPException(
            status_code=404,
            detail="Appointment not found"
        )

    return result


@router.patch("/{appointment_id}/reschedule", response_model=BookingResult)
async def reschedule_appointment(
        data: RescheduleRequest,
        appointment_id: UUID = Path(..., description="The appointment ID"),
        db: Session = Depends(get_db)
):
    return _unwrap(AppointmentService.reschedule_appointment(db, appointment_id, data))


@router.patch("/{appointment_id}/status", response_model=BookingResult)
async def change_status(
        data: StatusUpdate,
        appointment_id: UUID = Path(..., description="The appointment ID"),
        db: Session = Depends(get_db)
):
    """Move an appointment along its lifecycle; illegal transitions get 400."""
    return _unwrap(AppointmentService.change_status(db, appointment_id, data))


@router.patch("/{appointment_id}/fees", response_model=BookingResult)
async def update_fees(
        data: AppointmentFees,
        appointment_id: UUID = Path(..., description="The appointment ID"),
        db: Session = Depends(get_db)
):
    return _unwrap(AppointmentService.update_fees(db, appointment_id, data))


@router.delete("/{appointment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_appointment(
        appointment_id: UUID = Path(..., description="The appointment ID"),
        db: Session = Depends(get_db)
):
    """Administrative hard delete. Use the status endpoint to cancel."""
    _unwrap(AppointmentService.delete_appointment(db, appointment_id))
