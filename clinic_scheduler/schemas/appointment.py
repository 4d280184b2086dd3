# clinic_scheduler/schemas/appointment.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import date, datetime, time
from enum import Enum
from uuid import UUID

from clinic_scheduler.models.appointment import AppointmentStatus
from clinic_scheduler.utils.time_utils import parse_hhmm, format_hhmm, is_on_slot_grid


def validate_slot_time(value: str) -> str:
    """Normalize to HH:MM and require a 30-minute slot boundary"""
    parsed = parse_hhmm(value)
    if not is_on_slot_grid(parsed):
        raise ValueError(f"Time {value} is not on the 30-minute slot grid")
    return format_hhmm(parsed)


class AppointmentFees(BaseModel):
    consultation_fee: Optional[float] = Field(None, ge=0)
    procedure_fee: Optional[float] = Field(None, ge=0)
    other_fee: Optional[float] = Field(None, ge=0)
    refund: Optional[float] = Field(None, ge=0)


class AppointmentCreate(AppointmentFees):
    """Scheduled booking request"""
    doctor_id: UUID
    patient_id: UUID
    appointment_date: date
    appointment_time: str = Field(..., description="Slot start, HH:MM (24-hour)")
    appointment_type: Optional[str] = Field("consultation", max_length=50)
    duration_minutes: int = Field(30, ge=5, le=480)
    reason: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[UUID] = None

    @field_validator("appointment_time")
    @classmethod
    def check_slot_time(cls, v: str) -> str:
        return validate_slot_time(v)


class WalkInCreate(AppointmentFees):
    """Walk-in registration; date and time default to the current slot"""
    doctor_id: UUID
    patient_id: UUID
    appointment_date: Optional[date] = None
    appointment_time: Optional[str] = None
    appointment_type: Optional[str] = Field("walk_in", max_length=50)
    duration_minutes: int = Field(30, ge=5, le=480)
    reason: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[UUID] = None

    @field_validator("appointment_time")
    @classmethod
    def check_slot_time(cls, v: Optional[str]) -> Optional[str]:
        return validate_slot_time(v) if v is not None else v


class RescheduleRequest(BaseModel):
    appointment_date: date
    appointment_time: str

    @field_validator("appointment_time")
    @classmethod
    def check_slot_time(cls, v: str) -> str:
        return validate_slot_time(v)


class StatusUpdate(BaseModel):
    status: AppointmentStatus
    reason: Optional[str] = Field(None, description="Cancellation reason, if cancelling")


class AppointmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    doctor_id: UUID
    patient_id: UUID
    appointment_date: date
    appointment_time: str
    duration_minutes: Optional[int] = None
    appointment_type: Optional[str] = None
    status: AppointmentStatus
    reason: Optional[str] = None
    notes: Optional[str] = None
    consultation_fee: Optional[float] = None
    procedure_fee: Optional[float] = None
    other_fee: Optional[float] = None
    refund: Optional[float] = None
    total_fee: Optional[float] = None
    created_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None

    @field_validator("appointment_time", mode="before")
    @classmethod
    def render_time(cls, v):
        return format_hhmm(v) if isinstance(v, time) else v


class BookingOutcome(str, Enum):
    BOOKED = "booked"
    UPDATED = "updated"
    DELETED = "deleted"
    SLOT_UNAVAILABLE = "slot_unavailable"  # taken by another booking, caller should re-query
    NOT_FOUND = "not_found"
    INVALID = "invalid"
    ERROR = "error"


class BookingResult(BaseModel):
    """Outcome of a ledger write; ledger writes report failures here instead of raising"""
    outcome: BookingOutcome
    appointment: Optional[AppointmentResponse] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.outcome in (BookingOutcome.BOOKED, BookingOutcome.UPDATED, BookingOutcome.DELETED)
