# clinic_scheduler/schemas/availability.py
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date, time

from clinic_scheduler.models.leave import LeaveType
from clinic_scheduler.utils.time_utils import parse_hhmm


class TimeSlot(BaseModel):
    """One bookable 30-minute slot, identified by its start time"""
    value: str = Field(..., description="24-hour start time, HH:MM")
    label: str = Field(..., description="12-hour display label, H:MM AM/PM")

    @property
    def start(self) -> time:
        return parse_hhmm(self.value)


class SlotAvailability(BaseModel):
    """Occupancy check result from the booking guard"""
    available: bool
    error: Optional[str] = Field(None, description="Set when occupancy could not be determined")


class LeaveStatus(BaseModel):
    on_leave: bool
    leave_type: Optional[LeaveType] = None
    reason: Optional[str] = None


class DayAvailability(BaseModel):
    """Whether a doctor is working at all on a date, with a display reason"""
    available: bool
    reason: Optional[str] = None
    leave_type: Optional[LeaveType] = None


class AvailableSlotsResponse(BaseModel):
    doctor_id: str
    date: date
    total_slots: int
    slots: List[TimeSlot] = Field(default_factory=list)


class CalendarDay(BaseModel):
    date: date
    appointment_count: int = 0
    has_availability: bool = False


class CalendarMonth(BaseModel):
    doctor_id: str
    year: int
    month: int
    days: List[CalendarDay] = Field(default_factory=list)
