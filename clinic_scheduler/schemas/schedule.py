# clinic_scheduler/schemas/schedule.py
from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional, List
from datetime import date, time
from uuid import UUID

from clinic_scheduler.models.leave import LeaveType
from clinic_scheduler.schemas.appointment import validate_slot_time
from clinic_scheduler.utils.time_utils import format_hhmm, parse_hhmm


class ScheduleDay(BaseModel):
    """Weekly template for one weekday (0=Sunday)"""
    day_of_week: int = Field(..., ge=0, le=6)
    is_available: bool = True
    start_time: Optional[str] = Field(None, description="Working window start, HH:MM")
    end_time: Optional[str] = Field(None, description="Working window end (exclusive), HH:MM")
    break_start: Optional[str] = None
    break_end: Optional[str] = None

    @field_validator("start_time", "end_time", "break_start", "break_end", mode="before")
    @classmethod
    def check_slot_time(cls, v):
        if v is None or v == "":
            return None
        if isinstance(v, time):
            v = format_hhmm(v)
        return validate_slot_time(v)

    @model_validator(mode="after")
    def check_windows(self) -> "ScheduleDay":
        if self.start_time and self.end_time and parse_hhmm(self.start_time) >= parse_hhmm(self.end_time):
            raise ValueError("start_time must be before end_time")
        if self.break_start and self.break_end and parse_hhmm(self.break_start) >= parse_hhmm(self.break_end):
            raise ValueError("break_start must be before break_end")
        return self


class ScheduleDayResponse(ScheduleDay):
    configured: bool = Field(True, description="False when this day shows editor defaults, not a saved row")


class WeeklyScheduleUpdate(BaseModel):
    days: List[ScheduleDay] = Field(..., min_length=1, max_length=7)

    @field_validator("days")
    @classmethod
    def unique_days(cls, v: List[ScheduleDay]) -> List[ScheduleDay]:
        weekdays = [d.day_of_week for d in v]
        if len(weekdays) != len(set(weekdays)):
            raise ValueError("Each weekday may appear only once")
        return v


class WeeklyScheduleResponse(BaseModel):
    doctor_id: UUID
    days: List[ScheduleDayResponse]


class LeaveCreate(BaseModel):
    leave_date: date
    leave_type: LeaveType = LeaveType.FULL_DAY
    reason: Optional[str] = Field(None, max_length=500)


class LeaveResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    doctor_id: UUID
    leave_date: date
    leave_type: LeaveType
    reason: Optional[str] = None
