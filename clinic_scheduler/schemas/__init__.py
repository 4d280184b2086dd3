# clinic_scheduler/schemas/__init__.py
from .availability import (
    TimeSlot,
    SlotAvailability,
    LeaveStatus,
    DayAvailability,
    AvailableSlotsResponse,
    CalendarDay,
    CalendarMonth
)

from .appointment import (
    AppointmentFees,
    AppointmentCreate,
    WalkInCreate,
    RescheduleRequest,
    StatusUpdate,
    AppointmentResponse,
    BookingOutcome,
    BookingResult
)

from .activity import ActivityLogResponse

from .schedule import (
    ScheduleDay,
    ScheduleDayResponse,
    WeeklyScheduleUpdate,
    WeeklyScheduleResponse,
    LeaveCreate,
    LeaveResponse
)

__all__ = [
    "TimeSlot",
    "SlotAvailability",
    "LeaveStatus",
    "DayAvailability",
    "AvailableSlotsResponse",
    "CalendarDay",
    "CalendarMonth",
    "AppointmentFees",
    "AppointmentCreate",
    "WalkInCreate",
    "RescheduleRequest",
    "StatusUpdate",
    "AppointmentResponse",
    "BookingOutcome",
    "BookingResult",
    "ScheduleDay",
    "ScheduleDayResponse",
    "WeeklyScheduleUpdate",
    "WeeklyScheduleResponse",
    "LeaveCreate",
    "LeaveResponse",
    "ActivityLogResponse",
]
