# clinic_scheduler/models/__init__.py
from .base import Base
from .schedule import DoctorSchedule
from .leave import DoctorLeave, LeaveType
from .appointment import Appointment, AppointmentStatus
from .activity_log import ActivityLog, ActivityAction, ActivityEntity

__all__ = [
    "Base",
    "DoctorSchedule",
    "DoctorLeave",
    "LeaveType",
    "Appointment",
    "AppointmentStatus",
    "ActivityLog",
    "ActivityAction",
    "ActivityEntity",
]
