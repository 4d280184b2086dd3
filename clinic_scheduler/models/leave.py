from sqlalchemy import Column, String, Date, DateTime, UniqueConstraint, Uuid, Enum as SQLAEnum
from sqlalchemy.sql import func
from clinic_scheduler.models.base import Base
import uuid
import enum


class LeaveType(str, enum.Enum):
    """How much of the day a leave removes"""
    FULL_DAY = "full_day"
    HALF_DAY_MORNING = "half_day_morning"  # off before 12:00
    HALF_DAY_EVENING = "half_day_evening"  # off from 12:00 onward

    @property
    def label(self) -> str:
        return {
            LeaveType.FULL_DAY: "Full Day",
            LeaveType.HALF_DAY_MORNING: "Morning Off",
            LeaveType.HALF_DAY_EVENING: "Evening Off",
        }[self]


class DoctorLeave(Base):
    """Date-specific leave (days off, half days)"""
    __tablename__ = "doctor_leaves"
    __table_args__ = (
        UniqueConstraint("doctor_id", "leave_date", name="uq_doctor_leaves_doctor_date"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    doctor_id = Column(Uuid(as_uuid=True), nullable=False, index=True)

    leave_date = Column(Date, nullable=False)
    leave_type = Column(
        SQLAEnum(
            LeaveType,
            name="leave_type",
            values_callable=lambda obj: [e.value for e in obj]
        ),
        nullable=False,
        default=LeaveType.FULL_DAY
    )
    reason = Column(String(500), nullable=True)  # "Conference", "Vacation", etc.

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
