from sqlalchemy import Column, Integer, Boolean, Time, DateTime, UniqueConstraint, CheckConstraint, Uuid
from sqlalchemy.sql import func
from clinic_scheduler.models.base import Base
import uuid


class DoctorSchedule(Base):
    """Weekly availability template, one row per doctor per weekday"""
    __tablename__ = "doctor_schedules"
    __table_args__ = (
        UniqueConstraint("doctor_id", "day_of_week", name="uq_doctor_schedules_doctor_day"),
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_doctor_schedules_day_of_week"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    doctor_id = Column(Uuid(as_uuid=True), nullable=False, index=True)

    day_of_week = Column(Integer, nullable=False)  # 0=Sunday, 6=Saturday
    is_available = Column(Boolean, nullable=False, default=True)

    # Working window [start_time, end_time), NULL means not configured
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)

    # Break window [break_start, break_end) inside the working window
    break_start = Column(Time, nullable=True)
    break_end = Column(Time, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
