from sqlalchemy import Column, String, DateTime, JSON, Index, Uuid
from sqlalchemy.sql import func
from clinic_scheduler.models.base import Base
import uuid
import enum


class ActivityAction(str, enum.Enum):
    """Ledger and schedule writes recorded in the activity feed"""
    APPOINTMENT_CREATED = "appointment_created"
    APPOINTMENT_UPDATED = "appointment_updated"
    APPOINTMENT_DELETED = "appointment_deleted"
    FEE_UPDATED = "fee_updated"
    LEAVE_ADDED = "leave_added"
    LEAVE_DELETED = "leave_deleted"
    SCHEDULE_UPDATED = "schedule_updated"

    @property
    def label(self) -> str:
        return {
            ActivityAction.APPOINTMENT_CREATED: "Created Appointment",
            ActivityAction.APPOINTMENT_UPDATED: "Updated Appointment",
            ActivityAction.APPOINTMENT_DELETED: "Deleted Appointment",
            ActivityAction.FEE_UPDATED: "Updated Fee",
            ActivityAction.LEAVE_ADDED: "Added Leave",
            ActivityAction.LEAVE_DELETED: "Cancelled Leave",
            ActivityAction.SCHEDULE_UPDATED: "Updated Schedule",
        }[self]


class ActivityEntity(str, enum.Enum):
    APPOINTMENT = "appointment"
    LEAVE = "leave"
    SCHEDULE = "schedule"


class ActivityLog(Base):
    """Append-only record of who changed what; never read by the scheduling logic"""
    __tablename__ = "activity_logs"
    __table_args__ = (
        Index("ix_activity_logs_doctor_created", "doctor_id", "created_at"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    actor_id = Column(Uuid(as_uuid=True), nullable=True)  # staff user, when the caller passes one
    doctor_id = Column(Uuid(as_uuid=True), nullable=True)

    action = Column(String(50), nullable=False)
    entity_type = Column(String(20), nullable=False)
    entity_id = Column(Uuid(as_uuid=True), nullable=True)
    details = Column(JSON, default=dict)
    correlation_id = Column(String(100))

    created_at = Column(DateTime(timezone=True), server_default=func.now())
