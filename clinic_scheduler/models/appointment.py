from sqlalchemy import (
    Column, String, Integer, Text, Date, Time, DateTime, Numeric, Index, Uuid, text,
    Enum as SQLAEnum
)
from sqlalchemy.sql import func
from .base import Base
import uuid
import enum


class AppointmentStatus(str, enum.Enum):
    """Lifecycle of an appointment in the ledger"""
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    @property
    def occupies_slot(self) -> bool:
        return self is not AppointmentStatus.CANCELLED

    def can_transition_to(self, new_status: "AppointmentStatus") -> bool:
        return new_status in ALLOWED_TRANSITIONS[self]


TERMINAL_STATUSES = frozenset({
    AppointmentStatus.COMPLETED,
    AppointmentStatus.CANCELLED,
    AppointmentStatus.NO_SHOW,
})

ALLOWED_TRANSITIONS = {
    AppointmentStatus.SCHEDULED: frozenset({
        AppointmentStatus.CONFIRMED,
        AppointmentStatus.IN_PROGRESS,
        AppointmentStatus.CANCELLED,
        AppointmentStatus.NO_SHOW,
    }),
    AppointmentStatus.CONFIRMED: frozenset({
        AppointmentStatus.IN_PROGRESS,
        AppointmentStatus.CANCELLED,
        AppointmentStatus.NO_SHOW,
    }),
    AppointmentStatus.IN_PROGRESS: frozenset({
        AppointmentStatus.COMPLETED,
        AppointmentStatus.CANCELLED,
        AppointmentStatus.NO_SHOW,
    }),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
    AppointmentStatus.NO_SHOW: frozenset(),
}


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        # At most one non-cancelled appointment per doctor/date/time.
        # The booking guard is only a pre-check; this index is what rejects the race.
        Index(
            "uq_appointments_active_slot",
            "doctor_id",
            "appointment_date",
            "appointment_time",
            unique=True,
            postgresql_where=text("status <> 'cancelled'"),
            sqlite_where=text("status <> 'cancelled'"),
        ),
        Index("ix_appointments_doctor_date", "doctor_id", "appointment_date"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # References (owned by the surrounding clinic application)
    doctor_id = Column(Uuid(as_uuid=True), nullable=False)
    patient_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    created_by = Column(Uuid(as_uuid=True), nullable=True)

    # Appointment details
    appointment_date = Column(Date, nullable=False)
    appointment_time = Column(Time, nullable=False)
    duration_minutes = Column(Integer, default=30)
    appointment_type = Column(String(50), nullable=True)  # consultation, follow_up, procedure, walk_in
    reason = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    # Status tracking
    status = Column(
        SQLAEnum(
            AppointmentStatus,
            name="appointment_status",
            values_callable=lambda obj: [e.value for e in obj]
        ),
        nullable=False,
        default=AppointmentStatus.SCHEDULED
    )

    # Fees
    consultation_fee = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    procedure_fee = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    other_fee = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    refund = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    total_fee = Column(Numeric(10, 2, asdecimal=False), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    cancellation_reason = Column(Text, nullable=True)
