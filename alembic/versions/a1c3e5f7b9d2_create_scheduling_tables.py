"""create_scheduling_tables

Revision ID: a1c3e5f7b9d2
Revises:
Create Date: 2026-10-19 09:12:44.310552

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = 'a1c3e5f7b9d2'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    conn = op.get_bind()

    # Check and create enums
    result = conn.execute(sa.text("SELECT 1 FROM pg_type WHERE typname = 'leave_type'"))
    if not result.scalar():
        op.execute("CREATE TYPE leave_type AS ENUM ('full_day', 'half_day_morning', 'half_day_evening')")

    result = conn.execute(sa.text("SELECT 1 FROM pg_type WHERE typname = 'appointment_status'"))
    if not result.scalar():
        op.execute(
            "CREATE TYPE appointment_status AS ENUM "
            "('scheduled', 'confirmed', 'in_progress', 'completed', 'cancelled', 'no_show')"
        )

    # 1. Weekly schedule, one row per doctor per weekday (0=Sunday)
    op.create_table('doctor_schedules',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('doctor_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('is_available', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=True),
        sa.Column('end_time', sa.Time(), nullable=True),
        sa.Column('break_start', sa.Time(), nullable=True),
        sa.Column('break_end', sa.Time(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.CheckConstraint('day_of_week BETWEEN 0 AND 6', name='ck_doctor_schedules_day_of_week'),
        sa.UniqueConstraint('doctor_id', 'day_of_week', name='uq_doctor_schedules_doctor_day'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_doctor_schedules_doctor_id'), 'doctor_schedules', ['doctor_id'], unique=False)

    # 2. Leave, at most one per doctor per date
    op.create_table('doctor_leaves',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('doctor_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('leave_date', sa.Date(), nullable=False),
        sa.Column('leave_type', postgresql.ENUM(name='leave_type', create_type=False),
                  server_default='full_day', nullable=False),
        sa.Column('reason', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.UniqueConstraint('doctor_id', 'leave_date', name='uq_doctor_leaves_doctor_date'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_doctor_leaves_doctor_id'), 'doctor_leaves', ['doctor_id'], unique=False)

    # 3. Appointment ledger
    op.create_table('appointments',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('doctor_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('patient_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('appointment_date', sa.Date(), nullable=False),
        sa.Column('appointment_time', sa.Time(), nullable=False),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('appointment_type', sa.String(length=50), nullable=True),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', postgresql.ENUM(name='appointment_status', create_type=False),
                  server_default='scheduled', nullable=False),
        sa.Column('consultation_fee', sa.Numeric(10, 2), nullable=True),
        sa.Column('procedure_fee', sa.Numeric(10, 2), nullable=True),
        sa.Column('other_fee', sa.Numeric(10, 2), nullable=True),
        sa.Column('refund', sa.Numeric(10, 2), nullable=True),
        sa.Column('total_fee', sa.Numeric(10, 2), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancellation_reason', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_appointments_doctor_date', 'appointments', ['doctor_id', 'appointment_date'], unique=False)
    op.create_index(op.f('ix_appointments_patient_id'), 'appointments', ['patient_id'], unique=False)

    # At most one non-cancelled appointment per doctor/date/time.
    # This is the real double-booking guard; the application check only gives early feedback.
    op.create_index(
        'uq_appointments_active_slot',
        'appointments',
        ['doctor_id', 'appointment_date', 'appointment_time'],
        unique=True,
        postgresql_where=sa.text("status <> 'cancelled'")
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('uq_appointments_active_slot', table_name='appointments')
    op.drop_index(op.f('ix_appointments_patient_id'), table_name='appointments')
    op.drop_index('ix_appointments_doctor_date', table_name='appointments')
    op.drop_table('appointments')

    op.drop_index(op.f('ix_doctor_leaves_doctor_id'), table_name='doctor_leaves')
    op.drop_table('doctor_leaves')

    op.drop_index(op.f('ix_doctor_schedules_doctor_id'), table_name='doctor_schedules')
    op.drop_table('doctor_schedules')

    op.execute("DROP TYPE IF EXISTS appointment_status")
    op.execute("DROP TYPE IF EXISTS leave_type")
