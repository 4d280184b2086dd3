# ============================================================================
# clinic_scheduler/services/schedule/leave_service.py
# ============================================================================
"""Service for doctor leave (full and half days off)"""
import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from clinic_scheduler.config.settings import get_settings
from clinic_scheduler.models.activity_log import ActivityAction, ActivityEntity
from clinic_scheduler.models.leave import DoctorLeave
from clinic_scheduler.schemas.schedule import LeaveCreate
from clinic_scheduler.services.activity.activity_service import ActivityLogService
from clinic_scheduler.utils.time_utils import clinic_now

logger = logging.getLogger(__name__)
settings = get_settings()


class LeaveConflictError(ValueError):
    """A leave already exists for this doctor and date"""


class LeaveService:
    """Leave records are created and deleted, never edited in place"""

    @staticmethod
    def add_leave(db: Session, doctor_id: UUID, data: LeaveCreate) -> DoctorLeave:
        """
        Log a leave for one date.

        Raises:
            LeaveConflictError: the doctor already has a leave on that date
                (delete it first to change the leave type)
        """
        leave = DoctorLeave(
            doctor_id=doctor_id,
            leave_date=data.leave_date,
            leave_type=data.leave_type,
            reason=data.reason or None,
        )
        db.add(leave)

        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise LeaveConflictError(f"Leave already exists on {data.leave_date.isoformat()}")

        db.refresh(leave)
        logger.info(f"Leave added for doctor {doctor_id} on {data.leave_date} ({data.leave_type.value})")
        ActivityLogService.log_activity(
            db, ActivityAction.LEAVE_ADDED, ActivityEntity.LEAVE, leave.id, doctor_id=doctor_id,
            details={"leave_date": data.leave_date.isoformat(), "leave_type": data.leave_type.value}
        )
        return leave

    @staticmethod
    def delete_leave(db: Session, doctor_id: UUID, leave_id: UUID) -> bool:
        """Cancel a leave. Returns True if deleted."""
        leave = db.query(DoctorLeave).filter(
            DoctorLeave.id == leave_id,
            DoctorLeave.doctor_id == doctor_id
        ).first()

        if not leave:
            return False

        details = {"leave_date": leave.leave_date.isoformat(), "leave_type": leave.leave_type.value}
        db.delete(leave)
        db.commit()
        logger.info(f"Leave {leave_id} cancelled for doctor {doctor_id}")
        ActivityLogService.log_activity(
            db, ActivityAction.LEAVE_DELETED, ActivityEntity.LEAVE, leave_id, doctor_id=doctor_id, details=details
        )
        return True

    @staticmethod
    def list_upcoming_leaves(
            db: Session,
            doctor_id: UUID,
            from_date: Optional[date] = None
    ) -> List[DoctorLeave]:
        """Leaves on or after from_date (default today on the clinic clock), soonest first"""
        from_date = from_date or clinic_now().date()
        return db.query(DoctorLeave).filter(
            DoctorLeave.doctor_id == doctor_id,
            DoctorLeave.leave_date >= from_date
        ).order_by(DoctorLeave.leave_date).limit(settings.UPCOMING_LEAVES_LIMIT).all()
