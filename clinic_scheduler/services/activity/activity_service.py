# ============================================================================
# clinic_scheduler/services/activity/activity_service.py
# ============================================================================
"""Activity feed for appointment, leave and schedule writes"""
import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clinic_scheduler.models.activity_log import ActivityLog, ActivityAction, ActivityEntity
from clinic_scheduler.utils.my_logging import correlation_id_var

logger = logging.getLogger(__name__)


class ActivityLogService:

    @staticmethod
    def log_activity(
            db: Session,
            action: ActivityAction,
            entity_type: ActivityEntity,
            entity_id: Optional[UUID] = None,
            doctor_id: Optional[UUID] = None,
            details: Optional[Dict[str, Any]] = None,
            actor_id: Optional[UUID] = None
    ) -> bool:
        """
        Record one write. Call only after the write itself has committed.

        A failure here is logged and swallowed: the change it describes is
        already saved and must not be reported as failed.
        """
        correlation_id = correlation_id_var.get()
        entry = ActivityLog(
            actor_id=actor_id,
            doctor_id=doctor_id,
            action=action.value,
            entity_type=entity_type.value,
            entity_id=entity_id,
            details=details or {},
            correlation_id=None if correlation_id == "-" else correlation_id,
        )

        try:
            db.add(entry)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to record {action.value} for {entity_type.value} {entity_id}: {e}")
            return False

        return True

    @staticmethod
    def list_recent(
            db: Session,
            doctor_id: Optional[UUID] = None,
            entity_type: Optional[ActivityEntity] = None,
            entity_id: Optional[UUID] = None,
            limit: int = 20
    ) -> List[ActivityLog]:
        """Newest first"""
        query = db.query(ActivityLog)

        if doctor_id:
            query = query.filter(ActivityLog.doctor_id == doctor_id)
        if entity_type:
            query = query.filter(ActivityLog.entity_type == entity_type.value)
        if entity_id:
            query = query.filter(ActivityLog.entity_id == entity_id)

        return query.order_by(ActivityLog.created_at.desc()).limit(limit).all()
