# ============================================================================
# clinic_scheduler/api/v1/activity.py
# Recent activity feed
# ============================================================================
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from uuid import UUID

from clinic_scheduler.config.database import get_db
from clinic_scheduler.models.activity_log import ActivityEntity
from clinic_scheduler.schemas.activity import ActivityLogResponse
from clinic_scheduler.services.activity.activity_service import ActivityLogService

router = APIRouter(prefix="/activity-logs", tags=["activity"])


@router.get("", response_model=List[ActivityLogResponse])
async def list_recent_activity(
        doctor_id: Optional[UUID] = Query(None, description="Only activity for this doctor"),
        entity_type: Optional[ActivityEntity] = Query(None),
        entity_id: Optional[UUID] = Query(None, description="History of one appointment or leave"),
        limit: int = Query(20, ge=1, le=100),
        db: Session = Depends(get_db)
):
    return ActivityLogService.list_recent(db, doctor_id, entity_type, entity_id, limit)
