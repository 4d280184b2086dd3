# clinic_scheduler/schemas/activity.py
from pydantic import BaseModel, ConfigDict, computed_field
from typing import Optional, Dict, Any
from datetime import datetime
from uuid import UUID

from clinic_scheduler.models.activity_log import ActivityAction, ActivityEntity


class ActivityLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    actor_id: Optional[UUID] = None
    doctor_id: Optional[UUID] = None
    action: ActivityAction
    entity_type: ActivityEntity
    entity_id: Optional[UUID] = None
    details: Optional[Dict[str, Any]] = None
    correlation_id: Optional[str] = None
    created_at: Optional[datetime] = None

    @computed_field
    @property
    def label(self) -> str:
        return self.action.label
