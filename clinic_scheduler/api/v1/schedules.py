# ============================================================================
# clinic_scheduler/api/v1/schedules.py
# Weekly schedule and leave management
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional
from uuid import UUID

from clinic_scheduler.config.database import get_db
from clinic_scheduler.schemas.schedule import (
    WeeklyScheduleUpdate, WeeklyScheduleResponse, LeaveCreate, LeaveResponse
)
from clinic_scheduler.services.schedule.schedule_service import ScheduleService
from clinic_scheduler.services.schedule.leave_service import LeaveService, LeaveConflictError

router = APIRouter(prefix="/doctors", tags=["schedules"])


@router.get("/{doctor_id}/schedule", response_model=WeeklyScheduleResponse)
async def get_weekly_schedule(
        doctor_id: UUID = Path(..., description="The doctor ID"),
        db: Session = Depends(get_db)
):
    """
    All seven weekdays. Days never saved come back with configured=false
    and the editor's default hours.
    """
    return ScheduleService.get_weekly_schedule(db, doctor_id)


@router.put("/{doctor_id}/schedule", response_model=WeeklyScheduleResponse)
async def save_weekly_schedule(
        data: WeeklyScheduleUpdate,
        doctor_id: UUID = Path(..., description="The doctor ID"),
        db: Session = Depends(get_db)
):
    return ScheduleService.save_weekly_schedule(db, doctor_id, data.days)


@router.get("/{doctor_id}/leaves", response_model=List[LeaveResponse])
async def list_upcoming_leaves(
        doctor_id: UUID = Path(..., description="The doctor ID"),
        from_date: Optional[date] = Query(None, description="Defaults to today"),
        db: Session = Depends(get_db)
):
    return LeaveService.list_upcoming_leaves(db, doctor_id, from_date)


@router.post("/{doctor_id}/leaves", response_model=LeaveResponse, status_code=status.HTTP_201_CREATED)
async def add_leave(
        data: LeaveCreate,
        doctor_id: UUID = Path(..., description="The doctor ID"),
        db: Session = Depends(get_db)
):
    try:
        return LeaveService.add_leave(db, doctor_id, data)
    except LeaveConflictError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e)
        )


@router.delete("/{doctor_id}/leaves/{leave_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_leave(
        doctor_id: UUID = Path(..., description="The doctor ID"),
        leave_id: UUID = Path(..., description="The leave ID"),
        db: Session = Depends(get_db)
):
    if not LeaveService.delete_leave(db, doctor_id, leave_id):
        raise HTTPException(
            status_code=404,
            detail="Leave not found"
        )
