# ============================================================================
# clinic_scheduler/services/schedule/schedule_service.py
# ============================================================================
"""Service for the weekly schedule a doctor edits on the settings screen"""
import logging
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from clinic_scheduler.models.activity_log import ActivityAction, ActivityEntity
from clinic_scheduler.models.schedule import DoctorSchedule
from clinic_scheduler.schemas.schedule import ScheduleDay, ScheduleDayResponse, WeeklyScheduleResponse
from clinic_scheduler.services.activity.activity_service import ActivityLogService
from clinic_scheduler.utils.time_utils import parse_hhmm

logger = logging.getLogger(__name__)

# What the editor shows for a weekday that has never been saved.
# These are display defaults only: availability still treats a missing row as fully open.
EDITOR_DEFAULT_DAY = {
    "start_time": "09:00",
    "end_time": "17:00",
    "break_start": "13:00",
    "break_end": "14:00",
}
SUNDAY = 0


class ScheduleService:
    """Reads and overwrites per-weekday schedule rows"""

    @staticmethod
    def get_weekly_schedule(db: Session, doctor_id: UUID) -> WeeklyScheduleResponse:
        """All seven weekdays, saved rows first and editor defaults for the rest"""
        rows = db.query(DoctorSchedule).filter(
            DoctorSchedule.doctor_id == doctor_id
        ).order_by(DoctorSchedule.day_of_week).all()
        by_day = {row.day_of_week: row for row in rows}

        days: List[ScheduleDayResponse] = []
        for weekday in range(7):
            row = by_day.get(weekday)
            if row:
                days.append(ScheduleDayResponse(
                    day_of_week=weekday,
                    is_available=row.is_available,
                    start_time=row.start_time,
                    end_time=row.end_time,
                    break_start=row.break_start,
                    break_end=row.break_end,
                    configured=True,
                ))
            else:
                days.append(ScheduleDayResponse(
                    day_of_week=weekday,
                    is_available=weekday != SUNDAY,
                    configured=False,
                    **EDITOR_DEFAULT_DAY,
                ))

        return WeeklyScheduleResponse(doctor_id=doctor_id, days=days)

    @staticmethod
    def save_weekly_schedule(db: Session, doctor_id: UUID, days: List[ScheduleDay]) -> WeeklyScheduleResponse:
        """Upsert one row per submitted weekday; rows are overwritten, never deleted"""
        existing = {
            row.day_of_week: row
            for row in db.query(DoctorSchedule).filter(DoctorSchedule.doctor_id == doctor_id).all()
        }

        for day in days:
            row = existing.get(day.day_of_week)
            if row is None:
                row = DoctorSchedule(doctor_id=doctor_id, day_of_week=day.day_of_week)
                db.add(row)

            row.is_available = day.is_available
            row.start_time = parse_hhmm(day.start_time) if day.start_time else None
            row.end_time = parse_hhmm(day.end_time) if day.end_time else None
            row.break_start = parse_hhmm(day.break_start) if day.break_start else None
            row.break_end = parse_hhmm(day.break_end) if day.break_end else None

        db.commit()
        logger.info(f"Saved schedule for doctor {doctor_id}: weekdays {[d.day_of_week for d in days]}")
        ActivityLogService.log_activity(
            db, ActivityAction.SCHEDULE_UPDATED, ActivityEntity.SCHEDULE, doctor_id, doctor_id=doctor_id,
            details={"weekdays": sorted(d.day_of_week for d in days)}
        )

        return ScheduleService.get_weekly_schedule(db, doctor_id)
