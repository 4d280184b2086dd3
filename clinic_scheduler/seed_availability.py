# ===== seed_availability.py =====
"""Seed a demo doctor's weekly schedule and a couple of leaves"""
import sys
import uuid
from datetime import date, timedelta
from sqlalchemy.exc import SQLAlchemyError
from clinic_scheduler.config.database import get_db
from clinic_scheduler.models.leave import LeaveType
from clinic_scheduler.schemas.schedule import ScheduleDay, LeaveCreate
from clinic_scheduler.services.schedule.schedule_service import ScheduleService
from clinic_scheduler.services.schedule.leave_service import LeaveService, LeaveConflictError


def seed_availability(doctor_id: uuid.UUID):
    db = next(get_db())

    try:
        # 1. Mon–Fri 9–5 with a lunch break, Saturday mornings, Sunday off
        days = [ScheduleDay(day_of_week=0, is_available=False)]
        for weekday in range(1, 6):  # 1=Monday ... 5=Friday
            days.append(ScheduleDay(
                day_of_week=weekday,
                start_time="09:00",
                end_time="17:00",
                break_start="13:00",
                break_end="14:00",
            ))
        days.append(ScheduleDay(day_of_week=6, start_time="10:00", end_time="14:00"))
        ScheduleService.save_weekly_schedule(db, doctor_id, days)

        # 2. Example leaves: a day off next week and a morning off the week after
        today = date.today()
        LeaveService.add_leave(db, doctor_id, LeaveCreate(
            leave_date=today + timedelta(days=7), leave_type=LeaveType.FULL_DAY, reason="Conference"
        ))
        LeaveService.add_leave(db, doctor_id, LeaveCreate(
            leave_date=today + timedelta(days=14), leave_type=LeaveType.HALF_DAY_MORNING
        ))

        print(f"Schedule and leaves seeded for doctor {doctor_id}")

    except (SQLAlchemyError, LeaveConflictError) as e:
        db.rollback()
        print("Error seeding availability:", e)
    finally:
        db.close()


if __name__ == "__main__":
    seed_availability(uuid.UUID(sys.argv[1]) if len(sys.argv) > 1 else uuid.uuid4())
