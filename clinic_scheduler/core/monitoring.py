"""Health checks"""
from fastapi import APIRouter, Depends
from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clinic_scheduler.config.database import get_db
from clinic_scheduler.models.appointment import Appointment

ACTIVE_SLOT_INDEX = "uq_appointments_active_slot"

health_router = APIRouter()


@health_router.get("/")
async def health_check():
    return {"status": "healthy", "service": "clinic-scheduler"}


@health_router.get("/detailed")
async def detailed_health_check(db: Session = Depends(get_db)):
    """
    Database reachability plus a check that the active-slot unique index
    exists. Without the index concurrent bookings can double-book a slot.
    """
    checks = {
        "database": "unknown",
        "double_booking_index": "unknown",
        "overall": "unknown"
    }

    try:
        db.execute(text("SELECT 1"))
        checks["database"] = "healthy"

        indexes = inspect(db.get_bind()).get_indexes(Appointment.__tablename__)
        if any(index["name"] == ACTIVE_SLOT_INDEX for index in indexes):
            checks["double_booking_index"] = "healthy"
        else:
            checks["double_booking_index"] = "missing: run alembic upgrade head"
    except SQLAlchemyError as e:
        checks["database"] = f"unhealthy: {str(e)}"

    if all(value == "healthy" for key, value in checks.items() if key != "overall"):
        checks["overall"] = "healthy"
    else:
        checks["overall"] = "degraded"

    return checks
