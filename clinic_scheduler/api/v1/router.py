"""
API v1 router setup
Organized into: availability (read side), schedules, appointments (ledger writes) and the activity feed
"""
from fastapi import APIRouter

from clinic_scheduler.api.v1 import availability, schedules, appointments, activity

api_v1_router = APIRouter()

# ============================================================================
# AVAILABILITY & CALENDAR ROUTES
# ============================================================================
api_v1_router.include_router(
    availability.router,
    tags=["Availability"]
)

# ============================================================================
# SCHEDULE & LEAVE ROUTES
# ============================================================================
api_v1_router.include_router(
    schedules.router,
    tags=["Schedules"]
)

# ============================================================================
# APPOINTMENT LEDGER ROUTES
# ============================================================================
api_v1_router.include_router(
    appointments.router,
    tags=["Appointments"]
)

# ============================================================================
# ACTIVITY FEED
# ============================================================================
api_v1_router.include_router(
    activity.router,
    tags=["Activity"]
)


# ============================================================================
# ROOT ENDPOINT - API Info
# ============================================================================
@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """
    API information.
    Authentication and clinic/role resolution happen upstream of this service.
    """
    return {
        "version": "1.0",
        "slot_minutes": 30,
        "policies": {
            "availability_read_failure": "fail open (full day offered)",
            "occupancy_read_failure": "fail closed (slot reported unavailable)"
        }
    }
