# clinic_scheduler/services/availability/slot_generator.py
"""Canonical 30-minute slot grid for one day"""
from datetime import time
from typing import List

from clinic_scheduler.schemas.availability import TimeSlot
from clinic_scheduler.utils.time_utils import SLOT_MINUTES, format_hhmm

SLOTS_PER_DAY = (24 * 60) // SLOT_MINUTES  # 48


def format_time_label(value: time) -> str:
    """12-hour display label, e.g. 00:30 -> "12:30 AM", 13:00 -> "1:00 PM" """
    period = "PM" if value.hour >= 12 else "AM"
    hour12 = value.hour % 12 or 12
    return f"{hour12}:{value.minute:02d} {period}"


def generate_time_slots() -> List[TimeSlot]:
    """
    Every slot of the day from 00:00 through 23:30, in chronological order.

    Pure function: both the availability resolver and its fail-open fallback
    call this, so the two paths always offer the same grid.
    """
    slots = []
    for index in range(SLOTS_PER_DAY):
        minutes = index * SLOT_MINUTES
        slot_time = time(minutes // 60, minutes % 60)
        slots.append(TimeSlot(value=format_hhmm(slot_time), label=format_time_label(slot_time)))
    return slots
