# clinic_scheduler/utils/time_utils.py
"""Helpers for the "HH:MM" wire format used for slot times"""
import re
from datetime import date, datetime, time
from zoneinfo import ZoneInfo

from clinic_scheduler.config.settings import get_settings

SLOT_MINUTES = 30

_HHMM_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(?::00)?$")


def parse_hhmm(value: str) -> time:
    """Parse "HH:MM" (or "HH:MM:00" as stored by some backends) into a time"""
    match = _HHMM_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise ValueError(f"Invalid time '{value}', expected HH:MM (24-hour)")
    return time(int(match.group(1)), int(match.group(2)))


def format_hhmm(value: time) -> str:
    """Render a time as zero-padded 24-hour "HH:MM" """
    return f"{value.hour:02d}:{value.minute:02d}"


def is_on_slot_grid(value: time) -> bool:
    """True when the time starts a slot (00 or 30 past the hour)"""
    return value.second == 0 and value.microsecond == 0 and value.minute % SLOT_MINUTES == 0


def weekday_index(day: date) -> int:
    """Weekday with Sunday=0 .. Saturday=6 (Python's weekday() is Monday=0)"""
    return (day.weekday() + 1) % 7


def clinic_now() -> datetime:
    """Current wall-clock time at the clinic, as a naive datetime"""
    tz = ZoneInfo(get_settings().CLINIC_TIMEZONE)
    return datetime.now(tz).replace(tzinfo=None)
