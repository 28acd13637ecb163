"""
Slot arithmetic for the booking grid.

All values are minutes since midnight. A slot is identified by its start
minute and covers [start, start + SLOT_MINUTES).
"""

import math
from datetime import datetime, timedelta
from typing import Optional

SLOT_MINUTES = 30
DEFAULT_SERVICE_MINUTES = 30


def time_to_minutes(value: str) -> int:
    """Parse "HH:MM" into minutes since midnight"""
    parsed = datetime.strptime(value.strip(), "%H:%M")
    return parsed.hour * 60 + parsed.minute


def minutes_to_time(minutes: int) -> str:
    """Format minutes since midnight as "HH:MM" """
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def generate_slot_grid(open_time: str, close_time: str, slot_minutes: int = SLOT_MINUTES) -> list[int]:
    """All slot starts from open (inclusive) to close (exclusive)"""
    start = time_to_minutes(open_time)
    end = time_to_minutes(close_time)
    return list(range(start, end, slot_minutes))


def slots_needed(duration_minutes: Optional[int], slot_minutes: int = SLOT_MINUTES) -> int:
    """Number of whole slots a duration occupies, rounded up, at least one"""
    if not duration_minutes or duration_minutes <= 0:
        return 1
    return max(1, math.ceil(duration_minutes / slot_minutes))


def overlapping_slots(
    start: int, end: int, grid_origin: int, slot_minutes: int = SLOT_MINUTES
) -> set[int]:
    """
    Grid slots that intersect the half-open interval [start, end).

    Slots are aligned to grid_origin, so an interval that does not start on a
    slot boundary still blocks every slot it touches.
    """
    if end <= start:
        return set()

    first = grid_origin + math.floor((start - grid_origin) / slot_minutes) * slot_minutes
    return set(range(first, end, slot_minutes))


def parse_booking_datetime(date_str: str, time_str: str) -> datetime:
    """
    Combine a "YYYY-MM-DD" date and "HH:MM" time into a naive local datetime.

    Raises:
        ValueError: If either part is malformed
    """
    return datetime.strptime(f"{date_str.strip()} {time_str.strip()}", "%Y-%m-%d %H:%M")


def is_reminder_due(appointment_at: datetime, trigger_hours: float, now: datetime) -> bool:
    """True while now is inside [appointment - trigger_hours, appointment)"""
    target_send_time = appointment_at - timedelta(hours=trigger_hours)
    return target_send_time <= now < appointment_at


def format_display_date(date_str: str) -> str:
    """Format "2025-06-10" as "Tuesday, June 10, 2025", falling back to the input"""
    try:
        day = datetime.strptime(date_str, "%Y-%m-%d")
    except (TypeError, ValueError):
        return date_str
    return f"{day:%A, %B} {day.day}, {day.year}"
