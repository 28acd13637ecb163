"""Availability service - Computes bookable start times for a barber"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...config import BUSINESS_CLOSE_TIME, BUSINESS_OPEN_TIME
from .repository import SchedulingRepository
from .time_calculator import (
    DEFAULT_SERVICE_MINUTES,
    SLOT_MINUTES,
    generate_slot_grid,
    minutes_to_time,
    overlapping_slots,
    slots_needed,
    time_to_minutes,
)

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Subtracts bookings and staff breaks from the business-hours grid"""

    def __init__(
        self,
        db: Session,
        open_time: str = BUSINESS_OPEN_TIME,
        close_time: str = BUSINESS_CLOSE_TIME,
    ):
        self.db = db
        self.repo = SchedulingRepository()
        self.open_time = open_time
        self.close_time = close_time
        self.grid = generate_slot_grid(open_time, close_time, SLOT_MINUTES)
        self.grid_origin = time_to_minutes(open_time)

    def get_service_duration(self, service_id: Optional[int]) -> int:
        """Duration in minutes, falling back to the default when unknown"""
        if service_id is None:
            return DEFAULT_SERVICE_MINUTES

        service = self.repo.get_service(self.db, service_id)
        if not service or not service.duration:
            logger.debug(f"Service {service_id} not found, using default duration")
            return DEFAULT_SERVICE_MINUTES
        return service.duration

    def get_blocked_slots(self, barber_id: int, date: str, exclude_booking_id: Optional[int] = None) -> set[int]:
        """Grid slots occupied by active bookings and staff breaks"""
        blocked: set[int] = set()

        for booking in self.repo.get_bookings_by_barber_and_date(self.db, barber_id, date):
            if booking.status == "cancelled" or booking.id == exclude_booking_id:
                continue
            try:
                start = time_to_minutes(booking.time)
            except ValueError:
                logger.warning(f"⚠️ Booking {booking.id} has unparseable time {booking.time!r}")
                continue
            duration = self.get_service_duration(booking.service_id)
            blocked |= overlapping_slots(
                start, start + slots_needed(duration) * SLOT_MINUTES, self.grid_origin
            )

        for staff_break in self.repo.get_staff_breaks_by_barber(self.db, barber_id, date):
            try:
                start = time_to_minutes(staff_break.start_time)
                end = time_to_minutes(staff_break.end_time)
            except ValueError:
                logger.warning(f"⚠️ Staff break {staff_break.id} has unparseable times")
                continue
            blocked |= overlapping_slots(start, end, self.grid_origin)

        return blocked

    def _run_fits(self, start: int, needed: int, blocked: set[int], grid: set[int]) -> bool:
        for i in range(needed):
            slot = start + i * SLOT_MINUTES
            # A run past closing time lands on a slot outside the grid
            if slot not in grid or slot in blocked:
                return False
        return True

    def get_available_slots(
        self, barber_id: int, date: str, service_id: Optional[int] = None
    ) -> list[str]:
        """
        Start times at which a booking of the requested service fits.

        Returns "HH:MM" strings in ascending order.
        """
        needed = slots_needed(self.get_service_duration(service_id))
        blocked = self.get_blocked_slots(barber_id, date)
        grid = set(self.grid)

        return [
            minutes_to_time(slot)
            for slot in self.grid
            if self._run_fits(slot, needed, blocked, grid)
        ]

    def is_slot_available(
        self,
        barber_id: int,
        date: str,
        time: str,
        service_id: Optional[int] = None,
        exclude_booking_id: Optional[int] = None,
    ) -> bool:
        """Whether a booking of the service can start at the given time"""
        try:
            start = time_to_minutes(time)
        except ValueError:
            return False

        needed = slots_needed(self.get_service_duration(service_id))
        blocked = self.get_blocked_slots(barber_id, date, exclude_booking_id=exclude_booking_id)
        return self._run_fits(start, needed, blocked, set(self.grid))
