"""Booking service - Business logic for bookings and staff breaks"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Booking, StaffBreak
from ...shared.validators import validate_date
from .availability_service import AvailabilityService
from .repository import SchedulingRepository
from .schemas import BookingCreate, StaffBreakCreate

logger = logging.getLogger(__name__)

VALID_STATUSES = ("confirmed", "completed", "cancelled")


def parse_date_param(date: str) -> str:
    """Validate a YYYY-MM-DD path/query parameter"""
    try:
        return validate_date(date)
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=400, detail="Invalid date format. Expected YYYY-MM-DD"
        ) from None


class BookingService:
    """Service layer for booking business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = SchedulingRepository()

    def get_bookings(self, status: Optional[str] = None) -> list[Booking]:
        return self.repo.get_bookings(self.db, status=status)

    def get_booking(self, booking_id: int) -> Booking:
        booking = self.repo.get_booking(self.db, booking_id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        return booking

    def get_bookings_by_date(self, date: str) -> list[Booking]:
        return self.repo.get_bookings_by_date(self.db, parse_date_param(date))

    def get_bookings_by_barber_and_date(self, barber_id: int, date: str) -> list[Booking]:
        return self.repo.get_bookings_by_barber_and_date(self.db, barber_id, parse_date_param(date))

    def create_booking(self, data: BookingCreate) -> Booking:
        """Create a booking if the whole service run is still free"""
        if not self.repo.get_barber(self.db, data.barberId):
            raise HTTPException(status_code=404, detail="Barber not found")
        if not self.repo.get_service(self.db, data.serviceId):
            raise HTTPException(status_code=404, detail="Service not found")

        availability = AvailabilityService(self.db)
        if not availability.is_slot_available(data.barberId, data.date, data.time, data.serviceId):
            logger.info(
                f"⚠️ Slot {data.date} {data.time} no longer available for barber {data.barberId}"
            )
            raise HTTPException(status_code=409, detail="This time slot is no longer available")

        client = self.repo.get_client_by_phone(self.db, data.customerPhone)
        if not client:
            client = self.repo.create_client(
                self.db,
                name=data.customerName,
                phone=data.customerPhone,
                email=data.customerEmail,
            )
            logger.info(f"👤 Created client {client.id} for {data.customerPhone}")

        booking = self.repo.create_booking(
            self.db,
            customer_name=data.customerName,
            customer_phone=data.customerPhone,
            customer_email=data.customerEmail,
            client_id=client.id,
            barber_id=data.barberId,
            service_id=data.serviceId,
            date=data.date,
            time=data.time,
            notes=data.notes,
            status="confirmed",
        )
        logger.info(f"✅ Booking {booking.id} created: barber={booking.barber_id} {booking.date} {booking.time}")
        return booking

    def update_status(self, booking_id: int, status: Optional[str]) -> Booking:
        """Change a booking's status"""
        if not status or status not in VALID_STATUSES:
            raise HTTPException(status_code=400, detail="Invalid status")

        booking = self.get_booking(booking_id)

        # Re-confirming a cancelled booking must not double-book its slot
        if booking.status == "cancelled" and status != "cancelled":
            availability = AvailabilityService(self.db)
            if not availability.is_slot_available(
                booking.barber_id,
                booking.date,
                booking.time,
                booking.service_id,
                exclude_booking_id=booking.id,
            ):
                raise HTTPException(status_code=409, detail="This time slot is no longer available")

        previous = booking.status
        booking = self.repo.update_booking(self.db, booking, status=status)
        logger.info(f"🔄 Booking {booking.id} status: {previous} → {status}")
        return booking

    def delete_booking(self, booking_id: int) -> dict:
        booking = self.get_booking(booking_id)
        self.repo.delete_booking(self.db, booking)
        logger.info(f"🗑️ Booking {booking_id} deleted")
        return {"success": True}

    # Staff breaks
    def get_staff_breaks(self, barber_id: Optional[int] = None, date: Optional[str] = None) -> list[StaffBreak]:
        if barber_id is None:
            return self.repo.get_staff_breaks(self.db)
        return self.repo.get_staff_breaks_by_barber(
            self.db, barber_id, parse_date_param(date) if date else None
        )

    def create_staff_break(self, data: StaffBreakCreate) -> StaffBreak:
        if not self.repo.get_barber(self.db, data.barberId):
            raise HTTPException(status_code=404, detail="Barber not found")

        return self.repo.create_staff_break(
            self.db,
            barber_id=data.barberId,
            date=data.date,
            start_time=data.startTime,
            end_time=data.endTime,
            reason=data.reason,
        )

    def delete_staff_break(self, break_id: int) -> dict:
        staff_break = self.repo.get_staff_break(self.db, break_id)
        if not staff_break:
            raise HTTPException(status_code=404, detail="Staff break not found")
        self.repo.delete_staff_break(self.db, staff_break)
        return {"success": True}
