"""Scheduling router - FastAPI endpoints for availability, bookings and staff breaks"""

import logging
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...deps import get_sms_sender
from ...models import Booking, StaffBreak
from ...services.notification_service import (
    send_booking_cancellation_notification,
    send_booking_confirmation_notification,
)
from ...services.sms_service import SmsSender
from .availability_service import AvailabilityService
from .booking_service import VALID_STATUSES, BookingService, parse_date_param
from .schemas import (
    BookingCreate,
    BookingResponse,
    BookingStatusUpdate,
    StaffBreakCreate,
    StaffBreakResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Scheduling"])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


def to_booking_response(b: Booking) -> BookingResponse:
    return BookingResponse(
        id=b.id,
        customerName=b.customer_name,
        customerPhone=b.customer_phone,
        customerEmail=b.customer_email,
        clientId=b.client_id,
        barberId=b.barber_id,
        serviceId=b.service_id,
        date=b.date,
        time=b.time,
        status=b.status,
        notes=b.notes,
        reminderSent=b.reminder_sent,
        createdAt=b.created_at,
    )


def to_staff_break_response(s: StaffBreak) -> StaffBreakResponse:
    return StaffBreakResponse(
        id=s.id,
        barberId=s.barber_id,
        date=s.date,
        startTime=s.start_time,
        endTime=s.end_time,
        reason=s.reason,
    )


# ============================================================================
# AVAILABILITY
# ============================================================================


@router.get("/availability", response_model=list[str])
async def get_availability(
    barber_id: Optional[int] = Query(None, alias="barberId"),
    date: Optional[str] = Query(None),
    service_id: Optional[int] = Query(None, alias="serviceId"),
    db: Session = Depends(get_db),
):
    """Bookable start times for a barber on a date, in ascending order"""
    if barber_id is None or not date:
        raise HTTPException(status_code=400, detail="barberId and date are required")

    date = parse_date_param(date)
    return AvailabilityService(db).get_available_slots(barber_id, date, service_id)


# ============================================================================
# BOOKINGS
# ============================================================================


@router.get("/bookings", response_model=list[BookingResponse])
async def get_bookings(
    status: Optional[str] = Query(None),
    service: BookingService = Depends(get_booking_service),
):
    """Get all bookings, optionally filtered by status"""
    return [to_booking_response(b) for b in service.get_bookings(status)]


@router.get("/bookings/date/{date}", response_model=list[BookingResponse])
async def get_bookings_by_date(date: str, service: BookingService = Depends(get_booking_service)):
    return [to_booking_response(b) for b in service.get_bookings_by_date(date)]


@router.get("/bookings/barber/{barber_id}/date/{date}", response_model=list[BookingResponse])
async def get_bookings_by_barber_and_date(
    barber_id: int, date: str, service: BookingService = Depends(get_booking_service)
):
    return [to_booking_response(b) for b in service.get_bookings_by_barber_and_date(barber_id, date)]


@router.post("/bookings", response_model=BookingResponse, status_code=201)
async def create_booking(
    data: BookingCreate,
    background_tasks: BackgroundTasks,
    service: BookingService = Depends(get_booking_service),
    sms_sender: SmsSender = Depends(get_sms_sender),
):
    """Create a booking and notify the customer"""
    booking = service.create_booking(data)
    barber_name = booking.barber.name if booking.barber else "your barber"

    background_tasks.add_task(
        send_booking_confirmation_notification,
        sms_sender=sms_sender,
        client_email=booking.customer_email,
        client_phone=booking.customer_phone,
        client_name=booking.customer_name,
        barber_name=barber_name,
        booking_date=booking.date,
        booking_time=booking.time,
    )
    return to_booking_response(booking)


@router.patch("/bookings/{booking_id}", response_model=BookingResponse)
async def update_booking_status(
    booking_id: int,
    data: BookingStatusUpdate,
    background_tasks: BackgroundTasks,
    service: BookingService = Depends(get_booking_service),
    sms_sender: SmsSender = Depends(get_sms_sender),
):
    """Update booking status (confirmed, completed, cancelled)"""
    previous_status = service.get_booking(booking_id).status if data.status in VALID_STATUSES else None
    booking = service.update_status(booking_id, data.status)

    if booking.status == "cancelled" and previous_status != "cancelled":
        background_tasks.add_task(
            send_booking_cancellation_notification,
            sms_sender=sms_sender,
            client_email=booking.customer_email,
            client_phone=booking.customer_phone,
            client_name=booking.customer_name,
            booking_date=booking.date,
            booking_time=booking.time,
        )
    return to_booking_response(booking)


@router.delete("/bookings/{booking_id}")
async def delete_booking(booking_id: int, service: BookingService = Depends(get_booking_service)):
    return service.delete_booking(booking_id)


# ============================================================================
# STAFF BREAKS
# ============================================================================


@router.get("/staff-breaks", response_model=list[StaffBreakResponse])
async def get_staff_breaks(
    barber_id: Optional[int] = Query(None, alias="barberId"),
    date: Optional[str] = Query(None),
    service: BookingService = Depends(get_booking_service),
):
    return [to_staff_break_response(s) for s in service.get_staff_breaks(barber_id, date)]


@router.post("/staff-breaks", response_model=StaffBreakResponse, status_code=201)
async def create_staff_break(
    data: StaffBreakCreate, service: BookingService = Depends(get_booking_service)
):
    return to_staff_break_response(service.create_staff_break(data))


@router.delete("/staff-breaks/{break_id}")
async def delete_staff_break(break_id: int, service: BookingService = Depends(get_booking_service)):
    return service.delete_staff_break(break_id)
