"""Scheduling repository - Database operations for bookings, breaks and clients"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...models import Barber, Booking, Client, Service, StaffBreak


class SchedulingRepository:
    """Repository for booking and availability database operations"""

    # Bookings
    @staticmethod
    def get_bookings(db: Session, status: Optional[str] = None) -> list[Booking]:
        """Get all bookings, optionally filtered by status"""
        query = db.query(Booking)
        if status:
            query = query.filter(Booking.status == status)
        return query.order_by(Booking.date.asc(), Booking.time.asc()).all()

    @staticmethod
    def get_booking(db: Session, booking_id: int) -> Optional[Booking]:
        return db.query(Booking).filter(Booking.id == booking_id).first()

    @staticmethod
    def get_bookings_by_date(db: Session, date: str) -> list[Booking]:
        return db.query(Booking).filter(Booking.date == date).order_by(Booking.time.asc()).all()

    @staticmethod
    def get_bookings_by_barber_and_date(db: Session, barber_id: int, date: str) -> list[Booking]:
        """Get all bookings for a barber on a date"""
        return (
            db.query(Booking)
            .filter(Booking.barber_id == barber_id, Booking.date == date)
            .order_by(Booking.time.asc())
            .all()
        )

    @staticmethod
    def create_booking(db: Session, **booking_data) -> Booking:
        booking = Booking(**booking_data)
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def update_booking(db: Session, booking: Booking, **updates) -> Booking:
        """Update a booking with provided fields"""
        for key, value in updates.items():
            if hasattr(booking, key):
                setattr(booking, key, value)

        db.commit()
        db.refresh(booking)
        return booking

    @staticmethod
    def delete_booking(db: Session, booking: Booking) -> None:
        db.delete(booking)
        db.commit()

    # Staff breaks
    @staticmethod
    def get_staff_breaks(db: Session) -> list[StaffBreak]:
        return db.query(StaffBreak).order_by(StaffBreak.id.asc()).all()

    @staticmethod
    def get_staff_breaks_by_barber(
        db: Session, barber_id: int, date: Optional[str] = None
    ) -> list[StaffBreak]:
        """
        Get breaks for a barber. With a date, returns the breaks for that day
        together with recurring breaks (stored without a date).
        """
        query = db.query(StaffBreak).filter(StaffBreak.barber_id == barber_id)
        if date:
            query = query.filter(or_(StaffBreak.date == date, StaffBreak.date.is_(None)))
        return query.order_by(StaffBreak.start_time.asc()).all()

    @staticmethod
    def get_staff_break(db: Session, break_id: int) -> Optional[StaffBreak]:
        return db.query(StaffBreak).filter(StaffBreak.id == break_id).first()

    @staticmethod
    def create_staff_break(db: Session, **break_data) -> StaffBreak:
        staff_break = StaffBreak(**break_data)
        db.add(staff_break)
        db.commit()
        db.refresh(staff_break)
        return staff_break

    @staticmethod
    def delete_staff_break(db: Session, staff_break: StaffBreak) -> None:
        db.delete(staff_break)
        db.commit()

    # Lookups
    @staticmethod
    def get_service(db: Session, service_id: int) -> Optional[Service]:
        return db.query(Service).filter(Service.id == service_id).first()

    @staticmethod
    def get_barber(db: Session, barber_id: int) -> Optional[Barber]:
        return db.query(Barber).filter(Barber.id == barber_id).first()

    # Clients
    @staticmethod
    def get_client_by_phone(db: Session, phone: str) -> Optional[Client]:
        return db.query(Client).filter(Client.phone == phone).first()

    @staticmethod
    def create_client(db: Session, **client_data) -> Client:
        client = Client(**client_data)
        db.add(client)
        db.commit()
        db.refresh(client)
        return client
