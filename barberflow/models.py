from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


class Barber(Base):
    __tablename__ = "barbers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    title = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    phone = Column(String(50), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    bookings = relationship("Booking", back_populates="barber")
    staff_breaks = relationship("StaffBreak", back_populates="barber", cascade="all, delete-orphan")


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    duration = Column(Integer, nullable=False)  # in minutes
    price = Column(Integer, nullable=False, default=0)  # in cents
    created_at = Column(DateTime, server_default=func.now())


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    phone = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    bookings = relationship("Booking", back_populates="client")


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    customer_name = Column(String(255), nullable=False)
    customer_phone = Column(String(50), nullable=False)
    customer_email = Column(String(255), nullable=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=True)
    barber_id = Column(Integer, ForeignKey("barbers.id"), nullable=False, index=True)
    service_id = Column(Integer, ForeignKey("services.id"), nullable=False)
    date = Column(String(10), nullable=False, index=True)  # YYYY-MM-DD format
    time = Column(String(5), nullable=False)  # HH:MM format
    status = Column(String(20), nullable=False, default="confirmed")  # confirmed, completed, cancelled
    notes = Column(Text, nullable=True)
    reminder_sent = Column(DateTime, nullable=True)  # last successful reminder
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    barber = relationship("Barber", back_populates="bookings")
    service = relationship("Service")
    client = relationship("Client", back_populates="bookings")
    reminder_logs = relationship("ReminderLog", back_populates="booking", cascade="all, delete-orphan")


class StaffBreak(Base):
    __tablename__ = "staff_breaks"

    id = Column(Integer, primary_key=True, index=True)
    barber_id = Column(Integer, ForeignKey("barbers.id"), nullable=False, index=True)
    date = Column(String(10), nullable=True)  # YYYY-MM-DD, NULL means every day
    start_time = Column(String(5), nullable=False)  # HH:MM
    end_time = Column(String(5), nullable=False)  # HH:MM (exclusive)
    reason = Column(String(255), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    barber = relationship("Barber", back_populates="staff_breaks")


class ReminderTemplate(Base):
    __tablename__ = "reminder_templates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    type = Column(String(10), nullable=False)  # sms, email
    trigger_hours = Column(Integer, nullable=False)  # hours before the appointment
    message = Column(Text, nullable=False)  # {customerName} {date} {time} {barberName}
    subject = Column(String(255), nullable=True)  # email only
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class ReminderLog(Base):
    """One row per reminder attempt, written as pending before dispatch"""

    __tablename__ = "reminder_logs"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), nullable=False, index=True)
    template_id = Column(Integer, ForeignKey("reminder_templates.id"), nullable=False)
    type = Column(String(10), nullable=False)
    recipient = Column(String(255), nullable=False, default="")
    status = Column(String(20), nullable=False)  # pending, sent, failed
    sent_at = Column(DateTime, nullable=True)
    error_message = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    booking = relationship("Booking", back_populates="reminder_logs")
    template = relationship("ReminderTemplate")

    # At most one claimed or successful send per (booking, template)
    __table_args__ = (
        Index(
            "uq_reminder_logs_claim",
            "booking_id",
            "template_id",
            unique=True,
            postgresql_where=text("status IN ('pending', 'sent')"),
            sqlite_where=text("status IN ('pending', 'sent')"),
        ),
    )
