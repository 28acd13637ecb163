"""Scheduling domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from ...shared.validators import validate_date, validate_email, validate_time


class BookingCreate(BaseModel):
    """Schema for creating a new booking"""

    customerName: str
    customerPhone: str
    customerEmail: Optional[str] = None
    barberId: int
    serviceId: int
    date: str
    time: str
    notes: Optional[str] = None

    @field_validator("customerName", "customerPhone")
    @classmethod
    def validate_required_text(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be empty")
        return v

    @field_validator("customerEmail")
    @classmethod
    def validate_customer_email(cls, v):
        return validate_email(v) if v else None

    @field_validator("date")
    @classmethod
    def validate_booking_date(cls, v):
        return validate_date(v)

    @field_validator("time")
    @classmethod
    def validate_booking_time(cls, v):
        return validate_time(v)


class BookingStatusUpdate(BaseModel):
    """Schema for updating a booking's status"""

    status: Optional[str] = None


class BookingResponse(BaseModel):
    """Schema for booking response"""

    id: int
    customerName: str
    customerPhone: str
    customerEmail: Optional[str] = None
    clientId: Optional[int] = None
    barberId: int
    serviceId: int
    date: str
    time: str
    status: str
    notes: Optional[str] = None
    reminderSent: Optional[datetime] = None
    createdAt: Optional[datetime] = None


class StaffBreakCreate(BaseModel):
    """Schema for creating a staff break"""

    barberId: int
    date: Optional[str] = None  # omit for a break repeated every day
    startTime: str
    endTime: str
    reason: Optional[str] = None

    @field_validator("date")
    @classmethod
    def validate_break_date(cls, v):
        return validate_date(v) if v else None

    @field_validator("startTime", "endTime")
    @classmethod
    def validate_break_time(cls, v):
        return validate_time(v)

    @model_validator(mode="after")
    def validate_interval(self):
        if self.endTime <= self.startTime:
            raise ValueError("endTime must be after startTime")
        return self


class StaffBreakResponse(BaseModel):
    id: int
    barberId: int
    date: Optional[str] = None
    startTime: str
    endTime: str
    reason: Optional[str] = None
