"""Reminder domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator, model_validator

ReminderType = Literal["sms", "email"]


class ReminderTemplateCreate(BaseModel):
    """
    Schema for creating a reminder template.

    message may use {customerName}, {date}, {time} and {barberName}.
    """

    name: str
    type: ReminderType
    triggerHours: int
    message: str
    subject: Optional[str] = None
    isActive: bool = True

    @field_validator("triggerHours")
    @classmethod
    def validate_trigger_hours(cls, v):
        if v <= 0:
            raise ValueError("triggerHours must be positive")
        return v

    @field_validator("message")
    @classmethod
    def validate_message(cls, v):
        if not v.strip():
            raise ValueError("Message cannot be empty")
        return v


class ReminderTemplateUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[ReminderType] = None
    triggerHours: Optional[int] = None
    message: Optional[str] = None
    subject: Optional[str] = None
    isActive: Optional[bool] = None

    @field_validator("triggerHours")
    @classmethod
    def validate_trigger_hours(cls, v):
        if v is not None and v <= 0:
            raise ValueError("triggerHours must be positive")
        return v

    @model_validator(mode="after")
    def validate_required_not_cleared(self):
        # Only subject may be explicitly set to null
        for field in ("name", "type", "triggerHours", "message", "isActive"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class ReminderTemplateResponse(BaseModel):
    id: int
    name: str
    type: str
    triggerHours: int
    message: str
    subject: Optional[str] = None
    isActive: bool


class ReminderLogResponse(BaseModel):
    id: int
    bookingId: int
    templateId: int
    type: str
    recipient: str
    status: str
    sentAt: Optional[datetime] = None
    errorMessage: Optional[str] = None
    createdAt: Optional[datetime] = None


class SchedulerStatusResponse(BaseModel):
    isRunning: bool
    checkIntervalMs: int
    checkIntervalMinutes: float
    cycleInProgress: bool
    lastCheckAt: Optional[datetime] = None
    nextRunAt: Optional[datetime] = None
    lastSummary: Optional[dict] = None
