"""Catalog domain schemas - Barbers and services"""

from typing import Optional

from pydantic import BaseModel, field_validator


class BarberCreate(BaseModel):
    name: str
    title: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = None


class BarberResponse(BaseModel):
    id: int
    name: str
    title: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = None
    isActive: bool = True


class ServiceCreate(BaseModel):
    name: str
    duration: int  # minutes
    price: int = 0  # cents

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v):
        if v <= 0:
            raise ValueError("Duration must be a positive number of minutes")
        return v

    @field_validator("price")
    @classmethod
    def validate_price(cls, v):
        if v < 0:
            raise ValueError("Price cannot be negative")
        return v


class ServiceResponse(BaseModel):
    id: int
    name: str
    duration: int
    price: int
