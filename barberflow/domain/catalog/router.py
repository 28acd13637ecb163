"""Catalog router - Barbers and services offered by the shop"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from .repository import CatalogRepository
from .schemas import BarberCreate, BarberResponse, ServiceCreate, ServiceResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Catalog"])


@router.get("/barbers", response_model=list[BarberResponse])
async def get_barbers(db: Session = Depends(get_db)):
    return [
        BarberResponse(
            id=b.id, name=b.name, title=b.title, bio=b.bio, phone=b.phone, isActive=b.is_active
        )
        for b in CatalogRepository.get_barbers(db)
    ]


@router.post("/barbers", response_model=BarberResponse, status_code=201)
async def create_barber(data: BarberCreate, db: Session = Depends(get_db)):
    barber = CatalogRepository.create_barber(
        db, name=data.name, title=data.title, bio=data.bio, phone=data.phone
    )
    logger.info(f"✅ Barber created: {barber.id} ({barber.name})")
    return BarberResponse(
        id=barber.id,
        name=barber.name,
        title=barber.title,
        bio=barber.bio,
        phone=barber.phone,
        isActive=barber.is_active,
    )


@router.get("/services", response_model=list[ServiceResponse])
async def get_services(db: Session = Depends(get_db)):
    return [
        ServiceResponse(id=s.id, name=s.name, duration=s.duration, price=s.price)
        for s in CatalogRepository.get_services(db)
    ]


@router.post("/services", response_model=ServiceResponse, status_code=201)
async def create_service(data: ServiceCreate, db: Session = Depends(get_db)):
    service = CatalogRepository.create_service(
        db, name=data.name, duration=data.duration, price=data.price
    )
    logger.info(f"✅ Service created: {service.id} ({service.name}, {service.duration} min)")
    return ServiceResponse(
        id=service.id, name=service.name, duration=service.duration, price=service.price
    )
