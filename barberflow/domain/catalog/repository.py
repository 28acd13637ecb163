"""Catalog repository - Database operations for barbers and services"""

from sqlalchemy.orm import Session

from ...models import Barber, Service


class CatalogRepository:
    @staticmethod
    def get_barbers(db: Session, active_only: bool = True) -> list[Barber]:
        query = db.query(Barber)
        if active_only:
            query = query.filter(Barber.is_active.is_(True))
        return query.order_by(Barber.id.asc()).all()

    @staticmethod
    def create_barber(db: Session, **barber_data) -> Barber:
        barber = Barber(**barber_data)
        db.add(barber)
        db.commit()
        db.refresh(barber)
        return barber

    @staticmethod
    def get_services(db: Session) -> list[Service]:
        return db.query(Service).order_by(Service.id.asc()).all()

    @staticmethod
    def create_service(db: Session, **service_data) -> Service:
        service = Service(**service_data)
        db.add(service)
        db.commit()
        db.refresh(service)
        return service
