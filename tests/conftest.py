import os

# Must be set before barberflow.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["REMINDER_SCHEDULER_ENABLED"] = "false"
os.environ.pop("TWILIO_ACCOUNT_SID", None)
os.environ.pop("RESEND_API_KEY", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from barberflow import models  # noqa: E402
from barberflow.database import Base, SessionLocal, engine  # noqa: E402
from barberflow.main import app  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def barber(db):
    barber = models.Barber(name="Marcus")
    db.add(barber)
    db.commit()
    db.refresh(barber)
    return barber


@pytest.fixture
def haircut(db):
    service = models.Service(name="Haircut", duration=30, price=3000)
    db.add(service)
    db.commit()
    db.refresh(service)
    return service


@pytest.fixture
def long_service(db):
    service = models.Service(name="Cut & Beard", duration=60, price=5000)
    db.add(service)
    db.commit()
    db.refresh(service)
    return service


@pytest.fixture
def make_booking(db):
    def _make_booking(barber_id, service_id, date, time, status="confirmed", **extra):
        booking = models.Booking(
            customer_name=extra.pop("customer_name", "Jordan"),
            customer_phone=extra.pop("customer_phone", "5551234567"),
            barber_id=barber_id,
            service_id=service_id,
            date=date,
            time=time,
            status=status,
            **extra,
        )
        db.add(booking)
        db.commit()
        db.refresh(booking)
        return booking

    return _make_booking
