from barberflow import models
from barberflow.domain.scheduling.availability_service import AvailabilityService

FULL_DAY = [
    "09:00", "09:30", "10:00", "10:30", "11:00", "11:30",
    "12:00", "12:30", "13:00", "13:30", "14:00", "14:30",
    "15:00", "15:30", "16:00", "16:30", "17:00", "17:30",
]


def add_break(db, barber_id, start, end, date="2025-06-10"):
    staff_break = models.StaffBreak(barber_id=barber_id, date=date, start_time=start, end_time=end)
    db.add(staff_break)
    db.commit()
    return staff_break


def test_empty_day_returns_full_grid(db, barber, haircut):
    slots = AvailabilityService(db).get_available_slots(barber.id, "2025-06-10", haircut.id)
    assert slots == FULL_DAY


def test_booking_and_break_are_excluded(db, barber, haircut, make_booking):
    make_booking(barber.id, haircut.id, "2025-06-10", "10:00")
    add_break(db, barber.id, "13:00", "13:30")

    slots = AvailabilityService(db).get_available_slots(barber.id, "2025-06-10", haircut.id)

    assert "10:00" not in slots
    assert "13:00" not in slots
    assert "09:30" in slots
    assert "10:30" in slots
    assert "13:30" in slots
    assert len(slots) == 16


def test_long_service_needs_consecutive_free_slots(db, barber, haircut, long_service, make_booking):
    make_booking(barber.id, haircut.id, "2025-06-10", "10:00")

    slots = AvailabilityService(db).get_available_slots(barber.id, "2025-06-10", long_service.id)

    # 09:30 would run into the 10:00 booking, 17:30 would run past closing
    assert "09:30" not in slots
    assert "10:00" not in slots
    assert "17:30" not in slots
    assert "09:00" in slots
    assert "10:30" in slots
    assert "17:00" in slots


def test_long_booking_blocks_every_slot_it_covers(db, barber, haircut, long_service, make_booking):
    make_booking(barber.id, long_service.id, "2025-06-10", "11:00")

    slots = AvailabilityService(db).get_available_slots(barber.id, "2025-06-10", haircut.id)

    assert "11:00" not in slots
    assert "11:30" not in slots
    assert "12:00" in slots


def test_cancelled_bookings_do_not_block(db, barber, haircut, make_booking):
    make_booking(barber.id, haircut.id, "2025-06-10", "10:00", status="cancelled")

    slots = AvailabilityService(db).get_available_slots(barber.id, "2025-06-10", haircut.id)
    assert "10:00" in slots


def test_other_barbers_and_days_do_not_block(db, barber, haircut, make_booking):
    other = models.Barber(name="Dee")
    db.add(other)
    db.commit()
    make_booking(other.id, haircut.id, "2025-06-10", "10:00")
    make_booking(barber.id, haircut.id, "2025-06-11", "10:00")

    slots = AvailabilityService(db).get_available_slots(barber.id, "2025-06-10", haircut.id)
    assert slots == FULL_DAY


def test_recurring_break_applies_to_every_day(db, barber, haircut):
    add_break(db, barber.id, "12:00", "13:00", date=None)

    for day in ("2025-06-10", "2025-06-11"):
        slots = AvailabilityService(db).get_available_slots(barber.id, day, haircut.id)
        assert "12:00" not in slots
        assert "12:30" not in slots
        assert "13:00" in slots


def test_unaligned_break_blocks_touched_slots(db, barber, haircut):
    add_break(db, barber.id, "14:15", "14:45")

    slots = AvailabilityService(db).get_available_slots(barber.id, "2025-06-10", haircut.id)
    assert "14:00" not in slots
    assert "14:30" not in slots
    assert "15:00" in slots


def test_unknown_service_uses_default_duration(db, barber):
    slots = AvailabilityService(db).get_available_slots(barber.id, "2025-06-10", 999)
    assert slots == FULL_DAY


def test_availability_is_stable_between_calls(db, barber, haircut, make_booking):
    make_booking(barber.id, haircut.id, "2025-06-10", "15:00")
    service = AvailabilityService(db)

    first = service.get_available_slots(barber.id, "2025-06-10", haircut.id)
    second = service.get_available_slots(barber.id, "2025-06-10", haircut.id)
    assert first == second


def test_is_slot_available_can_ignore_a_booking(db, barber, haircut, make_booking):
    booking = make_booking(barber.id, haircut.id, "2025-06-10", "10:00")
    service = AvailabilityService(db)

    assert not service.is_slot_available(barber.id, "2025-06-10", "10:00", haircut.id)
    assert service.is_slot_available(
        barber.id, "2025-06-10", "10:00", haircut.id, exclude_booking_id=booking.id
    )


def test_custom_business_hours(db, barber, haircut):
    slots = AvailabilityService(db, open_time="10:00", close_time="12:00").get_available_slots(
        barber.id, "2025-06-10", haircut.id
    )
    assert slots == ["10:00", "10:30", "11:00", "11:30"]


def test_availability_endpoint(client, barber, haircut, make_booking):
    make_booking(barber.id, haircut.id, "2025-06-10", "10:00")

    response = client.get(
        "/api/availability",
        params={"barberId": barber.id, "date": "2025-06-10", "serviceId": haircut.id},
    )

    assert response.status_code == 200
    assert "10:00" not in response.json()
    assert response.json()[0] == "09:00"


def test_availability_requires_barber_and_date(client):
    response = client.get("/api/availability", params={"date": "2025-06-10"})
    assert response.status_code == 400
    assert response.json()["detail"] == "barberId and date are required"

    response = client.get("/api/availability", params={"barberId": 1})
    assert response.status_code == 400


def test_availability_rejects_bad_date(client, barber):
    response = client.get("/api/availability", params={"barberId": barber.id, "date": "06/10/2025"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid date format. Expected YYYY-MM-DD"
