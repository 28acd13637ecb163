from barberflow import models

TEMPLATE = {
    "name": "Day before",
    "type": "sms",
    "triggerHours": 24,
    "message": "Hi {customerName}, see you tomorrow at {time}!",
}


def test_template_crud(client):
    created = client.post("/api/reminder-templates", json=TEMPLATE)
    assert created.status_code == 201
    template = created.json()
    assert template["isActive"] is True
    assert template["triggerHours"] == 24

    updated = client.patch(
        f"/api/reminder-templates/{template['id']}", json={"isActive": False, "triggerHours": 2}
    )
    assert updated.status_code == 200
    assert updated.json()["isActive"] is False
    assert updated.json()["triggerHours"] == 2
    assert updated.json()["message"] == TEMPLATE["message"]

    assert len(client.get("/api/reminder-templates").json()) == 1
    assert client.delete(f"/api/reminder-templates/{template['id']}").json() == {"success": True}
    assert client.get("/api/reminder-templates").json() == []


def test_template_validation(client):
    assert client.post("/api/reminder-templates", json={**TEMPLATE, "type": "fax"}).status_code == 422
    assert client.post("/api/reminder-templates", json={**TEMPLATE, "triggerHours": 0}).status_code == 422
    assert client.post("/api/reminder-templates", json={**TEMPLATE, "message": " "}).status_code == 422


def test_template_not_found(client):
    assert client.patch("/api/reminder-templates/999", json={"name": "x"}).status_code == 404
    assert client.delete("/api/reminder-templates/999").status_code == 404


def test_template_with_history_cannot_be_deleted(client, db, barber, haircut, make_booking):
    template_id = client.post("/api/reminder-templates", json=TEMPLATE).json()["id"]
    booking = make_booking(barber.id, haircut.id, "2025-06-10", "10:00")
    db.add(
        models.ReminderLog(
            booking_id=booking.id,
            template_id=template_id,
            type="sms",
            recipient="5551234567",
            status="failed",
            error_message="Failed to send reminder",
        )
    )
    db.commit()

    response = client.delete(f"/api/reminder-templates/{template_id}")
    assert response.status_code == 409

    logs = client.get("/api/reminder-logs", params={"bookingId": booking.id}).json()
    assert len(logs) == 1
    assert logs[0]["status"] == "failed"
    assert logs[0]["templateId"] == template_id
    assert client.get("/api/reminder-logs", params={"bookingId": booking.id + 1}).json() == []


def test_scheduler_status_and_manual_trigger(client):
    status = client.get("/api/reminders/status").json()
    assert status["isRunning"] is False
    assert status["checkIntervalMinutes"] == 5
    assert status["lastCheckAt"] is None

    summary = client.post("/api/reminders/trigger").json()
    assert summary["ran"] is True
    assert summary["sent"] == 0

    assert client.get("/api/reminders/status").json()["lastCheckAt"] is not None


def test_template_subject_can_be_cleared(client):
    created = client.post(
        "/api/reminder-templates",
        json={**TEMPLATE, "type": "email", "subject": "See you soon, {customerName}"},
    ).json()
    assert created["subject"] == "See you soon, {customerName}"

    cleared = client.patch(f"/api/reminder-templates/{created['id']}", json={"subject": None})
    assert cleared.status_code == 200
    assert cleared.json()["subject"] is None
    assert cleared.json()["name"] == TEMPLATE["name"]

    renamed = client.patch(f"/api/reminder-templates/{created['id']}", json={"name": "Email reminder"})
    assert renamed.json()["subject"] is None

    assert client.patch(f"/api/reminder-templates/{created['id']}", json={"name": None}).status_code == 422
