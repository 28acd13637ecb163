import asyncio

import pytest

from barberflow.email_service import send_email, send_reminder_email
from barberflow.email_templates import appointment_reminder_template


def test_send_email_requires_resend_key():
    with pytest.raises(Exception, match="Email service not configured"):
        asyncio.run(send_email("jordan@example.com", "Hello", "<mjml></mjml>"))


def test_reminder_email_reports_failure_instead_of_raising():
    assert asyncio.run(send_reminder_email("jordan@example.com", "Reminder", "See you")) is False


def test_reminder_template_escapes_message():
    mjml = appointment_reminder_template("Reminder", "See you <b>soon</b>\nMarcus")

    assert "&lt;b&gt;soon&lt;/b&gt;<br/>Marcus" in mjml
    assert "<mj-title>Reminder</mj-title>" in mjml
