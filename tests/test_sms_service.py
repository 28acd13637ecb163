import asyncio

import httpx
import pytest

from barberflow.services.notification_service import send_notification
from barberflow.services.sms_service import (
    LoggingSmsSender,
    TwilioSmsSender,
    build_sms_sender,
    send_booking_confirmation_sms,
)
from barberflow.shared.validators import normalize_phone


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("5551234567", "+15551234567"),
        ("(555) 123-4567", "+15551234567"),
        ("+44 20 7946 0958", "+442079460958"),
        ("15551234567", "+15551234567"),
    ],
)
def test_normalize_phone(raw, expected):
    assert normalize_phone(raw) == expected


def make_sender(handler):
    return TwilioSmsSender(
        "AC123", "secret", "+15550000000", transport=httpx.MockTransport(handler)
    )


def test_twilio_sender_posts_message():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["body"] = request.content.decode()
        return httpx.Response(201, json={"sid": "SM1"})

    sent = asyncio.run(make_sender(handler).send_sms("(555) 123-4567", "See you soon"))

    assert sent is True
    assert captured["url"].endswith("/Accounts/AC123/Messages.json")
    assert "To=%2B15551234567" in captured["body"]
    assert "From=%2B15550000000" in captured["body"]


def test_twilio_sender_reports_api_errors():
    def handler(request):
        return httpx.Response(400, json={"code": 21211, "message": "Invalid 'To' Phone Number"})

    assert asyncio.run(make_sender(handler).send_sms("5551234567", "hi")) is False


def test_twilio_sender_reports_transport_errors():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    assert asyncio.run(make_sender(handler).send_sms("5551234567", "hi")) is False


def test_unconfigured_sender_only_logs():
    sender = build_sms_sender(None, None, None)

    assert isinstance(sender, LoggingSmsSender)
    assert sender.is_ready() is False
    assert asyncio.run(sender.send_sms("5551234567", "hi")) is False


def test_confirmation_sms_text():
    class RecordingSender:
        def __init__(self):
            self.messages = []

        def is_ready(self):
            return True

        async def send_sms(self, to_phone, message):
            self.messages.append((to_phone, message))
            return True

    sender = RecordingSender()
    asyncio.run(
        send_booking_confirmation_sms(
            sender, "5551234567", "Jordan", "Tuesday, June 10, 2025", "10:00", "Marcus"
        )
    )

    assert sender.messages == [
        (
            "5551234567",
            "Hi Jordan! Your appointment with Marcus is confirmed for "
            "Tuesday, June 10, 2025 at 10:00. We look forward to seeing you!",
        )
    ]


def test_send_notification_isolates_channel_failures():
    async def failing_email(**kwargs):
        raise RuntimeError("resend down")

    async def sms(to_phone, body):
        return True

    result = asyncio.run(
        send_notification(
            client_email="jordan@example.com",
            client_phone="5551234567",
            client_name="Jordan",
            notification_type="booking_confirmation",
            email_func=failing_email,
            sms_func=sms,
            email_kwargs={},
            sms_kwargs={"body": "hello"},
        )
    )

    assert result["email_sent"] is False
    assert result["email_error"] == "resend down"
    assert result["sms_sent"] is True


def test_send_notification_skips_missing_channels():
    async def never_called(**kwargs):
        raise AssertionError("should not be called")

    result = asyncio.run(
        send_notification(
            client_email=None,
            client_phone=None,
            client_name="Jordan",
            notification_type="booking_cancellation",
            email_func=never_called,
            sms_func=never_called,
            email_kwargs={},
            sms_kwargs={},
        )
    )

    assert result == {"email_sent": False, "sms_sent": False, "email_error": None, "sms_error": None}
