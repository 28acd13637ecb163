"""
SMS Service
Sends booking reminders and notifications through Twilio, or only logs them
when Twilio is not configured
"""

import logging
from typing import Optional, Protocol

import httpx

from ..config import SMS_SEND_TIMEOUT, TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, TWILIO_PHONE_NUMBER
from ..shared.validators import normalize_phone

logger = logging.getLogger(__name__)

TWILIO_API_BASE = "https://api.twilio.com/2010-04-01"


class SmsSender(Protocol):
    async def send_sms(self, to_phone: str, message: str) -> bool: ...

    def is_ready(self) -> bool: ...


class TwilioSmsSender:
    """Send SMS via the Twilio REST API"""

    def __init__(
        self,
        account_sid: str,
        auth_token: str,
        from_number: str,
        timeout: float = SMS_SEND_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number
        self.timeout = timeout
        self._transport = transport

    def is_ready(self) -> bool:
        return True

    async def send_sms(self, to_phone: str, message: str) -> bool:
        """
        Send an SMS message

        Args:
            to_phone: Recipient phone number in any common format
            message: SMS message content

        Returns:
            True when Twilio accepted the message
        """
        if not to_phone:
            logger.debug("No phone number provided")
            return False

        formatted_phone = normalize_phone(to_phone)
        data = {"To": formatted_phone, "From": self.from_number, "Body": message}

        try:
            logger.info(f"🚀 Sending SMS to Twilio API for {formatted_phone}")
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    f"{TWILIO_API_BASE}/Accounts/{self.account_sid}/Messages.json",
                    auth=(self.account_sid, self.auth_token),
                    data=data,
                    timeout=self.timeout,
                )

            if response.status_code in [200, 201]:
                message_sid = response.json().get("sid")
                logger.info(f"✅ SMS sent to {formatted_phone} (SID: {message_sid})")
                return True

            try:
                error_data = response.json()
            except ValueError:
                error_data = {}
            error_message = error_data.get("message", "Unknown error")
            error_code = error_data.get("code")
            logger.error(f"❌ Twilio API error [{error_code}]: {error_message}")
            return False

        except httpx.HTTPError as e:
            logger.error(f"❌ Failed to send SMS to {formatted_phone}: {str(e)}")
            return False


class LoggingSmsSender:
    """Stand-in used when Twilio credentials are missing; nothing is sent"""

    def is_ready(self) -> bool:
        return False

    async def send_sms(self, to_phone: str, message: str) -> bool:
        logger.info(f"[SMS] Would send to {to_phone}: {message}")
        logger.info("[SMS] Twilio not configured - message not sent")
        return False


def build_sms_sender(
    account_sid: Optional[str] = TWILIO_ACCOUNT_SID,
    auth_token: Optional[str] = TWILIO_AUTH_TOKEN,
    from_number: Optional[str] = TWILIO_PHONE_NUMBER,
) -> SmsSender:
    """Pick the Twilio sender when fully configured, otherwise the logging stub"""
    if account_sid and auth_token and from_number:
        logger.info("✅ SMS Service initialized with Twilio")
        return TwilioSmsSender(account_sid, auth_token, from_number)

    logger.warning(
        "⚠️ Twilio credentials not configured. SMS features will be disabled. "
        "Required env vars: TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, TWILIO_PHONE_NUMBER"
    )
    return LoggingSmsSender()


# SMS Template Functions
async def send_booking_confirmation_sms(
    sender: SmsSender,
    to_phone: str,
    customer_name: str,
    appointment_date: str,
    appointment_time: str,
    barber_name: str,
) -> bool:
    """Send SMS when a booking is created"""
    message = (
        f"Hi {customer_name}! Your appointment with {barber_name} is confirmed for "
        f"{appointment_date} at {appointment_time}. We look forward to seeing you!"
    )
    return await sender.send_sms(to_phone, message)


async def send_booking_cancellation_sms(
    sender: SmsSender,
    to_phone: str,
    customer_name: str,
    appointment_date: str,
    appointment_time: str,
) -> bool:
    """Send SMS when a booking is cancelled"""
    message = (
        f"Hi {customer_name}! Your appointment on {appointment_date} at {appointment_time} "
        f"has been cancelled. Contact us to reschedule."
    )
    return await sender.send_sms(to_phone, message)
