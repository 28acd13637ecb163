"""
Unified Notification Service
Handles both email and SMS notifications for booking events
Ensures both channels are triggered consistently from the same event source
"""

import logging
from typing import Optional

from ..domain.scheduling.time_calculator import format_display_date
from .sms_service import SmsSender

logger = logging.getLogger(__name__)


async def send_notification(
    client_email: Optional[str],
    client_phone: Optional[str],
    client_name: str,
    notification_type: str,
    email_func,
    sms_func,
    email_kwargs: dict,
    sms_kwargs: dict,
) -> dict:
    """
    Unified notification sender that handles both email and SMS

    Args:
        client_email: Customer email address
        client_phone: Customer phone number
        client_name: Customer name for logging
        notification_type: Type of notification (for logging)
        email_func: Email function to call
        sms_func: SMS function to call, returns a success flag
        email_kwargs: Kwargs for email function
        sms_kwargs: Kwargs for SMS function

    Returns:
        Dict with email_sent and sms_sent status
    """
    result = {"email_sent": False, "sms_sent": False, "email_error": None, "sms_error": None}

    # Send Email
    if client_email:
        try:
            logger.info(f"📧 Sending {notification_type} email to {client_email}")
            await email_func(**email_kwargs)
            result["email_sent"] = True
            logger.info(f"✅ {notification_type} email sent successfully to {client_email}")
        except Exception as e:
            result["email_error"] = str(e)
            logger.error(f"❌ Failed to send {notification_type} email to {client_email}: {e}")
    else:
        logger.debug(f"⚠️ No email address for {notification_type} notification to {client_name}")

    # Send SMS
    if client_phone:
        try:
            logger.info(f"📱 Attempting to send {notification_type} SMS to {client_phone}")
            success = await sms_func(to_phone=client_phone, **sms_kwargs)
            if success:
                result["sms_sent"] = True
                logger.info(f"✅ {notification_type} SMS sent successfully to {client_phone}")
            else:
                result["sms_error"] = "SMS not sent"
                logger.debug(f"ℹ️ {notification_type} SMS skipped for {client_phone}")
        except Exception as e:
            result["sms_error"] = str(e)
            logger.error(f"❌ Failed to send {notification_type} SMS to {client_phone}: {e}")
    else:
        logger.debug(f"⚠️ No phone number for {notification_type} SMS to {client_name}")

    return result


async def send_booking_confirmation_notification(
    sms_sender: SmsSender,
    client_email: Optional[str],
    client_phone: Optional[str],
    client_name: str,
    barber_name: str,
    booking_date: str,
    booking_time: str,
) -> dict:
    """Send booking confirmation via email and SMS"""
    from ..email_service import send_booking_confirmation_email
    from .sms_service import send_booking_confirmation_sms

    display_date = format_display_date(booking_date)

    return await send_notification(
        client_email=client_email,
        client_phone=client_phone,
        client_name=client_name,
        notification_type="booking_confirmation",
        email_func=send_booking_confirmation_email,
        sms_func=send_booking_confirmation_sms,
        email_kwargs={
            "to": client_email,
            "customer_name": client_name,
            "barber_name": barber_name,
            "appointment_date": display_date,
            "appointment_time": booking_time,
        },
        sms_kwargs={
            "sender": sms_sender,
            "customer_name": client_name,
            "appointment_date": display_date,
            "appointment_time": booking_time,
            "barber_name": barber_name,
        },
    )


async def send_booking_cancellation_notification(
    sms_sender: SmsSender,
    client_email: Optional[str],
    client_phone: Optional[str],
    client_name: str,
    booking_date: str,
    booking_time: str,
) -> dict:
    """Send booking cancellation via email and SMS"""
    from ..email_service import send_booking_cancellation_email
    from .sms_service import send_booking_cancellation_sms

    display_date = format_display_date(booking_date)

    return await send_notification(
        client_email=client_email,
        client_phone=client_phone,
        client_name=client_name,
        notification_type="booking_cancellation",
        email_func=send_booking_cancellation_email,
        sms_func=send_booking_cancellation_sms,
        email_kwargs={
            "to": client_email,
            "customer_name": client_name,
            "appointment_date": display_date,
            "appointment_time": booking_time,
        },
        sms_kwargs={
            "sender": sms_sender,
            "customer_name": client_name,
            "appointment_date": display_date,
            "appointment_time": booking_time,
        },
    )
