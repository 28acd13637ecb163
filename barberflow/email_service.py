"""
Email Service using Resend
Provides booking email functionality using MJML templates for responsive design
"""

import asyncio
import logging
from typing import Optional, Union

import resend
from mjml import mjml2html as mjml_to_html

from .config import EMAIL_FROM_ADDRESS, EMAIL_SEND_TIMEOUT, RESEND_API_KEY
from .email_templates import (
    appointment_reminder_template,
    booking_cancellation_template,
    booking_confirmation_template,
)

logger = logging.getLogger(__name__)

resend.api_key = RESEND_API_KEY


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML template to production-ready HTML"""
    try:
        result = mjml_to_html(mjml_content)
        # mjml_to_html returns a dict with 'html' and 'errors' keys
        if isinstance(result, dict):
            if result.get("errors"):
                logger.warning(f"MJML compilation warnings: {result['errors']}")
            return result.get("html", "")
        return str(result)
    except Exception as e:
        logger.error(f"MJML compilation error: {e}")
        raise Exception(f"Failed to compile MJML template: {str(e)}") from e


async def send_email(
    to: Union[str, list[str]],
    subject: str,
    mjml_content: str,
    text_content: Optional[str] = None,
    from_address: Optional[str] = None,
) -> dict:
    """
    Send an email through Resend

    Args:
        to: Recipient email(s)
        subject: Email subject line
        mjml_content: MJML template content (will be compiled to HTML)
        text_content: Optional plain text alternative
        from_address: Optional custom from address

    Returns:
        Send response dict
    """
    if not RESEND_API_KEY:
        logger.error("❌ No email service configured - RESEND_API_KEY missing")
        raise Exception("Email service not configured")

    html_content = compile_mjml_to_html(mjml_content)
    recipients = [to] if isinstance(to, str) else to

    email_data = {
        "from": from_address or EMAIL_FROM_ADDRESS,
        "to": recipients,
        "subject": subject,
        "html": html_content,
    }
    if text_content:
        email_data["text"] = text_content

    try:
        logger.info(f"📧 Sending email via Resend to: {to}")
        response = await asyncio.wait_for(
            asyncio.to_thread(resend.Emails.send, email_data), timeout=EMAIL_SEND_TIMEOUT
        )
        logger.info(f"✅ Email sent successfully via Resend: {response}")
        return response
    except asyncio.TimeoutError as e:
        logger.error(f"❌ Email send to {recipients} timed out after {EMAIL_SEND_TIMEOUT}s")
        raise Exception("Email send timed out") from e
    except Exception as e:
        logger.error(f"❌ Email send error to {recipients}: {e}")
        raise Exception(f"Failed to send email: {str(e)}") from e


async def send_reminder_email(to: str, subject: str, message: str) -> bool:
    """Send an appointment reminder, returning whether it went out"""
    try:
        await send_email(
            to=to,
            subject=subject,
            mjml_content=appointment_reminder_template(subject, message),
            text_content=message,
        )
        return True
    except Exception as e:
        logger.warning(f"⚠️ Reminder email to {to} not sent: {e}")
        return False


async def send_booking_confirmation_email(
    to: str,
    customer_name: str,
    barber_name: str,
    appointment_date: str,
    appointment_time: str,
) -> dict:
    """Send booking confirmation to the customer"""
    return await send_email(
        to=to,
        subject=f"Appointment confirmed for {appointment_date}",
        mjml_content=booking_confirmation_template(
            customer_name=customer_name,
            barber_name=barber_name,
            appointment_date=appointment_date,
            appointment_time=appointment_time,
        ),
    )


async def send_booking_cancellation_email(
    to: str,
    customer_name: str,
    appointment_date: str,
    appointment_time: str,
) -> dict:
    """Send booking cancellation to the customer"""
    return await send_email(
        to=to,
        subject=f"Appointment on {appointment_date} cancelled",
        mjml_content=booking_cancellation_template(
            customer_name=customer_name,
            appointment_date=appointment_date,
            appointment_time=appointment_time,
        ),
    )
