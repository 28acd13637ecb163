"""
MJML Email Templates
Customer-facing booking emails using MJML for responsive, cross-client compatibility
"""

from html import escape

from .config import BUSINESS_NAME

# App theme colors - Charcoal/Gold barbershop scheme
THEME = {
    "primary": "#b08d57",
    "background": "#f5f5f4",
    "text_primary": "#1c1917",
    "text_secondary": "#44403c",
    "text_muted": "#78716c",
    "border": "#e7e5e4",
}


def get_base_template(title: str, preview_text: str, content_sections: str) -> str:
    """Base MJML template wrapper for all emails"""
    return f"""
    <mjml>
      <mj-head>
        <mj-title>{title}</mj-title>
        <mj-preview>{preview_text}</mj-preview>
        <mj-attributes>
          <mj-all font-family="-apple-system, BlinkMacSystemFont, 'Segoe UI', 'Helvetica Neue', Arial, sans-serif" />
          <mj-text font-size="16px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="{THEME['background']}">
        <mj-section background-color="#ffffff" padding="32px 40px 0 40px">
          <mj-column>
            <mj-text font-size="20px" font-weight="700" color="{THEME['primary']}" padding="0">
              {escape(BUSINESS_NAME)}
            </mj-text>
            <mj-divider border-color="{THEME['border']}" border-width="1px" padding="24px 0 32px 0" />
          </mj-column>
        </mj-section>

        <!-- Main Content -->
        <mj-section background-color="#ffffff" padding="0 40px 48px 40px">
          <mj-column>
            <mj-text font-size="24px" font-weight="600" color="{THEME['text_primary']}" line-height="1.3" padding="0 0 16px 0">
              {title}
            </mj-text>

            {content_sections}
          </mj-column>
        </mj-section>

        <!-- Footer -->
        <mj-section padding="32px 20px">
          <mj-column>
            <mj-text align="center" font-size="13px" color="#a8a29e" padding="0">
              {escape(BUSINESS_NAME)} - Professional Barbershop Services
            </mj-text>
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """


def appointment_reminder_template(subject: str, message: str) -> str:
    """Reminder email wrapping an already rendered reminder message"""
    body = escape(message).replace("\n", "<br/>")
    content = f"""
    <mj-text>
      {body}
    </mj-text>
    """

    return get_base_template(
        title=escape(subject),
        preview_text=escape(subject),
        content_sections=content,
    )


def booking_confirmation_template(
    customer_name: str,
    barber_name: str,
    appointment_date: str,
    appointment_time: str,
) -> str:
    """Booking confirmed email for the customer"""
    content = f"""
    <mj-text>
      Hi {escape(customer_name)},
    </mj-text>

    <mj-text>
      Your appointment with <strong>{escape(barber_name)}</strong> is confirmed.
    </mj-text>

    <mj-text font-size="14px" color="{THEME['text_muted']}" padding="20px 0">
      📅 {escape(appointment_date)} at {escape(appointment_time)}
    </mj-text>

    <mj-text>
      We look forward to seeing you!
    </mj-text>
    """

    return get_base_template(
        title="Appointment Confirmed",
        preview_text=f"Your appointment on {appointment_date} is confirmed",
        content_sections=content,
    )


def booking_cancellation_template(
    customer_name: str,
    appointment_date: str,
    appointment_time: str,
) -> str:
    """Booking cancelled email for the customer"""
    content = f"""
    <mj-text>
      Hi {escape(customer_name)},
    </mj-text>

    <mj-text>
      Your appointment on <strong>{escape(appointment_date)}</strong> at
      <strong>{escape(appointment_time)}</strong> has been cancelled.
    </mj-text>

    <mj-text>
      Contact us any time to reschedule.
    </mj-text>
    """

    return get_base_template(
        title="Appointment Cancelled",
        preview_text=f"Your appointment on {appointment_date} has been cancelled",
        content_sections=content,
    )
