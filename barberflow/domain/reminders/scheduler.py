"""
Reminder Scheduler
Periodically sends SMS and email reminders for upcoming appointments
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from sqlalchemy.orm import Session

from ...config import REMINDER_CHECK_INTERVAL_MINUTES
from ...database import SessionLocal
from ...email_service import send_reminder_email
from ...models import Booking, ReminderTemplate
from ...services.sms_service import LoggingSmsSender, SmsSender
from ..scheduling.repository import SchedulingRepository
from ..scheduling.time_calculator import format_display_date, is_reminder_due, parse_booking_datetime
from .repository import ReminderRepository

logger = logging.getLogger(__name__)

JOB_ID = "appointment_reminders"
DEFAULT_BARBER_NAME = "your barber"
NO_CONTACT_ERROR = "No contact info"
SEND_FAILED_ERROR = "Failed to send reminder"

EmailFunc = Callable[[str, str, str], Awaitable[bool]]


def render_reminder_message(template_text: str, booking: Booking, barber_name: str) -> str:
    """Substitute booking details into a template's placeholders"""
    replacements = {
        "{customerName}": booking.customer_name or "",
        "{date}": format_display_date(booking.date),
        "{time}": booking.time or "",
        "{barberName}": barber_name,
    }
    for placeholder, value in replacements.items():
        template_text = template_text.replace(placeholder, value)
    return template_text


class ReminderScheduler:
    """
    Owns the periodic reminder check.

    Each cycle loads the active templates and the confirmed bookings that could
    be inside a reminder window, and sends every due (booking, template) pair
    that nobody has claimed yet. A pair is claimed by inserting a pending log
    row before dispatch; the unique index over pending and sent rows makes
    that claim atomic across processes. Every template fires independently
    for a booking.

    start() and stop() must be called from the running event loop.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        sms_sender: Optional[SmsSender] = None,
        email_func: EmailFunc = send_reminder_email,
        check_interval_minutes: float = REMINDER_CHECK_INTERVAL_MINUTES,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.session_factory = session_factory
        self.sms_sender = sms_sender or LoggingSmsSender()
        self.email_func = email_func
        self.check_interval_minutes = check_interval_minutes
        self.clock = clock

        self.reminders = ReminderRepository()
        self.scheduling = SchedulingRepository()

        self._scheduler: Optional[AsyncIOScheduler] = None
        self._cycle_task: Optional[asyncio.Task] = None
        self._is_running = False
        self._cycle_in_progress = False
        self._last_check_at: Optional[datetime] = None
        self._last_summary: Optional[dict] = None

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def check_interval_ms(self) -> int:
        return int(self.check_interval_minutes * 60 * 1000)

    def start(self) -> bool:
        """Start checking now and then on every interval. Returns False if already running."""
        if self._is_running:
            logger.warning("⚠️ Reminder scheduler is already running")
            return False

        logger.info("🕐 Starting reminder scheduler...")
        self._scheduler = AsyncIOScheduler()
        self._scheduler.add_job(
            self._run_scheduled_check,
            "interval",
            seconds=self.check_interval_minutes * 60,
            id=JOB_ID,
            next_run_time=datetime.now(),
            max_instances=1,
            coalesce=True,
            misfire_grace_time=60,
        )
        self._scheduler.start()
        self._is_running = True

        logger.info(
            f"✅ Reminder scheduler started (checking every {self.check_interval_minutes:g} minutes)"
        )
        return True

    def stop(self) -> bool:
        """
        Stop the timer. A cycle already running is left to finish;
        await wait_for_cycle() to block until it has.
        """
        if not self._is_running:
            logger.warning("⚠️ Reminder scheduler is not running")
            return False

        if self._scheduler:
            self._scheduler.shutdown(wait=False)
            self._scheduler = None

        self._is_running = False
        logger.info("🛑 Reminder scheduler stopped")
        return True

    async def _run_scheduled_check(self) -> None:
        # The cycle runs as its own task so shutting the scheduler down
        # (which cancels in-flight job futures) never interrupts a send
        if self._cycle_task and not self._cycle_task.done():
            logger.warning("⚠️ Reminder check already in progress, skipping this cycle")
            return
        self._cycle_task = asyncio.create_task(self.check_and_send_reminders())

    async def wait_for_cycle(self) -> None:
        """Wait for a timer-started cycle that is still running"""
        task = self._cycle_task
        if task and not task.done():
            await task

    async def trigger_check(self) -> dict:
        """Run one check cycle immediately"""
        logger.info("🔄 Manually triggering reminder check...")
        return await self.check_and_send_reminders()

    def get_status(self) -> dict:
        next_run_at = None
        if self._scheduler:
            job = self._scheduler.get_job(JOB_ID)
            next_run_at = job.next_run_time if job else None

        return {
            "isRunning": self._is_running,
            "checkIntervalMs": self.check_interval_ms,
            "checkIntervalMinutes": self.check_interval_minutes,
            "cycleInProgress": self._cycle_in_progress,
            "lastCheckAt": self._last_check_at,
            "nextRunAt": next_run_at,
            "lastSummary": self._last_summary,
        }

    async def check_and_send_reminders(self) -> dict:
        """One check cycle. Never raises."""
        summary = {"ran": False, "bookings": 0, "sent": 0, "failed": 0, "skipped": 0}

        if self._cycle_in_progress:
            logger.warning("⚠️ Reminder check already in progress, skipping this cycle")
            return summary

        self._cycle_in_progress = True
        summary["ran"] = True
        now = self.clock()
        db = self.session_factory()
        try:
            templates = self.reminders.get_active_templates(db)
            if not templates:
                logger.debug("ℹ️ No active reminder templates")
                return summary

            # Only bookings between today and the furthest trigger can be due
            max_trigger = max(t.trigger_hours for t in templates)
            bookings = self.reminders.get_reminder_candidates(
                db,
                start_date=now.date().isoformat(),
                end_date=(now + timedelta(hours=max_trigger)).date().isoformat(),
            )
            summary["bookings"] = len(bookings)

            for booking in bookings:
                try:
                    appointment_at = parse_booking_datetime(booking.date, booking.time)
                except (TypeError, ValueError):
                    logger.warning(
                        f"⚠️ Skipping booking #{booking.id}: cannot parse {booking.date!r} {booking.time!r}"
                    )
                    summary["skipped"] += 1
                    continue

                for template in templates:
                    if not is_reminder_due(appointment_at, template.trigger_hours, now):
                        continue
                    if self.reminders.has_claimed_reminder(db, booking.id, template.id):
                        continue

                    outcome = await self._send_reminder(db, booking, template)
                    summary[outcome] += 1

            if summary["sent"] or summary["failed"]:
                logger.info(f"📊 Reminder check summary: {summary}")
            return summary

        except Exception as e:
            logger.error(f"❌ Error in reminder scheduler: {e}")
            db.rollback()
            summary["error"] = str(e)
            return summary
        finally:
            db.close()
            self._last_check_at = now
            self._last_summary = summary
            self._cycle_in_progress = False

    async def _send_reminder(self, db: Session, booking: Booking, template: ReminderTemplate) -> str:
        """Dispatch one (booking, template) pair and record the attempt"""
        try:
            if template.type == "sms":
                recipient = booking.customer_phone
            elif template.type == "email":
                recipient = booking.customer_email
            else:
                logger.warning(f"⚠️ Template #{template.id} has unknown type {template.type!r}")
                return "skipped"

            if not recipient:
                # Record once so operators can see why nothing went out
                if not self.reminders.has_failure_logged(db, booking.id, template.id, NO_CONTACT_ERROR):
                    self.reminders.create_reminder_log(
                        db,
                        booking_id=booking.id,
                        template_id=template.id,
                        type=template.type,
                        recipient="",
                        status="failed",
                        error_message=NO_CONTACT_ERROR,
                    )
                    logger.info(
                        f"ℹ️ Booking #{booking.id} has no {template.type} contact for template #{template.id}"
                    )
                return "skipped"

            barber = self.scheduling.get_barber(db, booking.barber_id) if booking.barber_id else None
            barber_name = barber.name if barber and barber.name else DEFAULT_BARBER_NAME
            message = render_reminder_message(template.message, booking, barber_name)

            # Claim the pair before dispatch; a concurrent scheduler holding
            # the claim (pending or sent) wins and this one backs off
            log = self.reminders.claim_reminder(
                db, booking_id=booking.id, template_id=template.id, type=template.type, recipient=recipient
            )
            if log is None:
                logger.info(
                    f"ℹ️ Reminder for booking #{booking.id} template #{template.id} claimed by another scheduler"
                )
                return "skipped"

            error_message = None
            try:
                if template.type == "sms":
                    success = await self.sms_sender.send_sms(recipient, message)
                else:
                    subject = (
                        render_reminder_message(template.subject, booking, barber_name)
                        if template.subject
                        else f"Reminder: Your appointment on {format_display_date(booking.date)}"
                    )
                    success = await self.email_func(recipient, subject, message)
            except Exception as e:
                success = False
                error_message = str(e) or e.__class__.__name__
                logger.error(f"❌ Error sending reminder for booking #{booking.id}: {error_message}")

            if not success and not error_message:
                error_message = SEND_FAILED_ERROR

            sent_at = self.clock()
            self.reminders.complete_reminder_log(
                db,
                log,
                status="sent" if success else "failed",
                sent_at=sent_at if success else None,
                error_message=error_message,
            )

            if success:
                self.scheduling.update_booking(db, booking, reminder_sent=sent_at)
                logger.info(f"✅ Sent {template.type} reminder for booking #{booking.id} to {recipient}")
                return "sent"

            logger.warning(f"⚠️ Failed to send {template.type} reminder for booking #{booking.id}")
            return "failed"

        except Exception as e:
            db.rollback()
            logger.error(f"❌ Error sending reminder for booking #{booking.id}: {e}")
            return "failed"
