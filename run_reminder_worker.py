"""
Reminder Background Worker Runner
Run this as a separate process when the web app runs with
REMINDER_SCHEDULER_ENABLED=false: python run_reminder_worker.py
"""

import asyncio
import logging
import signal
import sys

from barberflow import models  # noqa: F401 - register tables with Base
from barberflow.config import REMINDER_CHECK_INTERVAL_MINUTES
from barberflow.database import Base, SessionLocal, engine
from barberflow.domain.reminders.scheduler import ReminderScheduler
from barberflow.email_service import send_reminder_email
from barberflow.services.sms_service import build_sms_sender

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logging.getLogger("httpx").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


async def run_reminder_worker():
    Base.metadata.create_all(bind=engine, checkfirst=True)

    scheduler = ReminderScheduler(
        session_factory=SessionLocal,
        sms_sender=build_sms_sender(),
        email_func=send_reminder_email,
        check_interval_minutes=REMINDER_CHECK_INTERVAL_MINUTES,
    )

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop_event.set)
        except NotImplementedError:
            # Windows event loops have no signal handlers; Ctrl+C still raises KeyboardInterrupt
            pass

    scheduler.start()
    try:
        await stop_event.wait()
    finally:
        scheduler.stop()
        await scheduler.wait_for_cycle()


if __name__ == "__main__":
    logger.info("🚀 Starting Reminder Background Worker...")
    try:
        asyncio.run(run_reminder_worker())
    except KeyboardInterrupt:
        logger.info("👋 Reminder worker stopped by user")
    except Exception as e:
        logger.error(f"❌ Reminder worker crashed: {e}")
        sys.exit(1)
