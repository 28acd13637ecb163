import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from . import models  # noqa: F401 - register tables with Base
from .config import ALLOWED_ORIGINS, REMINDER_CHECK_INTERVAL_MINUTES, REMINDER_SCHEDULER_ENABLED
from .database import Base, SessionLocal, engine
from .domain.catalog.router import router as catalog_router
from .domain.reminders.router import router as reminders_router
from .domain.reminders.scheduler import ReminderScheduler
from .domain.scheduling.router import router as scheduling_router
from .email_service import send_reminder_email
from .services.sms_service import build_sms_sender

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("apscheduler").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")

    sms_sender = build_sms_sender()
    scheduler = ReminderScheduler(
        session_factory=SessionLocal,
        sms_sender=sms_sender,
        email_func=send_reminder_email,
        check_interval_minutes=REMINDER_CHECK_INTERVAL_MINUTES,
    )
    app.state.sms_sender = sms_sender
    app.state.reminder_scheduler = scheduler

    if REMINDER_SCHEDULER_ENABLED:
        scheduler.start()
    else:
        logger.info("Reminder scheduler disabled (REMINDER_SCHEDULER_ENABLED=false)")

    yield

    logger.info("Application shutting down...")
    if scheduler.is_running:
        scheduler.stop()
    await scheduler.wait_for_cycle()


app = FastAPI(title="BarberFlow API", version="1.0.0", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
        return response
    except Exception as e:
        logger.error(f"{request.method} {request.url.path} - Error: {str(e)}")
        raise


logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
app.include_router(catalog_router)
app.include_router(scheduling_router)
app.include_router(reminders_router)


@app.get("/")
def root():
    return {"message": "BarberFlow API is running"}


@app.get("/health")
def health(request: Request):
    scheduler = getattr(request.app.state, "reminder_scheduler", None)
    sms_sender = getattr(request.app.state, "sms_sender", None)
    return {
        "status": "healthy",
        "reminderScheduler": scheduler.get_status() if scheduler else None,
        "smsConfigured": sms_sender.is_ready() if sms_sender else False,
    }
