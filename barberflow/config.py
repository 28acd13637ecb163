import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./barberflow.db")

BUSINESS_NAME = os.getenv("BUSINESS_NAME", "BarberFlow")

# Frontend origins allowed by CORS (comma separated)
ALLOWED_ORIGINS = os.getenv(
    "ALLOWED_ORIGINS", "http://localhost:5173,http://localhost:3000"
).split(",")

# Business hours for the booking grid ("HH:MM", close is exclusive)
BUSINESS_OPEN_TIME = os.getenv("BUSINESS_OPEN_TIME", "09:00")
BUSINESS_CLOSE_TIME = os.getenv("BUSINESS_CLOSE_TIME", "18:00")

# Reminder scheduler
REMINDER_SCHEDULER_ENABLED = os.getenv("REMINDER_SCHEDULER_ENABLED", "true").lower() == "true"
REMINDER_CHECK_INTERVAL_MINUTES = float(os.getenv("REMINDER_CHECK_INTERVAL_MINUTES", "5"))

# Twilio SMS Configuration
# All three must be set, otherwise SMS is only logged
TWILIO_ACCOUNT_SID = os.getenv("TWILIO_ACCOUNT_SID")
TWILIO_AUTH_TOKEN = os.getenv("TWILIO_AUTH_TOKEN")
TWILIO_PHONE_NUMBER = os.getenv("TWILIO_PHONE_NUMBER")
SMS_SEND_TIMEOUT = float(os.getenv("SMS_SEND_TIMEOUT", "10"))

# Resend Email Configuration
RESEND_API_KEY = os.getenv("RESEND_API_KEY")
EMAIL_FROM_ADDRESS = os.getenv("EMAIL_FROM_ADDRESS", "BarberFlow <bookings@barberflowsystems.com>")
EMAIL_SEND_TIMEOUT = float(os.getenv("EMAIL_SEND_TIMEOUT", "15"))
