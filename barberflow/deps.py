"""Request dependencies for collaborators owned by the application lifespan"""

from fastapi import Request

from .services.sms_service import SmsSender


def get_sms_sender(request: Request) -> SmsSender:
    return request.app.state.sms_sender


def get_reminder_scheduler(request: Request):
    return request.app.state.reminder_scheduler
