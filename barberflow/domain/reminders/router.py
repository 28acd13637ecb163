"""Reminder router - Templates, send log and scheduler controls for operators"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...deps import get_reminder_scheduler
from ...models import ReminderLog, ReminderTemplate
from .repository import ReminderRepository
from .scheduler import ReminderScheduler
from .schemas import (
    ReminderLogResponse,
    ReminderTemplateCreate,
    ReminderTemplateResponse,
    ReminderTemplateUpdate,
    SchedulerStatusResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Reminders"])

TEMPLATE_UPDATE_FIELDS = {
    "name": "name",
    "type": "type",
    "triggerHours": "trigger_hours",
    "message": "message",
    "subject": "subject",
    "isActive": "is_active",
}


def to_template_response(t: ReminderTemplate) -> ReminderTemplateResponse:
    return ReminderTemplateResponse(
        id=t.id,
        name=t.name,
        type=t.type,
        triggerHours=t.trigger_hours,
        message=t.message,
        subject=t.subject,
        isActive=t.is_active,
    )


def to_log_response(log: ReminderLog) -> ReminderLogResponse:
    return ReminderLogResponse(
        id=log.id,
        bookingId=log.booking_id,
        templateId=log.template_id,
        type=log.type,
        recipient=log.recipient,
        status=log.status,
        sentAt=log.sent_at,
        errorMessage=log.error_message,
        createdAt=log.created_at,
    )


def get_template_or_404(db: Session, template_id: int) -> ReminderTemplate:
    template = ReminderRepository.get_reminder_template(db, template_id)
    if not template:
        raise HTTPException(status_code=404, detail="Reminder template not found")
    return template


# ============================================================================
# TEMPLATES
# ============================================================================


@router.get("/reminder-templates", response_model=list[ReminderTemplateResponse])
async def get_reminder_templates(db: Session = Depends(get_db)):
    return [to_template_response(t) for t in ReminderRepository.get_reminder_templates(db)]


@router.post("/reminder-templates", response_model=ReminderTemplateResponse, status_code=201)
async def create_reminder_template(data: ReminderTemplateCreate, db: Session = Depends(get_db)):
    template = ReminderRepository.create_reminder_template(
        db,
        name=data.name,
        type=data.type,
        trigger_hours=data.triggerHours,
        message=data.message,
        subject=data.subject,
        is_active=data.isActive,
    )
    logger.info(f"✅ Reminder template {template.id} created ({template.type}, {template.trigger_hours}h)")
    return to_template_response(template)


@router.patch("/reminder-templates/{template_id}", response_model=ReminderTemplateResponse)
async def update_reminder_template(
    template_id: int, data: ReminderTemplateUpdate, db: Session = Depends(get_db)
):
    """Update only the fields present in the request; subject may be cleared with null"""
    template = get_template_or_404(db, template_id)
    updates = {
        TEMPLATE_UPDATE_FIELDS[field]: value
        for field, value in data.model_dump(exclude_unset=True).items()
    }
    template = ReminderRepository.update_reminder_template(db, template, **updates)
    return to_template_response(template)


@router.delete("/reminder-templates/{template_id}")
async def delete_reminder_template(template_id: int, db: Session = Depends(get_db)):
    """Delete a template that has never been used; used ones must be deactivated"""
    template = get_template_or_404(db, template_id)
    if ReminderRepository.count_logs_for_template(db, template_id):
        raise HTTPException(
            status_code=409,
            detail="Template has reminder history; deactivate it instead",
        )
    ReminderRepository.delete_reminder_template(db, template)
    return {"success": True}


# ============================================================================
# LOGS
# ============================================================================


@router.get("/reminder-logs", response_model=list[ReminderLogResponse])
async def get_reminder_logs(
    booking_id: Optional[int] = Query(None, alias="bookingId"),
    db: Session = Depends(get_db),
):
    if booking_id is not None:
        logs = ReminderRepository.get_reminder_logs_by_booking(db, booking_id)
    else:
        logs = ReminderRepository.get_reminder_logs(db)
    return [to_log_response(log) for log in logs]


# ============================================================================
# SCHEDULER CONTROLS
# ============================================================================


@router.get("/reminders/status", response_model=SchedulerStatusResponse)
async def get_scheduler_status(scheduler: ReminderScheduler = Depends(get_reminder_scheduler)):
    return scheduler.get_status()


@router.post("/reminders/trigger")
async def trigger_reminder_check(scheduler: ReminderScheduler = Depends(get_reminder_scheduler)):
    """Run one reminder cycle now"""
    return await scheduler.trigger_check()


@router.post("/reminders/start", response_model=SchedulerStatusResponse)
async def start_scheduler(scheduler: ReminderScheduler = Depends(get_reminder_scheduler)):
    scheduler.start()
    return scheduler.get_status()


@router.post("/reminders/stop", response_model=SchedulerStatusResponse)
async def stop_scheduler(scheduler: ReminderScheduler = Depends(get_reminder_scheduler)):
    scheduler.stop()
    return scheduler.get_status()
