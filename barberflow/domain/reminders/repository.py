"""Reminder repository - Database operations for templates and the send log"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import Booking, ReminderLog, ReminderTemplate

# Statuses covered by the unique claim index on reminder_logs
CLAIMED_STATUSES = ("pending", "sent")


class ReminderRepository:
    """Repository for reminder database operations"""

    # Templates
    @staticmethod
    def get_reminder_templates(db: Session) -> list[ReminderTemplate]:
        return db.query(ReminderTemplate).order_by(ReminderTemplate.id.asc()).all()

    @staticmethod
    def get_active_templates(db: Session) -> list[ReminderTemplate]:
        return (
            db.query(ReminderTemplate)
            .filter(ReminderTemplate.is_active.is_(True))
            .order_by(ReminderTemplate.id.asc())
            .all()
        )

    @staticmethod
    def get_reminder_template(db: Session, template_id: int) -> Optional[ReminderTemplate]:
        return db.query(ReminderTemplate).filter(ReminderTemplate.id == template_id).first()

    @staticmethod
    def create_reminder_template(db: Session, **template_data) -> ReminderTemplate:
        template = ReminderTemplate(**template_data)
        db.add(template)
        db.commit()
        db.refresh(template)
        return template

    @staticmethod
    def update_reminder_template(db: Session, template: ReminderTemplate, **updates) -> ReminderTemplate:
        """Update a template with the provided fields, None included"""
        for key, value in updates.items():
            if hasattr(template, key):
                setattr(template, key, value)

        db.commit()
        db.refresh(template)
        return template

    @staticmethod
    def delete_reminder_template(db: Session, template: ReminderTemplate) -> None:
        db.delete(template)
        db.commit()

    # Candidate bookings
    @staticmethod
    def get_reminder_candidates(db: Session, start_date: str, end_date: str) -> list[Booking]:
        """Confirmed bookings dated within [start_date, end_date] (YYYY-MM-DD)"""
        return (
            db.query(Booking)
            .filter(
                Booking.status == "confirmed",
                Booking.date >= start_date,
                Booking.date <= end_date,
            )
            .order_by(Booking.date.asc(), Booking.time.asc())
            .all()
        )

    # Logs
    @staticmethod
    def get_reminder_logs(db: Session, limit: int = 200) -> list[ReminderLog]:
        return db.query(ReminderLog).order_by(ReminderLog.id.desc()).limit(limit).all()

    @staticmethod
    def get_reminder_logs_by_booking(db: Session, booking_id: int) -> list[ReminderLog]:
        return (
            db.query(ReminderLog)
            .filter(ReminderLog.booking_id == booking_id)
            .order_by(ReminderLog.id.asc())
            .all()
        )

    @staticmethod
    def count_logs_for_template(db: Session, template_id: int) -> int:
        return db.query(ReminderLog).filter(ReminderLog.template_id == template_id).count()

    @staticmethod
    def has_claimed_reminder(db: Session, booking_id: int, template_id: int) -> bool:
        """Whether the (booking, template) dedup key is already pending or sent"""
        return (
            db.query(ReminderLog.id)
            .filter(
                ReminderLog.booking_id == booking_id,
                ReminderLog.template_id == template_id,
                ReminderLog.status.in_(CLAIMED_STATUSES),
            )
            .first()
            is not None
        )

    @staticmethod
    def has_failure_logged(db: Session, booking_id: int, template_id: int, error_message: str) -> bool:
        return (
            db.query(ReminderLog.id)
            .filter(
                ReminderLog.booking_id == booking_id,
                ReminderLog.template_id == template_id,
                ReminderLog.status == "failed",
                ReminderLog.error_message == error_message,
            )
            .first()
            is not None
        )

    @staticmethod
    def create_reminder_log(db: Session, **log_data) -> ReminderLog:
        log = ReminderLog(**log_data)
        db.add(log)
        db.commit()
        db.refresh(log)
        return log

    @staticmethod
    def claim_reminder(
        db: Session, booking_id: int, template_id: int, type: str, recipient: str
    ) -> Optional[ReminderLog]:
        """
        Insert a pending log for the pair before dispatch.

        Returns None when another scheduler already holds a pending or sent
        log for the same (booking, template).
        """
        log = ReminderLog(
            booking_id=booking_id,
            template_id=template_id,
            type=type,
            recipient=recipient,
            status="pending",
        )
        db.add(log)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            return None
        db.refresh(log)
        return log

    @staticmethod
    def complete_reminder_log(db: Session, log: ReminderLog, **updates) -> ReminderLog:
        """Record the outcome of a claimed reminder"""
        for key, value in updates.items():
            setattr(log, key, value)

        db.commit()
        db.refresh(log)
        return log
