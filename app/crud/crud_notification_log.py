# app/crud/crud_notification_log.py
"""
CRUD operations for notification delivery tracking.
"""
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from app.models.notification_log import NotificationLog


def create_notification_log(
    db: Session,
    *,
    channel: str,  # 'email', 'whatsapp'
    notification_type: str,  # 'registration_confirmation', 'faculty_invitation', ...
    status: str,  # 'sent', 'failed', 'skipped'
    recipient: Optional[str] = None,
    event_id: Optional[str] = None,
    registration_id: Optional[str] = None,
    assignment_id: Optional[str] = None,
    subject: Optional[str] = None,
    body: Optional[str] = None,
    provider: Optional[str] = None,
    external_id: Optional[str] = None,
    error: Optional[str] = None,
    commit: bool = True,
) -> NotificationLog:
    """Record one send attempt on one channel."""
    log = NotificationLog(
        event_id=event_id,
        registration_id=registration_id,
        assignment_id=assignment_id,
        channel=channel,
        notification_type=notification_type,
        recipient=recipient,
        subject=subject,
        body_preview=body[:200] if body else None,
        status=status,
        provider=provider,
        external_id=external_id,
        error_message=error,
        sent_at=datetime.now(timezone.utc) if status == "sent" else None,
    )
    db.add(log)
    if commit:
        db.commit()
        db.refresh(log)
    return log


def get_logs_for_registration(
    db: Session, *, registration_id: str
) -> List[NotificationLog]:
    return (
        db.query(NotificationLog)
        .filter(NotificationLog.registration_id == registration_id)
        .order_by(NotificationLog.created_at.desc())
        .all()
    )
