# app/models/notification_log.py
"""
Notification delivery tracking.
One row per channel per send attempt (email, WhatsApp).
"""
import uuid
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from app.db.base_class import Base


class NotificationLog(Base):
    __tablename__ = "notification_logs"

    id = Column(
        String, primary_key=True, default=lambda: f"ntf_{uuid.uuid4().hex[:12]}"
    )
    event_id = Column(
        String, ForeignKey("events.id", ondelete="CASCADE"), nullable=True, index=True
    )
    registration_id = Column(
        String, ForeignKey("registrations.id", ondelete="SET NULL"), nullable=True
    )
    assignment_id = Column(
        String, ForeignKey("faculty_assignments.id", ondelete="SET NULL"), nullable=True
    )

    channel = Column(String(20), nullable=False)  # 'email', 'whatsapp'
    notification_type = Column(String(50), nullable=False, index=True)
    recipient = Column(String(255), nullable=True)
    subject = Column(String, nullable=True)
    body_preview = Column(String(200), nullable=True)

    # Delivery tracking
    status = Column(String(20), nullable=False)  # 'sent', 'failed', 'skipped'
    provider = Column(String(30), nullable=True)
    external_id = Column(String(255), nullable=True)
    error_message = Column(Text, nullable=True)
    sent_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )

    __table_args__ = (
        Index("idx_notification_logs_status_created", "status", "created_at"),
    )
