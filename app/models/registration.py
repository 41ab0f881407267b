# app/models/registration.py
import uuid
from sqlalchemy import (
    Column,
    String,
    Integer,
    Numeric,
    Boolean,
    Text,
    JSON,
    ForeignKey,
    Enum,
    DateTime,
    UniqueConstraint,
    text,
    func,
)
from sqlalchemy.orm import relationship
from app.db.base_class import Base


class Registration(Base):
    __tablename__ = "registrations"
    __table_args__ = (
        UniqueConstraint(
            "event_id", "registration_number", name="uq_registration_event_number"
        ),
    )

    id = Column(
        String, primary_key=True, default=lambda: f"reg_{uuid.uuid4().hex[:12]}"
    )
    event_id = Column(String, ForeignKey("events.id"), nullable=False, index=True)
    ticket_type_id = Column(
        String, ForeignKey("ticket_types.id"), nullable=False, index=True
    )

    # Human-readable, event-scoped sequence, e.g. "AMASICON-0042"
    registration_number = Column(String(50), nullable=False, index=True)

    attendee_name = Column(String(255), nullable=False)
    attendee_email = Column(String(255), nullable=False, index=True)
    attendee_phone = Column(String(20), nullable=True)
    attendee_institution = Column(String(255), nullable=True)
    attendee_designation = Column(String(255), nullable=True)
    attendee_city = Column(String(100), nullable=True)
    attendee_country = Column(String(100), nullable=True, server_default="India")

    # Pricing
    quantity = Column(Integer, nullable=False, server_default="1")
    unit_price = Column(Numeric(10, 2), nullable=False, server_default="0")
    tax_amount = Column(Numeric(10, 2), nullable=False, server_default="0")
    discount_amount = Column(Numeric(10, 2), nullable=False, server_default="0")
    total_amount = Column(Numeric(10, 2), nullable=False, server_default="0")
    currency = Column(String(3), nullable=False, server_default="INR")

    status = Column(
        Enum(
            "pending",
            "confirmed",
            "cancelled",
            "refunded",
            name="registration_status_enum",
        ),
        nullable=False,
        server_default="pending",
    )
    payment_method = Column(String(30), nullable=False, server_default="free")
    # 'web' | 'admin' | 'import' -- only imported rows may be bulk-deleted
    source = Column(String(20), nullable=False, server_default="web")

    # Check-in
    checked_in = Column(Boolean, nullable=False, server_default=text("false"))
    checked_in_at = Column(DateTime(timezone=True), nullable=True)
    checked_in_by = Column(String, nullable=True)

    confirmed_at = Column(DateTime(timezone=True), nullable=True)
    notes = Column(Text, nullable=True)
    custom_fields = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    event = relationship("Event", back_populates="registrations")
    ticket_type = relationship("TicketType", back_populates="registrations")
