# app/models/ticket_type.py
from sqlalchemy import (
    Column,
    String,
    Boolean,
    DateTime,
    Integer,
    Numeric,
    Text,
    ForeignKey,
    Enum,
    text,
    func,
)
from sqlalchemy.orm import relationship
from app.db.base_class import Base
import uuid


class TicketType(Base):
    __tablename__ = "ticket_types"

    id = Column(
        String, primary_key=True, default=lambda: f"tt_{uuid.uuid4().hex[:12]}"
    )
    event_id = Column(String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False, server_default="0")
    currency = Column(String(3), nullable=False, server_default="INR")
    tax_percentage = Column(Numeric(5, 2), nullable=False, server_default="18")
    quantity_total = Column(Integer, nullable=True)  # NULL = unlimited
    # Soft invariant: quantity_sold <= quantity_total. Only checked by callers
    # right before they increment; there is no database constraint.
    quantity_sold = Column(Integer, server_default="0", nullable=False)
    min_per_order = Column(Integer, server_default="1", nullable=False)
    max_per_order = Column(Integer, server_default="10", nullable=False)
    status = Column(
        Enum("active", "hidden", "soldout", "disabled", name="ticket_status_enum"),
        nullable=False,
        server_default="active",
    )
    requires_approval = Column(Boolean, server_default=text("false"), nullable=False)
    sort_order = Column(Integer, server_default="0", nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    # Relationships
    event = relationship("Event", back_populates="ticket_types")
    registrations = relationship("Registration", back_populates="ticket_type")

    @property
    def quantity_available(self):
        """Calculate available quantity for this ticket type."""
        if self.quantity_total is None:
            return None  # Unlimited
        return max(0, self.quantity_total - (self.quantity_sold or 0))

    def has_capacity_for(self, quantity: int) -> bool:
        if self.quantity_total is None:
            return True
        return self.quantity_total - (self.quantity_sold or 0) >= quantity
