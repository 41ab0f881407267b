# app/models/event.py
from sqlalchemy import Column, String, DateTime, Boolean, text, func
from sqlalchemy.orm import relationship
from app.db.base_class import Base
import uuid


class Event(Base):
    __tablename__ = "events"

    id = Column(
        String, primary_key=True, default=lambda: f"evt_{uuid.uuid4().hex[:12]}"
    )
    organization_id = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    # Used as the registration number prefix, e.g. "AMASICON-0042"
    short_name = Column(String(50), nullable=True)
    description = Column(String, nullable=True)
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)
    venue_name = Column(String, nullable=True)
    registration_open = Column(Boolean, nullable=False, server_default=text("true"))
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    ticket_types = relationship("TicketType", back_populates="event")
    registrations = relationship("Registration", back_populates="event")
    sessions = relationship("ProgramSession", back_populates="event")

    @property
    def registration_prefix(self) -> str:
        if self.short_name:
            return self.short_name
        if self.name:
            return self.name[:4].upper()
        return "EVT"
