# app/models/print_station.py
import uuid
from sqlalchemy import (
    Column,
    String,
    Integer,
    Boolean,
    Text,
    JSON,
    ForeignKey,
    DateTime,
    text,
    func,
)
from sqlalchemy.orm import relationship
from app.db.base_class import Base


def default_print_settings() -> dict:
    return {
        "paper_size": "4x6",
        "orientation": "portrait",
        "margins": {"top": 0, "right": 0, "bottom": 0, "left": 0},
        "scale": 100,
        "copies": 1,
    }


class PrintStation(Base):
    __tablename__ = "print_stations"

    id = Column(
        String, primary_key=True, default=lambda: f"pst_{uuid.uuid4().hex[:12]}"
    )
    event_id = Column(
        String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    print_mode = Column(String(30), nullable=False, server_default="full_badge")
    badge_template_id = Column(
        String, ForeignKey("badge_templates.id", ondelete="SET NULL"), nullable=True
    )
    print_settings = Column(JSON, nullable=True, default=default_print_settings)

    # Reprint policy
    allow_reprint = Column(Boolean, nullable=False, server_default=text("true"))
    max_reprints = Column(Integer, nullable=False, server_default="3")

    auto_print = Column(Boolean, nullable=False, server_default=text("false"))
    require_checkin = Column(Boolean, nullable=False, server_default=text("false"))
    # Optional allowlist; NULL or empty means every ticket type may print
    ticket_type_ids = Column(JSON, nullable=True)

    access_token = Column(String(64), nullable=False, unique=True, index=True)
    token_expires_at = Column(DateTime(timezone=True), nullable=True)
    is_active = Column(Boolean, nullable=False, server_default=text("true"))

    created_by = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    badge_template = relationship("BadgeTemplate")
    event = relationship("Event")
    print_jobs = relationship(
        "PrintJob", back_populates="print_station", cascade="all, delete-orphan"
    )
