# app/models/badge_template.py
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

# Fields frozen once a template is locked
DESIGN_FIELDS = ("size", "template_image_url", "template_data")


class BadgeTemplate(Base):
    __tablename__ = "badge_templates"

    id = Column(
        String, primary_key=True, default=lambda: f"btpl_{uuid.uuid4().hex[:12]}"
    )
    event_id = Column(
        String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    # Design payload
    size = Column(String(20), nullable=False, server_default="4x3")
    template_image_url = Column(String, nullable=True)
    template_data = Column(JSON, nullable=True)
    ticket_type_ids = Column(JSON, nullable=True)

    # At most one default per event (cleared in the same transaction on set)
    is_default = Column(Boolean, nullable=False, server_default=text("false"))

    # Lock state: set by the first badge generation
    is_locked = Column(Boolean, nullable=False, server_default=text("false"))
    locked_at = Column(DateTime(timezone=True), nullable=True)
    locked_by = Column(String, nullable=True)
    badges_generated_count = Column(Integer, nullable=False, server_default="0")

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    event = relationship("Event")
