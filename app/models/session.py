# app/models/session.py
import uuid
from sqlalchemy import Column, String, Date, Time, Text, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from app.db.base_class import Base


class ProgramSession(Base):
    __tablename__ = "sessions"

    id = Column(
        String, primary_key=True, default=lambda: f"ses_{uuid.uuid4().hex[:12]}"
    )
    event_id = Column(String, ForeignKey("events.id"), nullable=False, index=True)
    session_name = Column(String, nullable=True)
    session_date = Column(Date, nullable=True)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    hall = Column(String, nullable=True)
    specialty_track = Column(String, nullable=True)

    # Free text: "Name (email, phone) | Name2 (email2, phone2)"
    speakers_text = Column(Text, nullable=True)
    chairpersons_text = Column(Text, nullable=True)
    moderators_text = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    event = relationship("Event", back_populates="sessions")
    assignments = relationship("FacultyAssignment", back_populates="session")
