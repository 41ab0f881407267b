# app/models/faculty_assignment.py
import uuid
from sqlalchemy import (
    Column,
    String,
    Integer,
    Date,
    Time,
    Text,
    ForeignKey,
    DateTime,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship
from app.db.base_class import Base


class FacultyAssignment(Base):
    __tablename__ = "faculty_assignments"
    __table_args__ = (
        UniqueConstraint(
            "session_id", "faculty_name", "role", name="uq_faculty_assignment_natural_key"
        ),
    )

    id = Column(
        String, primary_key=True, default=lambda: f"fa_{uuid.uuid4().hex[:12]}"
    )
    event_id = Column(
        String, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    session_id = Column(
        String, ForeignKey("sessions.id", ondelete="CASCADE"), nullable=True, index=True
    )

    # Faculty details (copied from the session text)
    faculty_name = Column(String, nullable=False)
    faculty_email = Column(String, nullable=True, index=True)
    faculty_phone = Column(String, nullable=True)

    role = Column(String(20), nullable=False)  # speaker | chairperson | moderator | panelist
    topic_title = Column(String, nullable=True)

    # Schedule copied from the session at sync time
    session_name = Column(String, nullable=True)
    session_date = Column(Date, nullable=True)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    hall = Column(String, nullable=True)

    status = Column(String(20), nullable=False, server_default="pending")
    response_notes = Column(Text, nullable=True)
    change_request_details = Column(Text, nullable=True)
    responded_at = Column(DateTime(timezone=True), nullable=True)

    invitation_token = Column(String(64), nullable=True, unique=True, index=True)
    invitation_sent_at = Column(DateTime(timezone=True), nullable=True)
    reminder_count = Column(Integer, nullable=False, server_default="0")

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )

    session = relationship("ProgramSession", back_populates="assignments")
