# app/models/print_job.py
import uuid
from sqlalchemy import Column, String, Integer, JSON, ForeignKey, DateTime, Index, func
from sqlalchemy.orm import relationship
from app.db.base_class import Base


class PrintJob(Base):
    __tablename__ = "print_jobs"

    id = Column(
        String, primary_key=True, default=lambda: f"pjob_{uuid.uuid4().hex[:12]}"
    )
    print_station_id = Column(
        String, ForeignKey("print_stations.id", ondelete="CASCADE"), nullable=False
    )
    registration_id = Column(
        String, ForeignKey("registrations.id", ondelete="CASCADE"), nullable=False
    )
    # 1 for the first print of a (station, registration) pair, then +1 per reprint
    print_number = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, server_default="completed")
    printed_at = Column(DateTime(timezone=True), nullable=True)
    device_info = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    print_station = relationship("PrintStation", back_populates="print_jobs")
    registration = relationship("Registration")

    __table_args__ = (
        Index("idx_print_jobs_station_registration", "print_station_id", "registration_id"),
    )
