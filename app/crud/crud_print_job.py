# app/crud/crud_print_job.py
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.print_job import PrintJob


def get_max_print_number(db: Session, *, station_id: str, registration_id: str) -> int:
    """Highest completed print_number for the pair, 0 if never printed."""
    value = (
        db.query(func.max(PrintJob.print_number))
        .filter(
            PrintJob.print_station_id == station_id,
            PrintJob.registration_id == registration_id,
            PrintJob.status == "completed",
        )
        .scalar()
    )
    return value or 0


def create_print_job(
    db: Session,
    *,
    station_id: str,
    registration_id: str,
    print_number: int,
    device_info: Optional[Dict[str, Any]] = None,
) -> PrintJob:
    job = PrintJob(
        print_station_id=station_id,
        registration_id=registration_id,
        print_number=print_number,
        status="completed",
        printed_at=datetime.now(timezone.utc),
        device_info=device_info,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def get_history(
    db: Session,
    *,
    station_id: Optional[str] = None,
    registration_id: Optional[str] = None,
    limit: int = 50,
) -> List[PrintJob]:
    query = db.query(PrintJob)
    if station_id:
        query = query.filter(PrintJob.print_station_id == station_id)
    if registration_id:
        query = query.filter(PrintJob.registration_id == registration_id)
    return query.order_by(PrintJob.created_at.desc()).limit(limit).all()


def get_station_stats(db: Session, *, station_id: str) -> Dict[str, int]:
    """Completed print count and distinct registrations printed at a station."""
    total, unique = (
        db.query(
            func.count(PrintJob.id),
            func.count(func.distinct(PrintJob.registration_id)),
        )
        .filter(
            PrintJob.print_station_id == station_id, PrintJob.status == "completed"
        )
        .one()
    )
    return {"totalPrints": total or 0, "uniquePrints": unique or 0}
