# app/crud/crud_registration.py
import re
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from .base import CRUDBase
from app.models.event import Event
from app.models.registration import Registration
from app.schemas.registration import RegistrationCreate

_TRAILING_DIGITS = re.compile(r"(\d+)$")


def format_registration_number(prefix: str, latest_number: Optional[str]) -> str:
    """
    Next number in an event's sequence, e.g. "AMASICON-0042" after "...-0041".
    Starts at 0001 when the event has no registrations yet.
    """
    next_number = 1
    if latest_number:
        match = _TRAILING_DIGITS.search(latest_number)
        if match:
            next_number = int(match.group(1)) + 1
    return f"{prefix}-{next_number:04d}"


class CRUDRegistration(CRUDBase[Registration, RegistrationCreate, dict]):
    def get_for_event(
        self, db: Session, *, id: str, event_id: str
    ) -> Optional[Registration]:
        return (
            db.query(self.model)
            .filter(self.model.id == id, self.model.event_id == event_id)
            .first()
        )

    def get_by_number(
        self, db: Session, *, registration_number: str, event_id: Optional[str] = None
    ) -> Optional[Registration]:
        query = db.query(self.model).filter(
            self.model.registration_number == registration_number
        )
        if event_id:
            query = query.filter(self.model.event_id == event_id)
        return query.first()

    def get_highest_number_for_event(
        self, db: Session, *, event_id: str
    ) -> Optional[str]:
        """
        The event's registration number with the largest numeric suffix,
        regardless of row age (transferred rows keep their created_at).
        """
        numbers = (
            db.query(self.model.registration_number)
            .filter(self.model.event_id == event_id)
            .all()
        )
        highest, highest_seq = None, -1
        for (number,) in numbers:
            match = _TRAILING_DIGITS.search(number or "")
            seq = int(match.group(1)) if match else 0
            if seq > highest_seq:
                highest, highest_seq = number, seq
        return highest

    def next_registration_number(self, db: Session, *, event: Event) -> str:
        return format_registration_number(
            event.registration_prefix,
            self.get_highest_number_for_event(db, event_id=event.id),
        )

    def get_multi_by_event(
        self,
        db: Session,
        *,
        event_id: str,
        status: Optional[str] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Registration]:
        query = db.query(self.model).filter(self.model.event_id == event_id)
        if status:
            query = query.filter(self.model.status == status)
        if search:
            pattern = f"%{search}%"
            query = query.filter(
                or_(
                    self.model.attendee_name.ilike(pattern),
                    self.model.attendee_email.ilike(pattern),
                    self.model.registration_number.ilike(pattern),
                )
            )
        return (
            query.order_by(self.model.created_at.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def count_confirmed_by_event(self, db: Session, *, event_id: str) -> int:
        return (
            db.query(self.model)
            .filter(self.model.event_id == event_id, self.model.status == "confirmed")
            .count()
        )

    def get_multi_by_ids(
        self, db: Session, *, event_id: str, ids: List[str]
    ) -> List[Registration]:
        return (
            db.query(self.model)
            .filter(self.model.event_id == event_id, self.model.id.in_(ids))
            .all()
        )


registration = CRUDRegistration(Registration)
