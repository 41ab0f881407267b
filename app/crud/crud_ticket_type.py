# app/crud/crud_ticket_type.py
from typing import List, Optional

from sqlalchemy.orm import Session

from .base import CRUDBase
from app.models.ticket_type import TicketType
from app.schemas.ticket_type import TicketTypeCreate, TicketTypeUpdate


class CRUDTicketType(CRUDBase[TicketType, TicketTypeCreate, TicketTypeUpdate]):
    def get_for_event(
        self, db: Session, *, id: str, event_id: str
    ) -> Optional[TicketType]:
        return (
            db.query(self.model)
            .filter(self.model.id == id, self.model.event_id == event_id)
            .first()
        )

    def get_multi_by_event(self, db: Session, *, event_id: str) -> List[TicketType]:
        return (
            db.query(self.model)
            .filter(self.model.event_id == event_id)
            .order_by(self.model.sort_order.asc(), self.model.created_at.asc())
            .all()
        )

    def create_for_event(
        self, db: Session, *, obj_in: TicketTypeCreate, event_id: str
    ) -> TicketType:
        db_obj = self.model(**obj_in.model_dump(), event_id=event_id)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


ticket_type = CRUDTicketType(TicketType)
