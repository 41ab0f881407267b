# app/crud/crud_event.py
from typing import List, Optional

from sqlalchemy.orm import Session

from .base import CRUDBase
from app.models.event import Event
from app.schemas.event import EventCreate, EventUpdate


class CRUDEvent(CRUDBase[Event, EventCreate, EventUpdate]):
    def create_with_organization(
        self, db: Session, *, obj_in: EventCreate, org_id: str
    ) -> Event:
        db_obj = self.model(**obj_in.model_dump(), organization_id=org_id)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_multi_by_organization(
        self,
        db: Session,
        *,
        org_id: str,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Event]:
        query = db.query(self.model).filter(self.model.organization_id == org_id)
        if search:
            query = query.filter(self.model.name.ilike(f"%{search}%"))
        return (
            query.order_by(self.model.start_date.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )


event = CRUDEvent(Event)
