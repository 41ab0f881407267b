# app/crud/crud_session.py
from typing import List

from sqlalchemy.orm import Session

from .base import CRUDBase
from app.models.session import ProgramSession
from app.schemas.session import ProgramSessionCreate


class CRUDProgramSession(CRUDBase[ProgramSession, ProgramSessionCreate, dict]):
    def create_with_event(
        self, db: Session, *, obj_in: ProgramSessionCreate, event_id: str
    ) -> ProgramSession:
        db_obj = self.model(**obj_in.model_dump(), event_id=event_id)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_multi_by_event(self, db: Session, *, event_id: str) -> List[ProgramSession]:
        return (
            db.query(self.model)
            .filter(self.model.event_id == event_id)
            .order_by(self.model.session_date.asc(), self.model.start_time.asc())
            .all()
        )


session = CRUDProgramSession(ProgramSession)
