# app/crud/crud_faculty_assignment.py
from typing import List, Optional

from sqlalchemy.orm import Session

from .base import CRUDBase
from app.models.faculty_assignment import FacultyAssignment


class CRUDFacultyAssignment(CRUDBase[FacultyAssignment, dict, dict]):
    def exists_for_natural_key(
        self, db: Session, *, session_id: str, faculty_name: str, role: str
    ) -> bool:
        return (
            db.query(self.model.id)
            .filter(
                self.model.session_id == session_id,
                self.model.faculty_name == faculty_name,
                self.model.role == role,
            )
            .first()
            is not None
        )

    def get_by_token(self, db: Session, *, token: str) -> Optional[FacultyAssignment]:
        return (
            db.query(self.model).filter(self.model.invitation_token == token).first()
        )

    def get_multi_by_event(
        self, db: Session, *, event_id: str, status: Optional[str] = None
    ) -> List[FacultyAssignment]:
        query = db.query(self.model).filter(self.model.event_id == event_id)
        if status:
            query = query.filter(self.model.status == status)
        return query.order_by(
            self.model.session_date.asc(), self.model.start_time.asc()
        ).all()

    def get_multi_by_ids(
        self, db: Session, *, event_id: str, ids: List[str]
    ) -> List[FacultyAssignment]:
        return (
            db.query(self.model)
            .filter(self.model.event_id == event_id, self.model.id.in_(ids))
            .all()
        )

    def get_for_faculty(
        self,
        db: Session,
        *,
        event_id: str,
        faculty_email: Optional[str],
        faculty_name: str,
    ) -> List[FacultyAssignment]:
        """All of a faculty member's assignments in an event, by email if known."""
        query = db.query(self.model).filter(self.model.event_id == event_id)
        if faculty_email:
            query = query.filter(self.model.faculty_email == faculty_email)
        else:
            query = query.filter(self.model.faculty_name == faculty_name)
        return query.order_by(
            self.model.session_date.asc(), self.model.start_time.asc()
        ).all()


faculty_assignment = CRUDFacultyAssignment(FacultyAssignment)
