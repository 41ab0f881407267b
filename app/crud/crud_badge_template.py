# app/crud/crud_badge_template.py
from typing import List, Optional

from sqlalchemy.orm import Session

from .base import CRUDBase
from app.models.badge_template import BadgeTemplate
from app.schemas.badge_template import BadgeTemplateCreate, BadgeTemplateUpdate


class CRUDBadgeTemplate(
    CRUDBase[BadgeTemplate, BadgeTemplateCreate, BadgeTemplateUpdate]
):
    def get_multi_by_event(self, db: Session, *, event_id: str) -> List[BadgeTemplate]:
        return (
            db.query(self.model)
            .filter(self.model.event_id == event_id)
            .order_by(self.model.is_default.desc(), self.model.created_at.desc())
            .all()
        )

    def clear_default(
        self, db: Session, *, event_id: str, exclude_id: Optional[str] = None
    ) -> None:
        """
        Unsets is_default on the event's templates. Does not commit; the caller
        commits together with the write that sets the new default.
        """
        query = db.query(self.model).filter(
            self.model.event_id == event_id, self.model.is_default == True
        )
        if exclude_id:
            query = query.filter(self.model.id != exclude_id)
        query.update({self.model.is_default: False}, synchronize_session="fetch")


badge_template = CRUDBadgeTemplate(BadgeTemplate)
