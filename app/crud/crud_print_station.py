# app/crud/crud_print_station.py
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from .base import CRUDBase
from app.models.print_station import PrintStation, default_print_settings
from app.schemas.print_station import PrintStationCreate, PrintStationUpdate
from app.utils.security import generate_station_token


class CRUDPrintStation(CRUDBase[PrintStation, PrintStationCreate, PrintStationUpdate]):
    def get_by_token(self, db: Session, *, token: str) -> Optional[PrintStation]:
        return (
            db.query(self.model)
            .options(joinedload(self.model.badge_template))
            .filter(self.model.access_token == token)
            .first()
        )

    def get_multi_by_event(self, db: Session, *, event_id: str) -> List[PrintStation]:
        return (
            db.query(self.model)
            .options(joinedload(self.model.badge_template))
            .filter(self.model.event_id == event_id)
            .order_by(self.model.created_at.asc())
            .all()
        )

    def create_with_token(
        self, db: Session, *, obj_in: PrintStationCreate, created_by: Optional[str] = None
    ) -> PrintStation:
        data = obj_in.model_dump()
        if not data.get("print_settings"):
            data["print_settings"] = default_print_settings()
        db_obj = self.model(
            **data, access_token=generate_station_token(), created_by=created_by
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def regenerate_token(self, db: Session, *, db_obj: PrintStation) -> PrintStation:
        db_obj.access_token = generate_station_token()
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


print_station = CRUDPrintStation(PrintStation)
