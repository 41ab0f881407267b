# app/schemas/session.py
from datetime import date, time
from typing import Optional

from pydantic import BaseModel, Field


class ProgramSessionCreate(BaseModel):
    session_name: str = Field(..., json_schema_extra={"example": "Hernia Masterclass"})
    session_date: Optional[date] = None
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    hall: Optional[str] = None
    specialty_track: Optional[str] = None
    speakers_text: Optional[str] = Field(
        None,
        json_schema_extra={"example": "Dr. A Kumar (a@x.org, +9198xxxx) | Dr. B Singh"},
    )
    chairpersons_text: Optional[str] = None
    moderators_text: Optional[str] = None


class ProgramSession(ProgramSessionCreate):
    id: str
    event_id: str

    model_config = {"from_attributes": True}
