# app/schemas/event.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class EventBase(BaseModel):
    name: str = Field(..., json_schema_extra={"example": "AMASICON 2026"})
    short_name: Optional[str] = Field(None, json_schema_extra={"example": "AMASICON"})
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    venue_name: Optional[str] = None
    registration_open: bool = True


class EventCreate(EventBase):
    pass


class EventUpdate(BaseModel):
    name: Optional[str] = None
    short_name: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    venue_name: Optional[str] = None
    registration_open: Optional[bool] = None


class Event(EventBase):
    id: str
    organization_id: str

    model_config = {"from_attributes": True}
