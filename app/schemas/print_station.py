# app/schemas/print_station.py
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.schemas.badge_template import BadgeTemplateSummary


class PrintStationCreate(BaseModel):
    event_id: str
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    print_mode: str = "full_badge"
    badge_template_id: Optional[str] = None
    print_settings: Optional[Dict[str, Any]] = None
    allow_reprint: bool = True
    max_reprints: int = Field(3, ge=1)
    auto_print: bool = False
    require_checkin: bool = False
    ticket_type_ids: Optional[List[str]] = None
    token_expires_at: Optional[datetime] = None


class PrintStationUpdate(BaseModel):
    # access_token and audit columns are deliberately absent: they cannot be
    # changed through an update.
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    print_mode: Optional[str] = None
    badge_template_id: Optional[str] = None
    print_settings: Optional[Dict[str, Any]] = None
    allow_reprint: Optional[bool] = None
    max_reprints: Optional[int] = Field(None, ge=1)
    auto_print: Optional[bool] = None
    require_checkin: Optional[bool] = None
    ticket_type_ids: Optional[List[str]] = None
    token_expires_at: Optional[datetime] = None
    is_active: Optional[bool] = None

    model_config = {"extra": "ignore"}


class PrintStationAction(BaseModel):
    id: str
    action: str = Field(..., json_schema_extra={"example": "regenerate_token"})


class PrintStation(BaseModel):
    id: str
    event_id: str
    name: str
    description: Optional[str] = None
    print_mode: str
    badge_template_id: Optional[str] = None
    print_settings: Optional[Dict[str, Any]] = None
    allow_reprint: bool
    max_reprints: int
    auto_print: bool
    require_checkin: bool
    ticket_type_ids: Optional[List[str]] = None
    access_token: str
    token_expires_at: Optional[datetime] = None
    is_active: bool
    badge_template: Optional[BadgeTemplateSummary] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class PrintStationStats(BaseModel):
    totalPrints: int
    uniquePrints: int
    totalRegistrations: int
    progress: int


class PrintStationWithStats(PrintStation):
    stats: PrintStationStats


class PrintRequest(BaseModel):
    print_station_id: Optional[str] = None
    token: Optional[str] = None
    registration_id: Optional[str] = None
    registration_number: Optional[str] = None
    device_info: Optional[Dict[str, Any]] = None


class PrintJob(BaseModel):
    id: str
    print_station_id: str
    registration_id: str
    print_number: int
    status: str
    printed_at: Optional[datetime] = None
    device_info: Optional[Dict[str, Any]] = None

    model_config = {"from_attributes": True}


class PrintedRegistration(BaseModel):
    id: str
    registration_number: str
    attendee_name: str
    attendee_email: str
    attendee_phone: Optional[str] = None
    attendee_institution: Optional[str] = None
    attendee_designation: Optional[str] = None
    ticket_type_id: str
    ticket_type: Optional[str] = None
    status: str


class StationPrintSettings(BaseModel):
    id: str
    name: str
    print_mode: str
    print_settings: Optional[Dict[str, Any]] = None
    auto_print: bool


class PrintResponse(BaseModel):
    success: bool = True
    print_job: PrintJob
    print_number: int
    is_reprint: bool
    registration: PrintedRegistration
    station: StationPrintSettings
    badge_template: Optional[BadgeTemplateSummary] = None
