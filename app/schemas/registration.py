# app/schemas/registration.py
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, EmailStr, Field


class RegistrationStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    refunded = "refunded"


class PaymentMethod(str, Enum):
    free = "free"
    cash = "cash"
    bank_transfer = "bank_transfer"
    razorpay = "razorpay"


class RegistrationSource(str, Enum):
    web = "web"
    admin = "admin"
    import_ = "import"


class RegistrationCreate(BaseModel):
    ticket_type_id: str
    attendee_name: str = Field(..., min_length=1, json_schema_extra={"example": "Dr. Asha Rao"})
    attendee_email: EmailStr
    attendee_phone: Optional[str] = None
    attendee_institution: Optional[str] = None
    attendee_designation: Optional[str] = None
    attendee_city: Optional[str] = None
    attendee_country: Optional[str] = None
    quantity: int = Field(1, ge=1)
    payment_method: PaymentMethod = PaymentMethod.free
    source: RegistrationSource = RegistrationSource.web
    custom_fields: Optional[Dict[str, Any]] = None


class RegistrationTransferRequest(BaseModel):
    new_event_id: str = Field(..., min_length=1)
    new_ticket_type_id: str = Field(..., min_length=1)
    notes: Optional[str] = None


class RegistrationCancelRequest(BaseModel):
    refund: bool = False
    notes: Optional[str] = None


class BulkDeleteRequest(BaseModel):
    registration_ids: List[str] = Field(..., min_length=1)


class Registration(BaseModel):
    id: str
    event_id: str
    ticket_type_id: str
    registration_number: str
    attendee_name: str
    attendee_email: str
    attendee_phone: Optional[str] = None
    attendee_institution: Optional[str] = None
    attendee_designation: Optional[str] = None
    attendee_city: Optional[str] = None
    attendee_country: Optional[str] = None
    quantity: int
    unit_price: float
    tax_amount: float
    discount_amount: float
    total_amount: float
    currency: str
    status: RegistrationStatus
    payment_method: str
    source: str
    checked_in: bool
    checked_in_at: Optional[datetime] = None
    confirmed_at: Optional[datetime] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class TransferSummary(BaseModel):
    fromEvent: str
    toEvent: str
    fromTicket: str
    toTicket: str
    newRegistrationNumber: str


class PriceChange(BaseModel):
    oldPrice: float
    newPrice: float
    difference: float


class RegistrationTransferResponse(BaseModel):
    success: bool = True
    message: str
    data: Registration
    transfer: TransferSummary
    priceChange: PriceChange


class BulkDeleteResponse(BaseModel):
    deleted: int
    skipped: List[str]
