# app/schemas/ticket_type.py
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TicketStatus(str, Enum):
    active = "active"
    hidden = "hidden"
    soldout = "soldout"
    disabled = "disabled"


class TicketTypeCreate(BaseModel):
    name: str = Field(..., json_schema_extra={"example": "Delegate"})
    description: Optional[str] = None
    price: Decimal = Field(Decimal("0"), ge=0)
    currency: str = Field("INR", min_length=3, max_length=3)
    tax_percentage: Decimal = Field(Decimal("18"), ge=0, le=100)
    quantity_total: Optional[int] = Field(None, ge=0)
    min_per_order: int = Field(1, ge=1)
    max_per_order: int = Field(10, ge=1)
    status: TicketStatus = TicketStatus.active
    requires_approval: bool = False
    sort_order: int = 0


class TicketTypeUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0)
    tax_percentage: Optional[Decimal] = Field(None, ge=0, le=100)
    quantity_total: Optional[int] = Field(None, ge=0)
    min_per_order: Optional[int] = Field(None, ge=1)
    max_per_order: Optional[int] = Field(None, ge=1)
    status: Optional[TicketStatus] = None
    requires_approval: Optional[bool] = None
    sort_order: Optional[int] = None


class TicketType(BaseModel):
    id: str
    event_id: str
    name: str
    description: Optional[str] = None
    price: float
    currency: str
    tax_percentage: float
    quantity_total: Optional[int] = None
    quantity_sold: int
    quantity_available: Optional[int] = None
    min_per_order: int
    max_per_order: int
    status: TicketStatus
    requires_approval: bool
    sort_order: int

    model_config = {"from_attributes": True}
