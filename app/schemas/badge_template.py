# app/schemas/badge_template.py
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class BadgeTemplateCreate(BaseModel):
    event_id: str
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    size: str = "4x3"
    template_image_url: Optional[str] = None
    template_data: Dict[str, Any] = Field(default_factory=dict)
    ticket_type_ids: Optional[List[str]] = None
    is_default: bool = False


class BadgeTemplateUpdate(BaseModel):
    """
    Partial update. Only fields present in the request body are applied;
    `size`, `template_image_url` and `template_data` count as design changes.
    """

    id: str
    event_id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    size: Optional[str] = None
    template_image_url: Optional[str] = None
    template_data: Optional[Dict[str, Any]] = None
    ticket_type_ids: Optional[List[str]] = None
    is_default: Optional[bool] = None
    force_unlock: bool = False


class BadgeGenerationRecord(BaseModel):
    count: int = Field(..., ge=1)
    locked_by: Optional[str] = None


class BadgeTemplate(BaseModel):
    id: str
    event_id: str
    name: str
    description: Optional[str] = None
    size: str
    template_image_url: Optional[str] = None
    template_data: Optional[Dict[str, Any]] = None
    ticket_type_ids: Optional[List[str]] = None
    is_default: bool
    is_locked: bool
    locked_at: Optional[datetime] = None
    locked_by: Optional[str] = None
    badges_generated_count: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class BadgeTemplateSummary(BaseModel):
    id: str
    name: str
    template_data: Optional[Dict[str, Any]] = None

    model_config = {"from_attributes": True}
