# app/schemas/notification.py
from typing import Optional

from pydantic import BaseModel


class EmailResult(BaseModel):
    success: bool
    id: Optional[str] = None
    error: Optional[str] = None
    provider: Optional[str] = None


class DispatchResult(BaseModel):
    email: EmailResult
    whatsapp_sent: Optional[bool] = None


class ConfirmationEmailRequest(BaseModel):
    subject: Optional[str] = None
    body_html: Optional[str] = None
    whatsapp_template: Optional[str] = None
