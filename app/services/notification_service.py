# app/services/notification_service.py
"""
Outbound notifications.

Email goes first and its outcome is what callers act on. A WhatsApp template
can ride along; its failures are logged and recorded but never change the
email result. Every attempt on every channel leaves one NotificationLog row.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core import email as email_provider
from app.core.config import settings
from app.core.exceptions import InvalidStateError, NotFoundError, NotificationError
from app.crud import crud_notification_log, crud_registration
from app.schemas.notification import ConfirmationEmailRequest
from app.utils import whatsapp
from app.utils.templating import render_template

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    def __init__(self, db: Session):
        self.db = db

    def dispatch(
        self,
        *,
        notification_type: str,
        to_email: Optional[str],
        subject: str,
        html: str,
        text: Optional[str] = None,
        phone: Optional[str] = None,
        whatsapp_template: Optional[str] = None,
        whatsapp_params: Optional[List[str]] = None,
        event_id: Optional[str] = None,
        registration_id: Optional[str] = None,
        assignment_id: Optional[str] = None,
    ) -> dict:
        """
        Send one notification. The log rows are added to the session but not
        committed; the caller commits them with its own changes.

        Returns:
            {"email": {"success", "id"|"error", "provider"}, "whatsapp_sent": bool | None}
        """
        refs = dict(
            event_id=event_id,
            registration_id=registration_id,
            assignment_id=assignment_id,
            notification_type=notification_type,
        )

        if to_email:
            result = email_provider.send_email(to_email, subject, html, text)
        else:
            result = {"success": False, "error": "No email address", "provider": None}

        crud_notification_log.create_notification_log(
            self.db,
            channel="email",
            status="sent" if result["success"] else "failed",
            recipient=to_email,
            subject=subject,
            body=text or html,
            provider=result.get("provider"),
            external_id=result.get("id"),
            error=result.get("error"),
            commit=False,
            **refs,
        )

        whatsapp_sent = None
        if whatsapp_template:
            if not phone or not whatsapp.is_whatsapp_enabled():
                whatsapp_sent = False
                wa_status = "skipped"
            else:
                whatsapp_sent = whatsapp.send_whatsapp_template(
                    phone, whatsapp_template, whatsapp_params or []
                )
                wa_status = "sent" if whatsapp_sent else "failed"
            crud_notification_log.create_notification_log(
                self.db,
                channel="whatsapp",
                status=wa_status,
                recipient=phone,
                subject=whatsapp_template,
                provider=settings.WHATSAPP_PROVIDER,
                commit=False,
                **refs,
            )

        return {"email": result, "whatsapp_sent": whatsapp_sent}


def send_registration_confirmation(
    db: Session, *, registration_id: str, request: Optional[ConfirmationEmailRequest] = None
) -> dict:
    """
    Emails the attendee their confirmed registration.

    Raises NotificationError when the email could not be sent.
    """
    request = request or ConfirmationEmailRequest()
    registration = crud_registration.registration.get(db, id=registration_id)
    if not registration:
        raise NotFoundError("Registration not found")
    if registration.status != "confirmed":
        raise InvalidStateError(
            f'Cannot send confirmation: Registration status is "{registration.status}"'
        )

    event = registration.event
    variables = {
        "attendee_name": registration.attendee_name,
        "event_name": event.name,
        "registration_number": registration.registration_number,
        "ticket_type": registration.ticket_type.name if registration.ticket_type else "",
        "amount": f"{registration.currency} {float(registration.total_amount or 0):.2f}",
        "venue_name": event.venue_name,
        "organizer_name": settings.EMAIL_FROM_NAME,
    }
    subject = render_template(
        request.subject or email_provider.REGISTRATION_CONFIRMATION_SUBJECT, variables
    )
    html = render_template(
        request.body_html or email_provider.REGISTRATION_CONFIRMATION_HTML, variables
    )

    outcome = NotificationDispatcher(db).dispatch(
        notification_type="registration_confirmation",
        to_email=registration.attendee_email,
        subject=subject,
        html=html,
        phone=registration.attendee_phone,
        whatsapp_template=request.whatsapp_template,
        whatsapp_params=[
            registration.attendee_name,
            event.name,
            registration.registration_number,
        ],
        event_id=registration.event_id,
        registration_id=registration.id,
    )
    db.commit()

    if not outcome["email"]["success"]:
        raise NotificationError(
            "Failed to send confirmation email",
            details=outcome["email"].get("error"),
        )
    logger.info(f"Confirmation sent for registration {registration.registration_number}")
    return outcome
