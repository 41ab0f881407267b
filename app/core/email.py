# app/core/email.py
"""
Email sending for transactional mail.

The provider is picked from configuration: Resend when RESEND_API_KEY is set,
otherwise Blastable when BLASTABLE_API_KEY is set. With neither, email is
disabled and every send reports failure.
"""
import logging
from typing import List, Optional, Union

import httpx
import resend

from app.core.config import settings

logger = logging.getLogger(__name__)


def is_email_enabled() -> bool:
    return settings.EMAIL_PROVIDER is not None


def init_resend():
    """Initialize Resend with API key."""
    resend.api_key = settings.RESEND_API_KEY


def _from_header() -> str:
    return f"{settings.EMAIL_FROM_NAME} <{settings.EMAIL_FROM_ADDRESS}>"


def _send_via_resend(
    to: List[str], subject: str, html: str, text: Optional[str]
) -> dict:
    init_resend()
    params = {
        "from": _from_header(),
        "to": to,
        "subject": subject,
        "html": html,
    }
    if text:
        params["text"] = text
    response = resend.Emails.send(params)
    return {"success": True, "id": response.get("id"), "provider": "resend"}


def _send_via_blastable(
    to: List[str], subject: str, html: str, text: Optional[str]
) -> dict:
    payload = {
        "from": {"name": settings.EMAIL_FROM_NAME, "email": settings.EMAIL_FROM_ADDRESS},
        "to": [{"email": address} for address in to],
        "subject": subject,
        "html": html,
        "text": text or "",
    }
    with httpx.Client(timeout=15.0) as client:
        response = client.post(
            settings.BLASTABLE_API_URL,
            json=payload,
            headers={"Authorization": f"Bearer {settings.BLASTABLE_API_KEY}"},
        )
    if response.status_code >= 400:
        return {
            "success": False,
            "error": f"Blastable returned HTTP {response.status_code}",
            "provider": "blastable",
        }
    body = response.json() if response.content else {}
    return {
        "success": True,
        "id": body.get("id") or body.get("message_id"),
        "provider": "blastable",
    }


def send_email(
    to: Union[str, List[str]],
    subject: str,
    html: str,
    text: Optional[str] = None,
) -> dict:
    """
    Send one email through the configured provider.

    Returns:
        {"success": True, "id": ..., "provider": ...} or
        {"success": False, "error": ..., "provider": ...}. Never raises.
    """
    recipients = [to] if isinstance(to, str) else list(to)
    provider = settings.EMAIL_PROVIDER

    if provider is None:
        logger.warning(f"No email provider configured, email to {recipients} not sent")
        return {"success": False, "error": "No email provider configured", "provider": None}

    try:
        if provider == "resend":
            result = _send_via_resend(recipients, subject, html, text)
        else:
            result = _send_via_blastable(recipients, subject, html, text)
    except Exception as e:
        logger.error(f"[EMAIL ERROR] Failed to send email to {recipients}: {e}")
        return {"success": False, "error": str(e), "provider": provider}

    if result["success"]:
        logger.info(f"[EMAIL] '{subject}' sent to {recipients} via {provider}")
    else:
        logger.error(f"[EMAIL ERROR] '{subject}' to {recipients}: {result.get('error')}")
    return result


REGISTRATION_CONFIRMATION_SUBJECT = "Registration Confirmed: {{event_name}}"

REGISTRATION_CONFIRMATION_HTML = """
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <style>
        body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
        .container { max-width: 600px; margin: 0 auto; padding: 20px; }
        .header { background: #1f3c88; color: white; padding: 30px; text-align: center; border-radius: 10px 10px 0 0; }
        .content { background: #f9f9f9; padding: 30px; border-radius: 0 0 10px 10px; }
        .ticket-box { background: white; border: 2px dashed #1f3c88; padding: 20px; text-align: center; margin: 20px 0; border-radius: 8px; }
        .ticket-code { font-size: 28px; font-weight: bold; color: #1f3c88; letter-spacing: 3px; }
        .footer { text-align: center; color: #888; font-size: 12px; margin-top: 20px; }
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>You're Registered!</h1>
        </div>
        <div class="content">
            <p>Hi {{attendee_name}},</p>
            <p>Your registration for <strong>{{event_name}}</strong> has been confirmed.</p>

            <div class="ticket-box">
                <p style="margin: 0 0 10px 0; color: #666;">Registration Number</p>
                <div class="ticket-code">{{registration_number}}</div>
                <p style="margin: 10px 0 0 0; font-size: 12px; color: #888;">Present this number at the registration desk</p>
            </div>

            <p><strong>Ticket:</strong> {{ticket_type}}</p>
            <p><strong>Amount:</strong> {{amount}}</p>
            <p><strong>Venue:</strong> {{venue_name}}</p>

            <p>Best regards,<br>{{organizer_name}}</p>
        </div>
        <div class="footer">
            <p>&copy; {{year}} {{organizer_name}}</p>
        </div>
    </div>
</body>
</html>
"""
