# app/utils/whatsapp.py
"""
WhatsApp template messages via the Meta Cloud API or Twilio.
Failures are logged and reported as False; they never block the caller.
"""
import json
import logging
from typing import List, Optional

import httpx

from app.core.config import settings

logger = logging.getLogger(__name__)

META_GRAPH_URL = "https://graph.facebook.com/v18.0"
TWILIO_API_URL = "https://api.twilio.com/2010-04-01"


def is_whatsapp_enabled() -> bool:
    provider = settings.WHATSAPP_PROVIDER
    if provider == "meta":
        return bool(settings.WHATSAPP_PHONE_NUMBER_ID and settings.WHATSAPP_ACCESS_TOKEN)
    if provider == "twilio":
        return bool(
            settings.TWILIO_ACCOUNT_SID
            and settings.TWILIO_AUTH_TOKEN
            and settings.TWILIO_WHATSAPP_NUMBER
        )
    return False


def send_whatsapp_template(
    phone_number: str,
    template_name: str,
    template_params: List[str],
    *,
    language: Optional[str] = None,
) -> bool:
    """
    Send a WhatsApp template message.

    Args:
        phone_number: Recipient phone number (international format, e.g. +91...)
        template_name: Approved template name at the provider
        template_params: Ordered list of template variable values
        language: Template language code, defaults to WHATSAPP_TEMPLATE_LANGUAGE

    Returns:
        True if the provider accepted the message, False otherwise
    """
    if not phone_number:
        logger.debug("No phone number provided, skipping WhatsApp")
        return False

    if not is_whatsapp_enabled():
        logger.debug("WhatsApp provider not configured, skipping")
        return False

    try:
        if settings.WHATSAPP_PROVIDER == "meta":
            _send_via_meta(phone_number, template_name, template_params, language)
        else:
            _send_via_twilio(phone_number, template_name, template_params)
        logger.info(
            f"WhatsApp sent via {settings.WHATSAPP_PROVIDER}: to={phone_number}, "
            f"template={template_name}"
        )
        return True
    except httpx.TimeoutException:
        logger.error(f"Timeout sending WhatsApp to {phone_number}")
        return False
    except Exception as e:
        logger.error(f"Failed to send WhatsApp to {phone_number}: {e}", exc_info=True)
        return False


def _send_via_meta(
    phone_number: str,
    template_name: str,
    template_params: List[str],
    language: Optional[str],
) -> None:
    body = {
        "messaging_product": "whatsapp",
        # Meta wants the number without the leading '+'
        "to": phone_number.lstrip("+"),
        "type": "template",
        "template": {
            "name": template_name,
            "language": {"code": language or settings.WHATSAPP_TEMPLATE_LANGUAGE},
        },
    }
    if template_params:
        body["template"]["components"] = [
            {
                "type": "body",
                "parameters": [{"type": "text", "text": str(p)} for p in template_params],
            }
        ]

    with httpx.Client(timeout=10.0) as client:
        response = client.post(
            f"{META_GRAPH_URL}/{settings.WHATSAPP_PHONE_NUMBER_ID}/messages",
            json=body,
            headers={"Authorization": f"Bearer {settings.WHATSAPP_ACCESS_TOKEN}"},
        )
        response.raise_for_status()


def _send_via_twilio(
    phone_number: str, template_name: str, template_params: List[str]
) -> None:
    to = phone_number if phone_number.startswith("+") else f"+{phone_number}"
    # Twilio addresses approved templates by Content SID
    data = {
        "From": f"whatsapp:{settings.TWILIO_WHATSAPP_NUMBER}",
        "To": f"whatsapp:{to}",
        "ContentSid": template_name,
    }
    if template_params:
        data["ContentVariables"] = json.dumps(
            {str(i): str(p) for i, p in enumerate(template_params, start=1)}
        )

    with httpx.Client(timeout=10.0) as client:
        response = client.post(
            f"{TWILIO_API_URL}/Accounts/{settings.TWILIO_ACCOUNT_SID}/Messages.json",
            data=data,
            auth=(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN),
        )
        response.raise_for_status()
